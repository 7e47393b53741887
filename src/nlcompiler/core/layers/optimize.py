"""
Optimize layer - dedup and confidence pruning of the IR graph.
"""

from nlcompiler.core.layers import Layer, LayerResult, register_layer
from nlcompiler.core.layers.ir import format_graph
from nlcompiler.core.models import OptimizedGraph
from nlcompiler.core.optimizer import optimize


class OptimizeLayer(Layer):
    id = "optimize"
    name = "Optimization"
    depends_on = ["ir"]
    ext = ".opt"

    def process(self, inputs: dict, context: dict) -> LayerResult:
        optimized = optimize(inputs["ir"])
        stats = optimized.optimization_stats

        return LayerResult(
            True,
            optimized,
            f"{len(optimized.optimizations_applied)} optimizations | "
            f"Reduced {stats.reduction_percentage:.2f}% | {stats.nodes_after} nodes final",
        )

    def format_dsl(self, data: OptimizedGraph) -> str:
        lines = format_graph(data)
        for entry in data.optimizations_applied:
            lines.append(f"# {entry}")
        return "\n".join(lines) if lines else "# empty graph"


register_layer(OptimizeLayer())
