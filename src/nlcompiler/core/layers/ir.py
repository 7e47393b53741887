"""
IR layer - node/edge knowledge graph.
"""

from nlcompiler.core.ir import build_ir
from nlcompiler.core.layers import Layer, LayerResult, register_layer
from nlcompiler.core.models import IRGraph


def format_graph(graph: IRGraph) -> list[str]:
    lines = []
    for n in graph.nodes:
        lines.append(f"{n.id}: {n.label} [{n.kind}]")
    labels = {n.id: n.label for n in graph.nodes}
    for e in graph.edges:
        src = labels.get(e.source, e.source)
        dst = labels.get(e.target, e.target)
        lines.append(f"{src} -{e.relation}-> {dst} ({e.confidence})")
    return lines


class IRLayer(Layer):
    id = "ir"
    name = "IR Generation"
    depends_on = ["semantic"]
    ext = ".ir"

    def process(self, inputs: dict, context: dict) -> LayerResult:
        ir = build_ir(inputs["semantic"])

        return LayerResult(
            True,
            ir,
            f"Generated IR v{ir.version} | {len(ir.nodes)} nodes | {len(ir.edges)} edges",
        )

    def format_dsl(self, data: IRGraph) -> str:
        """
        0: dog [entity]
        1: runs [action]
        dog -performs-> runs (0.8)
        """
        lines = format_graph(data)
        return "\n".join(lines) if lines else "# empty graph"


register_layer(IRLayer())
