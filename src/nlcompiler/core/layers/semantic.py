"""
Semantic layer - entities, actions, relationships, context references.
"""

from nlcompiler.core.layers import Layer, LayerResult, register_layer
from nlcompiler.core.memory import ContextMemory
from nlcompiler.core.models import ActionRelationship, SemanticGraph
from nlcompiler.core.semantics import build_semantic_graph


class SemanticLayer(Layer):
    id = "semantic"
    name = "Semantic Analysis"
    depends_on = ["lexical", "syntax"]
    ext = ".sem"

    def process(self, inputs: dict, context: dict) -> LayerResult:
        session = context.get("session")
        memory = session.memory if session else ContextMemory()

        graph = build_semantic_graph(inputs["syntax"], inputs["lexical"], memory)

        return LayerResult(
            True,
            graph,
            f"{len(graph.entities)} entities | {len(graph.actions)} actions | "
            f"{len(graph.relationships)} relationships | "
            f"Confidence: {graph.overall_confidence * 100:.1f}%",
        )

    def format_dsl(self, data: SemanticGraph) -> str:
        """
        # entities
        dog : subject @ 0 (0.6)
        # actions
        runs by dog @ 0 (0.5)
        # relationships
        dog -runs-> [] (0.8)
        nsubj(dog, runs) (0.9)
        # references
        he → Mark (0.7)
        """
        lines = ["# entities"]
        for e in data.entities:
            lines.append(f"{e.name} : {e.role} @ {e.clause} ({e.confidence})")

        lines.append("# actions")
        for a in data.actions:
            lines.append(f"{a.verb} by {a.actor} @ {a.clause} ({a.confidence})")

        lines.append("# relationships")
        for r in data.relationships:
            if isinstance(r, ActionRelationship):
                lines.append(f"{r.subject} -{r.action}-> [{', '.join(r.objects)}] ({r.confidence})")
            else:
                lines.append(f"{r.relation}({r.head}, {r.dependent}) ({r.confidence})")

        if data.context_references:
            lines.append("# references")
            for c in data.context_references:
                lines.append(f"{c.pronoun} → {c.refers_to} ({c.confidence})")

        lines.append(f"# confidence overall={data.overall_confidence:.3f} pos_accuracy={data.pos_accuracy:.3f}")
        return "\n".join(lines)


register_layer(SemanticLayer())
