"""
Syntax layer - intent, clauses, dependencies.
"""

from nlcompiler.core.layers import Layer, LayerResult, register_layer
from nlcompiler.core.models import ParseTree
from nlcompiler.core.syntax import build_parse_tree


class SyntaxLayer(Layer):
    id = "syntax"
    name = "Syntax Analysis"
    depends_on = ["lexical"]
    ext = ".syn"

    def process(self, inputs: dict, context: dict) -> LayerResult:
        tokens = inputs["lexical"]
        tree = build_parse_tree(tokens)

        return LayerResult(
            True,
            tree,
            f"Intent: {tree.intent.type} ({tree.intent.confidence * 100:.1f}% confidence) | "
            f"{len(tree.clauses)} clause(s) | {len(tree.dependencies)} dependencies",
        )

    def format_dsl(self, data: ParseTree) -> str:
        """
        intent: statement (0.8)
        [0] subj=dog pred=is obj=- mod=very
        nsubj(dog, is) 0.9
        """
        lines = [f"intent: {data.intent.type} ({data.intent.confidence})"]

        for i, c in enumerate(data.clauses):
            subj = c.subject.word if c.subject else "-"
            pred = c.predicate.word if c.predicate else "-"
            objs = ",".join(o.word for o in c.objects) or "-"
            mods = ",".join(m.word for m in c.modifiers) or "-"
            lines.append(f"[{i}] subj={subj} pred={pred} obj={objs} mod={mods}")

        for d in data.dependencies:
            suffix = f" ({d.conj_type})" if d.conj_type else ""
            lines.append(f"{d.relation}({d.head}, {d.dependent}) {d.confidence}{suffix}")

        return "\n".join(lines)


register_layer(SyntaxLayer())
