# src/nlcompiler/core/ir.py
"""
IR generation: semantic graph → node/edge graph.

Nodes: one per entity, then one per action, ids 0, 1, 2, ...
Edges:
  dependency relationship  → edge typed by the relation, endpoints by label
  action relationship      → subject -performs-> action -affects-> object(s)

When a label occurs on several nodes, the first node wins. Edges whose
endpoints have no node are dropped.
"""

from nlcompiler.core.models import (
    ActionRelationship,
    Edge,
    IRGraph,
    Node,
    SemanticGraph,
)


AFFECTS_CONFIDENCE = 0.75


class NodeIndex:
    """First-seen node id per label, and per (label, kind)."""

    def __init__(self):
        self.by_label: dict[str, int] = {}
        self.by_key: dict[tuple[str, str], int] = {}

    def add(self, node: Node) -> None:
        self.by_label.setdefault(node.label, node.id)
        self.by_key.setdefault((node.label, node.kind), node.id)

    def label(self, label: str) -> int | None:
        return self.by_label.get(label)

    def get(self, label: str, kind: str) -> int | None:
        return self.by_key.get((label, kind))


def build_ir(graph: SemanticGraph) -> IRGraph:
    ir = IRGraph(intent=graph.intent)
    index = NodeIndex()

    def add_node(kind: str, label: str, properties: dict) -> None:
        node = Node(id=len(ir.nodes), kind=kind, label=label, properties=properties)
        ir.nodes.append(node)
        index.add(node)

    for entity in graph.entities:
        add_node("entity", entity.name, {
            "role": entity.role,
            "pos": entity.pos,
            "definition": entity.definition,
            "clause": entity.clause,
            "confidence": entity.confidence,
        })

    for action in graph.actions:
        add_node("action", action.verb, {
            "definition": action.definition,
            "actor": action.actor,
            "clause": action.clause,
            "confidence": action.confidence,
        })

    for rel in graph.relationships:
        if isinstance(rel, ActionRelationship):
            subject_id = index.get(rel.subject, "entity")
            action_id = index.get(rel.action, "action")
            if subject_id is not None and action_id is not None:
                ir.edges.append(Edge(subject_id, action_id, "performs", rel.confidence))
            if action_id is None:
                continue
            for obj in rel.objects:
                obj_id = index.get(obj, "entity")
                if obj_id is not None:
                    ir.edges.append(Edge(action_id, obj_id, "affects", AFFECTS_CONFIDENCE))
        else:
            head_id = index.label(rel.head)
            dep_id = index.label(rel.dependent)
            if head_id is not None and dep_id is not None:
                ir.edges.append(Edge(head_id, dep_id, rel.relation, rel.confidence))

    return ir
