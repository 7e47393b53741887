# src/nlcompiler/core/semantics.py
"""
Semantic graph construction.

Clauses become entities, actions and relationships. Third-person pronoun
subjects are resolved against the most recent context memory entry.

Confidence values are fixed per kind of item and split by whether the
underlying token had a dictionary entry: (with entry, without entry).
"""

import logging

from nlcompiler.core.memory import ContextEntry, ContextMemory
from nlcompiler.core.models import (
    Action,
    ActionRelationship,
    ContextReference,
    DependencyRelationship,
    Entity,
    ParseTree,
    SemanticGraph,
    Slot,
    Token,
)


logger = logging.getLogger(__name__)

SUBJECT_CONFIDENCE = (0.9, 0.6)
ACTION_CONFIDENCE = (0.85, 0.5)
OBJECT_CONFIDENCE = (0.8, 0.5)
RELATIONSHIP_CONFIDENCE = 0.8
RESOLVED_REFERENCE_CONFIDENCE = 0.7
UNRESOLVED_REFERENCE_CONFIDENCE = 0.3
DEFAULT_OVERALL_CONFIDENCE = 0.5

REFERRING_PRONOUNS = frozenset({"he", "she", "it", "they", "him", "her", "them"})


def _confidence(slot: Slot, tokens: list[Token], pair: tuple[float, float]) -> float:
    hit = 0 <= slot.position < len(tokens) and tokens[slot.position].has_entry
    return pair[0] if hit else pair[1]


def resolve_reference(pronoun: str, memory: ContextMemory) -> ContextReference:
    last = memory.last()
    # an entry without a subject (e.g. from empty input) leaves the pronoun unresolved
    if last is not None and last.subject:
        return ContextReference(pronoun, last.subject, RESOLVED_REFERENCE_CONFIDENCE)
    return ContextReference(pronoun, "unknown", UNRESOLVED_REFERENCE_CONFIDENCE)


def build_semantic_graph(tree: ParseTree, tokens: list[Token], memory: ContextMemory) -> SemanticGraph:
    graph = SemanticGraph(sentence_type=tree.intent.type, intent=tree.intent)
    scored = []  # action and object confidences; subjects are not averaged

    for idx, clause in enumerate(tree.clauses):
        subject = clause.subject
        predicate = clause.predicate

        if subject:
            graph.entities.append(Entity(
                name=subject.word,
                role="subject",
                pos=subject.pos,
                definition=subject.definition,
                clause=idx,
                confidence=_confidence(subject, tokens, SUBJECT_CONFIDENCE),
            ))
            if subject.word.lower() in REFERRING_PRONOUNS:
                ref = resolve_reference(subject.word, memory)
                logger.debug(f"'{ref.pronoun}' refers to '{ref.refers_to}' ({ref.confidence})")
                graph.context_references.append(ref)

        if predicate:
            conf = _confidence(predicate, tokens, ACTION_CONFIDENCE)
            graph.actions.append(Action(
                verb=predicate.word,
                definition=predicate.definition,
                actor=subject.word if subject else "unknown",
                clause=idx,
                confidence=conf,
            ))
            scored.append(conf)

        for obj in clause.objects:
            conf = _confidence(obj, tokens, OBJECT_CONFIDENCE)
            graph.entities.append(Entity(
                name=obj.word,
                role="object",
                pos=obj.pos,
                definition=obj.definition,
                clause=idx,
                confidence=conf,
            ))
            scored.append(conf)

        if subject and predicate:
            graph.relationships.append(ActionRelationship(
                subject=subject.word,
                action=predicate.word,
                objects=[o.word for o in clause.objects],
                clause=idx,
                confidence=RELATIONSHIP_CONFIDENCE,
            ))

    for dep in tree.dependencies:
        graph.relationships.append(DependencyRelationship(
            relation=dep.relation,
            head=dep.head,
            dependent=dep.dependent,
            confidence=dep.confidence,
        ))

    graph.overall_confidence = sum(scored) / len(scored) if scored else DEFAULT_OVERALL_CONFIDENCE
    hits = sum(1 for t in tokens if t.has_entry)
    graph.pos_accuracy = hits / len(tokens) if tokens else 0.0

    return graph


def context_entry_for(graph: SemanticGraph) -> ContextEntry:
    """The entry appended to context memory after a successful compilation."""
    return ContextEntry(subject=graph.main_subject, action=graph.main_action)
