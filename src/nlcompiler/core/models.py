# src/nlcompiler/core/models.py
"""
Data model shared by the compiler phases.

Lexical:  DictionaryEntry, Token
Syntax:   Dependency, Slot, Clause, Intent, ParseTree
Semantic: Entity, Action, relationships, SemanticGraph
IR:       Node, Edge, IRGraph, OptimizedGraph

Everything here is created fresh per compilation. `to_dict()` produces the
shape used in the output document.
"""

from dataclasses import dataclass, field
from typing import Any


NO_DEFINITION = "No definition available"


# === Lexical ===

@dataclass
class Definition:
    definition: str
    example: str = ""


@dataclass
class Meaning:
    part_of_speech: str
    definitions: list[Definition] = field(default_factory=list)
    synonyms: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "partOfSpeech": self.part_of_speech,
            "definitions": [
                {"definition": d.definition, "example": d.example}
                for d in self.definitions
            ],
            "synonyms": list(self.synonyms),
        }


@dataclass
class DictionaryEntry:
    word: str
    phonetic: str = ""
    meanings: list[Meaning] = field(default_factory=list)
    origin: str = ""

    @property
    def first_part_of_speech(self) -> str | None:
        if not self.meanings:
            return None
        return self.meanings[0].part_of_speech

    @property
    def first_definition(self) -> str | None:
        if not self.meanings or not self.meanings[0].definitions:
            return None
        return self.meanings[0].definitions[0].definition

    @property
    def first_synonyms(self) -> list[str]:
        if not self.meanings:
            return []
        return list(self.meanings[0].synonyms)

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "phonetic": self.phonetic,
            "meanings": [m.to_dict() for m in self.meanings],
            "origin": self.origin,
        }


@dataclass(frozen=True)
class Token:
    index: int
    text: str
    lowercase: str
    pos: str
    entry: DictionaryEntry | None = None
    definition: str = NO_DEFINITION
    synonyms: tuple[str, ...] = ()

    @property
    def has_entry(self) -> bool:
        return self.entry is not None

    def to_dict(self) -> dict:
        return {
            "id": self.index,
            "text": self.text,
            "lowercase": self.lowercase,
            "pos": self.pos,
            "dictionaryEntry": self.entry.to_dict() if self.entry else None,
            "definition": self.definition,
            "synonyms": list(self.synonyms),
            "hasDictEntry": self.has_entry,
        }

    def to_summary(self) -> dict:
        """Simplified form used in the output document."""
        return {
            "word": self.text,
            "pos": self.pos,
            "definition": self.definition,
            "synonyms": list(self.synonyms),
        }


# === Syntax ===

@dataclass
class Dependency:
    head: str
    dependent: str
    relation: str  # nsubj | dobj | amod | conj
    confidence: float
    conj_type: str | None = None  # the conjunction itself, conj only

    def to_dict(self) -> dict:
        d = {
            "head": self.head,
            "dependent": self.dependent,
            "relation": self.relation,
            "confidence": self.confidence,
        }
        if self.conj_type is not None:
            d["type"] = self.conj_type
        return d


@dataclass
class Slot:
    word: str
    pos: str
    position: int
    definition: str = NO_DEFINITION

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "type": self.pos,
            "position": self.position,
            "definition": self.definition,
        }


@dataclass
class Clause:
    subject: Slot | None = None
    predicate: Slot | None = None
    objects: list[Slot] = field(default_factory=list)
    modifiers: list[Slot] = field(default_factory=list)
    complements: list[Slot] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return (
            self.subject is None
            and self.predicate is None
            and not self.objects
            and not self.modifiers
        )

    def to_dict(self) -> dict:
        return {
            "subject": self.subject.to_dict() if self.subject else None,
            "predicate": self.predicate.to_dict() if self.predicate else None,
            "objects": [o.to_dict() for o in self.objects],
            "modifiers": [m.to_dict() for m in self.modifiers],
            "complements": [c.to_dict() for c in self.complements],
        }


@dataclass
class Intent:
    type: str  # math_operation | question | command | statement | unknown
    confidence: float
    operation: str | None = None
    subtype: str | None = None
    action: str | None = None

    def to_dict(self) -> dict:
        d = {"type": self.type}
        for key in ("operation", "subtype", "action"):
            value = getattr(self, key)
            if value is not None:
                d[key] = value
        d["confidence"] = self.confidence
        return d


@dataclass
class ParseTree:
    intent: Intent
    clauses: list[Clause] = field(default_factory=list)
    dependencies: list[Dependency] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "type": "SENTENCE",
            "intent": self.intent.to_dict(),
            "clauses": [c.to_dict() for c in self.clauses],
            "dependencies": [d.to_dict() for d in self.dependencies],
        }


# === Semantic ===

@dataclass
class Entity:
    name: str
    role: str  # subject | object
    pos: str
    definition: str
    clause: int
    confidence: float

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "role": self.role,
            "type": self.pos,
            "definition": self.definition,
            "clause": self.clause,
            "confidence": self.confidence,
        }


@dataclass
class Action:
    verb: str
    definition: str
    actor: str
    clause: int
    confidence: float

    def to_dict(self) -> dict:
        return {
            "action": self.verb,
            "definition": self.definition,
            "actor": self.actor,
            "clause": self.clause,
            "confidence": self.confidence,
        }


@dataclass
class ActionRelationship:
    """subject → action → objects, one per clause with subject and predicate."""
    subject: str
    action: str
    objects: list[str]
    clause: int
    confidence: float

    def to_dict(self) -> dict:
        return {
            "type": "action",
            "subject": self.subject,
            "action": self.action,
            "objects": list(self.objects),
            "clause": self.clause,
            "confidence": self.confidence,
        }


@dataclass
class DependencyRelationship:
    """A Dependency projected into the semantic layer."""
    relation: str
    head: str
    dependent: str
    confidence: float

    def to_dict(self) -> dict:
        return {
            "type": "dependency",
            "relation": self.relation,
            "head": self.head,
            "dependent": self.dependent,
            "confidence": self.confidence,
        }


Relationship = ActionRelationship | DependencyRelationship


@dataclass
class ContextReference:
    pronoun: str
    refers_to: str
    confidence: float

    def to_dict(self) -> dict:
        return {
            "pronoun": self.pronoun,
            "refers_to": self.refers_to,
            "confidence": self.confidence,
        }


@dataclass
class SemanticGraph:
    sentence_type: str
    intent: Intent
    entities: list[Entity] = field(default_factory=list)
    actions: list[Action] = field(default_factory=list)
    relationships: list[Relationship] = field(default_factory=list)
    context_references: list[ContextReference] = field(default_factory=list)
    overall_confidence: float = 0.5
    pos_accuracy: float = 0.0

    @property
    def main_subject(self) -> str | None:
        for e in self.entities:
            if e.role == "subject":
                return e.name
        return None

    @property
    def main_action(self) -> str | None:
        return self.actions[0].verb if self.actions else None

    def to_dict(self) -> dict:
        return {
            "sentence_type": self.sentence_type,
            "intent": self.intent.to_dict(),
            "entities": [e.to_dict() for e in self.entities],
            "actions": [a.to_dict() for a in self.actions],
            "relationships": [r.to_dict() for r in self.relationships],
            "context_references": [c.to_dict() for c in self.context_references],
            "confidence_scores": {
                "overall": self.overall_confidence,
                "pos_accuracy": self.pos_accuracy,
            },
        }


# === IR ===

@dataclass
class Node:
    id: int
    kind: str  # entity | action
    label: str
    properties: dict[str, Any] = field(default_factory=dict)

    @property
    def confidence(self) -> float:
        return self.properties.get("confidence", 0.0)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.kind,
            "label": self.label,
            "properties": dict(self.properties),
        }


@dataclass
class Edge:
    source: int
    target: int
    relation: str
    confidence: float

    def to_dict(self) -> dict:
        return {
            "from": self.source,
            "to": self.target,
            "type": self.relation,
            "confidence": self.confidence,
        }


@dataclass
class IRGraph:
    intent: Intent
    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    format: str = "JSON-IR"
    version: str = "2.0"

    def to_dict(self) -> dict:
        return {
            "format": self.format,
            "version": self.version,
            "intent": self.intent.to_dict(),
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


@dataclass
class OptimizationStats:
    nodes_before: int
    nodes_after: int
    edges_before: int
    edges_after: int
    reduction_percentage: float

    def to_dict(self) -> dict:
        return {
            "nodes_before": self.nodes_before,
            "nodes_after": self.nodes_after,
            "edges_before": self.edges_before,
            "edges_after": self.edges_after,
            "reduction_percentage": self.reduction_percentage,
        }


@dataclass
class OptimizedGraph(IRGraph):
    optimizations_applied: list[str] = field(default_factory=list)
    optimization_stats: OptimizationStats | None = None

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["optimizations_applied"] = list(self.optimizations_applied)
        d["optimization_stats"] = (
            self.optimization_stats.to_dict() if self.optimization_stats else None
        )
        return d
