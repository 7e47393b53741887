# src/nlcompiler/core/syntax.py
"""
Clause construction.

Tokens are grouped into clauses, split on coordinating conjunctions. Within a
clause:
  - first noun/pronoun/possessive-pronoun   → subject
  - first verb/modal-verb                   → predicate
  - nouns after the predicate               → objects
  - adjective/adverb/article/preposition    → modifiers
Anything else (including a noun before the predicate once the subject is
taken) is left out of the clause.
"""

from nlcompiler.core.dependencies import NOMINAL, VERBAL, extract_dependencies
from nlcompiler.core.intent import classify_intent
from nlcompiler.core.models import Clause, ParseTree, Slot, Token


CLAUSE_SPLITTERS = frozenset({"and", "or", "but"})
MODIFIER_TAGS = ("adjective", "adverb", "article", "preposition")


def _slot(token: Token) -> Slot:
    return Slot(word=token.text, pos=token.pos, position=token.index, definition=token.definition)


def build_clauses(tokens: list[Token]) -> list[Clause]:
    clauses = []
    current = Clause()

    for token in tokens:
        if token.pos == "conjunction" and token.lowercase in CLAUSE_SPLITTERS:
            clauses.append(current)
            current = Clause()
            continue

        if token.pos in NOMINAL and current.subject is None:
            current.subject = _slot(token)
        elif token.pos in VERBAL:
            if current.predicate is None:
                current.predicate = _slot(token)
        elif token.pos == "noun" and current.predicate is not None:
            current.objects.append(_slot(token))
        elif token.pos in MODIFIER_TAGS:
            current.modifiers.append(_slot(token))

    clauses.append(current)
    return clauses


def build_parse_tree(tokens: list[Token]) -> ParseTree:
    return ParseTree(
        intent=classify_intent(tokens),
        clauses=build_clauses(tokens),
        dependencies=extract_dependencies(tokens),
    )
