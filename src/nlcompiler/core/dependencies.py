# src/nlcompiler/core/dependencies.py
"""
Heuristic dependency extraction.

Every token is scanned forward for the nearest token that completes a
relation. Relations are not deduplicated here; the optimizer does that on the
graph.
"""

from nlcompiler.core.models import Dependency, Token


NOMINAL = ("noun", "pronoun", "possessive-pronoun")
VERBAL = ("verb", "modal-verb")

NSUBJ_CONFIDENCE = 0.9
DOBJ_CONFIDENCE = 0.85
AMOD_CONFIDENCE = 0.8
CONJ_CONFIDENCE = 0.75


def _next_with_pos(tokens: list[Token], start: int, tags: tuple[str, ...]) -> Token | None:
    for t in tokens[start:]:
        if t.pos in tags:
            return t
    return None


def extract_dependencies(tokens: list[Token]) -> list[Dependency]:
    deps = []

    for i, token in enumerate(tokens):
        if token.pos in NOMINAL:
            verb = _next_with_pos(tokens, i + 1, VERBAL)
            if verb:
                deps.append(Dependency(token.text, verb.text, "nsubj", NSUBJ_CONFIDENCE))

        if token.pos == "verb":
            noun = _next_with_pos(tokens, i + 1, ("noun",))
            if noun:
                deps.append(Dependency(token.text, noun.text, "dobj", DOBJ_CONFIDENCE))

        if token.pos == "adjective" and i + 1 < len(tokens) and tokens[i + 1].pos == "noun":
            deps.append(Dependency(tokens[i + 1].text, token.text, "amod", AMOD_CONFIDENCE))

        if token.pos == "conjunction":
            head = tokens[i - 1].text if i > 0 else "ROOT"
            dependent = tokens[i + 1].text if i + 1 < len(tokens) else "END"
            deps.append(Dependency(head, dependent, "conj", CONJ_CONFIDENCE, conj_type=token.text))

    return deps
