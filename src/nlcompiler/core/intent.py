# src/nlcompiler/core/intent.py
"""
Intent classification over the whole token sequence.

Rules are tried in order against the lowercased, space-joined text; the first
match wins. Confidence is a constant attached to each rule.
"""

import re
from typing import Callable

from nlcompiler.core.models import Intent, Token


HAS_DIGIT = re.compile(r"\d")


def _math(keywords: str, operation: str) -> tuple[Callable[[str], bool], Callable[[str], Intent]]:
    pattern = re.compile(keywords)
    return (
        lambda text: bool(pattern.search(text)) and bool(HAS_DIGIT.search(text)),
        lambda text: Intent("math_operation", 0.95, operation=operation),
    )


QUESTION_RE = re.compile(r"^(what|who|where|when|why|how|which)\b")
COMMAND_RE = re.compile(r"^(create|make|build|generate|write|develop)\b")
COPULA_RE = re.compile(r"\b(is|are|am|was|were)\b")


INTENT_RULES: list[tuple[Callable[[str], bool], Callable[[str], Intent]]] = [
    _math(r"\b(add(s|ed|ing)?|sum|plus)\b|\+", "addition"),
    _math(r"\b(subtract(s|ed|ing)?|minus)\b|-", "subtraction"),
    _math(r"\b(multipl(y|ies|ied|ying)|times)\b|\*", "multiplication"),
    _math(r"\b(divide[sd]?|dividing)\b|/", "division"),
    (
        lambda text: bool(QUESTION_RE.search(text)),
        lambda text: Intent("question", 0.9, subtype=text.split(" ")[0]),
    ),
    (
        lambda text: bool(COMMAND_RE.search(text)),
        lambda text: Intent("command", 0.85, action="create"),
    ),
    (
        lambda text: bool(COPULA_RE.search(text)),
        lambda text: Intent("statement", 0.8, subtype="declarative"),
    ),
]


def classify_text(text: str) -> Intent:
    for matches, build in INTENT_RULES:
        if matches(text):
            return build(text)
    return Intent("unknown", 0.5)


def classify_intent(tokens: list[Token]) -> Intent:
    return classify_text(" ".join(t.lowercase for t in tokens))
