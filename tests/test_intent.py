# tests/test_intent.py
"""Tests for intent classification."""

import pytest

from nlcompiler.core.intent import classify_intent, classify_text


@pytest.mark.parametrize("text,operation", [
    ("add 2 and 3", "addition"),
    ("what is 5 plus 3", "addition"),
    ("subtract 4 from 10", "subtraction"),
    ("multiply 3 by 4", "multiplication"),
    ("7 times 6", "multiplication"),
    ("10 divided by 2", "division"),
])
def test_math(text, operation):
    intent = classify_text(text)
    assert intent.type == "math_operation"
    assert intent.operation == operation
    assert intent.confidence == 0.95


def test_math_needs_a_digit():
    assert classify_text("add the numbers").type == "unknown"


def test_question():
    intent = classify_text("where did the cat go")
    assert intent.type == "question"
    assert intent.subtype == "where"
    assert intent.confidence == 0.9


def test_question_must_lead():
    assert classify_text("tell me what you know").type == "unknown"


def test_command():
    intent = classify_text("build a small house")
    assert intent.type == "command"
    assert intent.action == "create"
    assert intent.confidence == 0.85


def test_statement():
    intent = classify_text("the sky is blue")
    assert intent.type == "statement"
    assert intent.subtype == "declarative"
    assert intent.confidence == 0.8


def test_copula_matches_whole_words_only():
    assert classify_text("this dog runs").type == "unknown"


def test_question_beats_statement():
    assert classify_text("who is there").type == "question"


def test_unknown():
    intent = classify_text("dogs bark")
    assert intent.type == "unknown"
    assert intent.confidence == 0.5
    assert intent.to_dict() == {"type": "unknown", "confidence": 0.5}


def test_classify_intent_lowercases(tokenize):
    intent = classify_intent(tokenize("What Is This"))
    assert intent.type == "question"
    assert intent.subtype == "what"


def test_classify_empty():
    assert classify_intent([]).type == "unknown"
