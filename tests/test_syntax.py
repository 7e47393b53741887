# tests/test_syntax.py
"""Tests for clause construction and the parse tree."""

from nlcompiler.core.syntax import build_clauses, build_parse_tree


def words(slots):
    return [s.word for s in slots]


def test_single_clause(tokenize):
    clauses = build_clauses(tokenize("The dog chased the mouse"))
    assert len(clauses) == 1
    c = clauses[0]
    assert c.subject.word == "dog"
    assert c.subject.position == 1
    assert c.predicate.word == "chased"
    assert words(c.objects) == ["mouse"]
    assert words(c.modifiers) == ["The", "the"]


def test_split_on_coordinating_conjunctions(tokenize):
    tokens = tokenize("I run and you walk", {"run": "verb", "walk": "verb"})
    clauses = build_clauses(tokens)
    assert [(c.subject.word, c.predicate.word) for c in clauses] == [("I", "run"), ("you", "walk")]


def test_subordinating_conjunction_does_not_split(tokenize):
    clauses = build_clauses(tokenize("because I walked"))
    assert len(clauses) == 1
    assert clauses[0].subject.word == "I"


def test_later_verbs_are_dropped(tokenize):
    clauses = build_clauses(tokenize("I was walking"))
    assert clauses[0].predicate.word == "was"
    assert clauses[0].objects == []


def test_noun_before_predicate_is_ignored(tokenize):
    clauses = build_clauses(tokenize("dog cat chased"))
    c = clauses[0]
    assert c.subject.word == "dog"
    assert c.predicate.word == "chased"
    assert c.objects == []


def test_possessive_pronoun_takes_subject(tokenize):
    clauses = build_clauses(tokenize("My dog runs"))
    assert clauses[0].subject.word == "My"
    assert clauses[0].subject.pos == "possessive-pronoun"


def test_trailing_conjunction_leaves_empty_clause(tokenize):
    clauses = build_clauses(tokenize("I walked and"))
    assert len(clauses) == 2
    assert clauses[1].is_empty


def test_empty_input_yields_one_empty_clause():
    clauses = build_clauses([])
    assert len(clauses) == 1
    assert clauses[0].is_empty


def test_parse_tree(tokenize):
    tree = build_parse_tree(tokenize("I run and you walk", {"run": "verb", "walk": "verb"}))
    assert tree.intent.type == "unknown"
    assert len(tree.clauses) == 2
    assert [d.relation for d in tree.dependencies] == ["nsubj", "conj", "nsubj"]

    d = tree.to_dict()
    assert d["type"] == "SENTENCE"
    assert d["clauses"][0]["subject"]["word"] == "I"
