# src/nlcompiler/core/tagger.py
"""
Part-of-speech tagging by rule cascade.

Order of evaluation, first match wins:
  1. dictionary entry (first meaning's part of speech)
  2. fallback table
  3. TAG_RULES, in list order
  4. noun
"""

import logging
import re
from typing import Callable

from nlcompiler.core.dictionary import FALLBACK_DICTIONARY
from nlcompiler.core.models import DictionaryEntry


logger = logging.getLogger(__name__)

DEFAULT_TAG = "noun"

PERSONAL_PRONOUNS = frozenset({"i", "you", "he", "she", "it", "we", "they", "me", "him", "her", "us", "them"})
POSSESSIVE_PRONOUNS = frozenset({"my", "your", "his", "her", "its", "our", "their"})
DEMONSTRATIVE_PRONOUNS = frozenset({"this", "that", "these", "those"})
COPULAS = frozenset({"is", "are", "am", "was", "were", "be", "been", "being"})
ING_EXCEPTIONS = frozenset({"thing", "ring", "king", "sing", "wing"})
ED_EXCEPTIONS = frozenset({"red", "bed", "fed", "led"})
MODALS = frozenset({"can", "could", "will", "would", "shall", "should", "may", "might", "must"})
ADJECTIVE_SUFFIXES = ("ful", "less", "ous", "ive", "able")
PREPOSITIONS = frozenset({"in", "on", "at", "by", "for", "with", "from", "to", "of", "about", "under", "over"})
CONJUNCTIONS = frozenset({"and", "or", "but", "if", "when", "because", "although", "while", "unless"})
ARTICLES = frozenset({"the", "a", "an"})


# (rule name, predicate on lowercased word, tag)
TAG_RULES: list[tuple[str, Callable[[str], bool], str]] = [
    ("personal-pronoun", lambda w: w in PERSONAL_PRONOUNS, "pronoun"),
    ("possessive-pronoun", lambda w: w in POSSESSIVE_PRONOUNS, "possessive-pronoun"),
    ("demonstrative-pronoun", lambda w: w in DEMONSTRATIVE_PRONOUNS, "demonstrative-pronoun"),
    ("copula", lambda w: w in COPULAS, "verb"),
    ("suffix-ing", lambda w: w.endswith("ing") and w not in ING_EXCEPTIONS, "verb"),
    ("suffix-ed", lambda w: w.endswith("ed") and w not in ED_EXCEPTIONS, "verb"),
    ("modal", lambda w: w in MODALS, "modal-verb"),
    ("suffix-ly", lambda w: w.endswith("ly"), "adverb"),
    ("adjective-suffix", lambda w: w.endswith(ADJECTIVE_SUFFIXES), "adjective"),
    ("preposition", lambda w: w in PREPOSITIONS, "preposition"),
    ("conjunction", lambda w: w in CONJUNCTIONS, "conjunction"),
    ("article", lambda w: w in ARTICLES, "article"),
]


WORD_RE = re.compile(r"\b\w+\b")


def split_words(text: str) -> list[str]:
    """Split text into words; punctuation and whitespace are discarded."""
    return WORD_RE.findall(text)


def explain_tag(
    word: str,
    prev_word: str | None = None,
    next_word: str | None = None,
    entry: DictionaryEntry | None = None,
) -> tuple[str, str]:
    """Return (tag, name of the rule that produced it)."""
    lower = word.lower()

    if entry is not None and entry.meanings:
        return entry.first_part_of_speech, "dictionary"

    if lower in FALLBACK_DICTIONARY:
        return FALLBACK_DICTIONARY[lower]["pos"], "fallback"

    for name, predicate, tag in TAG_RULES:
        if predicate(lower):
            return tag, name

    return DEFAULT_TAG, "default"


def tag_word(
    word: str,
    prev_word: str | None = None,
    next_word: str | None = None,
    entry: DictionaryEntry | None = None,
) -> str:
    tag, rule = explain_tag(word, prev_word, next_word, entry)
    logger.debug(f"tag {word!r} -> {tag} ({rule})")
    return tag
