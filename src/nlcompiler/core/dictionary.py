# src/nlcompiler/core/dictionary.py
"""
Definition resolver.

Remote lookup against a dictionaryapi.dev-compatible endpoint, with a local
table of function words to fall back on. Lookups never raise: any failure
degrades to the fallback table, and from there to None.
"""

import asyncio
import logging

import httpx

from nlcompiler.core.models import Definition, DictionaryEntry, Meaning


logger = logging.getLogger(__name__)

MAX_DEFINITIONS = 2
MAX_SYNONYMS = 3


FALLBACK_DICTIONARY: dict[str, dict] = {
    "my": {"pos": "possessive-pronoun", "type": "possessive", "definition": "belonging to me"},
    "i": {"pos": "pronoun", "type": "personal", "definition": "the speaker or writer"},
    "you": {"pos": "pronoun", "type": "personal", "definition": "the person being addressed"},
    "is": {"pos": "verb", "type": "auxiliary", "definition": "third person singular present of be"},
    "are": {"pos": "verb", "type": "auxiliary", "definition": "second person singular and plural present of be"},
    "am": {"pos": "verb", "type": "auxiliary", "definition": "first person singular present of be"},
    "was": {"pos": "verb", "type": "auxiliary", "definition": "past tense of be"},
    "were": {"pos": "verb", "type": "auxiliary", "definition": "past tense plural of be"},
    "the": {"pos": "article", "type": "definite", "definition": "denoting a specific item"},
    "a": {"pos": "article", "type": "indefinite", "definition": "used before singular nouns"},
    "an": {"pos": "article", "type": "indefinite", "definition": "used before words starting with vowel sounds"},
    "and": {"pos": "conjunction", "type": "coordinating", "definition": "connecting words or clauses"},
    "but": {"pos": "conjunction", "type": "coordinating", "definition": "used to introduce a contrasting statement"},
    "or": {"pos": "conjunction", "type": "coordinating", "definition": "used to link alternatives"},
    "if": {"pos": "conjunction", "type": "conditional", "definition": "introducing a conditional clause"},
    "when": {"pos": "conjunction", "type": "temporal", "definition": "at what time"},
    "because": {"pos": "conjunction", "type": "causal", "definition": "for the reason that"},
}


class LookupFailed(Exception):
    """Remote lookup did not produce an entry. Never escapes the resolver."""


def fallback_entry(word: str) -> DictionaryEntry | None:
    lower = word.lower()
    info = FALLBACK_DICTIONARY.get(lower)
    if info is None:
        return None
    return DictionaryEntry(
        word=lower,
        meanings=[
            Meaning(
                part_of_speech=info["pos"],
                definitions=[Definition(info["definition"])],
            )
        ],
    )


def parse_entry(payload) -> DictionaryEntry:
    """
    Normalize a dictionaryapi.dev response.

    The API returns a list of entries; only the first is used. Each meaning
    keeps at most 2 definitions and 3 synonyms.
    """
    if not isinstance(payload, list) or not payload or not isinstance(payload[0], dict):
        raise LookupFailed("unexpected payload shape")

    raw = payload[0]
    try:
        meanings = []
        for m in raw.get("meanings", []):
            definitions = [
                Definition(d["definition"], d.get("example") or "")
                for d in m.get("definitions", [])[:MAX_DEFINITIONS]
            ]
            meanings.append(Meaning(
                part_of_speech=m["partOfSpeech"],
                definitions=definitions,
                synonyms=list(m.get("synonyms") or [])[:MAX_SYNONYMS],
            ))
        return DictionaryEntry(
            word=raw["word"],
            phonetic=raw.get("phonetic") or "",
            meanings=meanings,
            origin=raw.get("origin") or "",
        )
    except (KeyError, TypeError) as e:
        raise LookupFailed(f"malformed entry: {e}") from e


class DefinitionResolver:
    """Looks words up remotely, falling back to FALLBACK_DICTIONARY."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        offline: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.offline = offline
        self.transport = transport

    @classmethod
    def from_config(cls, config) -> "DefinitionResolver":
        return cls(config.dictionary_url, timeout=config.lookup_timeout, offline=config.offline)

    async def _fetch(self, client: httpx.AsyncClient, word: str) -> DictionaryEntry:
        r = await client.get(f"{self.base_url}/{word.lower()}")
        if r.status_code != 200:
            raise LookupFailed(f"HTTP {r.status_code}")
        try:
            payload = r.json()
        except ValueError as e:
            raise LookupFailed("invalid JSON") from e
        return parse_entry(payload)

    async def _lookup(self, client: httpx.AsyncClient, word: str) -> DictionaryEntry | None:
        try:
            return await self._fetch(client, word)
        except (httpx.HTTPError, LookupFailed) as e:
            logger.debug(f"lookup '{word}' failed ({e}), using fallback")
            return fallback_entry(word)

    async def lookup(self, word: str) -> DictionaryEntry | None:
        """Resolve a single word."""
        results = await self.resolve_many([word])
        return results[0]

    async def resolve_many(self, words: list[str]) -> list[DictionaryEntry | None]:
        """
        Resolve all words concurrently.

        Results come back in the order of `words` regardless of which
        request finishes first.
        """
        if not words:
            return []

        if self.offline:
            return [fallback_entry(w) for w in words]

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            return list(await asyncio.gather(*(self._lookup(client, w) for w in words)))
