"""Shared fixtures: offline tokenization, a fake dictionary service, an API client."""

import httpx
import pytest
from fastapi.testclient import TestClient

from nlcompiler.core.compiler import Compiler
from nlcompiler.core.config import CompilerConfig
from nlcompiler.core.dictionary import DefinitionResolver, fallback_entry
from nlcompiler.core.layers.lexical import build_tokens
from nlcompiler.core.memory import SessionStore
from nlcompiler.core.models import Definition, DictionaryEntry, Meaning
from nlcompiler.core.tagger import split_words
from nlcompiler.server.deps import get_compiler, get_session_store
from nlcompiler.server.main import app


DICTIONARY_URL = "https://dictionary.test/api/v2/entries/en"


def entry_for(word: str, pos: str) -> DictionaryEntry:
    return DictionaryEntry(
        word=word.lower(),
        meanings=[Meaning(pos, [Definition(f"definition of {word.lower()}")])],
    )


def api_payload(word: str, pos: str, synonyms=None) -> list[dict]:
    return [{
        "word": word,
        "phonetic": f"/{word}/",
        "meanings": [{
            "partOfSpeech": pos,
            "definitions": [{"definition": f"definition of {word}"}],
            "synonyms": synonyms or [],
        }],
    }]


@pytest.fixture
def tokenize():
    """
    Tokenize and tag text without the network.

    `known` maps lowercase words to a part of speech, standing in for
    remote dictionary hits; other words use the fallback table.
    """
    def _tokenize(text: str, known: dict[str, str] | None = None):
        known = known or {}
        words = split_words(text)
        entries = [
            entry_for(w, known[w.lower()]) if w.lower() in known else fallback_entry(w)
            for w in words
        ]
        return build_tokens(words, entries)
    return _tokenize


@pytest.fixture
def fake_dictionary():
    """Build a resolver backed by an in-memory dictionary service."""
    def _resolver(known: dict[str, str]) -> DefinitionResolver:
        def handler(request: httpx.Request) -> httpx.Response:
            word = request.url.path.rsplit("/", 1)[-1]
            if word in known:
                return httpx.Response(200, json=api_payload(word, known[word]))
            return httpx.Response(404, json={"title": "No Definitions Found"})

        return DefinitionResolver(DICTIONARY_URL, transport=httpx.MockTransport(handler))
    return _resolver


class FakeRedis:
    """The subset of redis.Redis that SessionStore uses."""

    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value.encode() if isinstance(value, str) else value

    def delete(self, key):
        return 1 if self.data.pop(key, None) is not None else 0

    def exists(self, key):
        return int(key in self.data)


@pytest.fixture
def api_client():
    """TestClient over an offline compiler and in-memory session storage."""
    compiler = Compiler(config=CompilerConfig(offline=True))
    store = SessionStore(FakeRedis())
    app.dependency_overrides[get_compiler] = lambda: compiler
    app.dependency_overrides[get_session_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
