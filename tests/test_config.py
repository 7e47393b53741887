# tests/test_config.py
"""Tests for environment-driven configuration."""

from nlcompiler.core.config import DEFAULT_CORS_ORIGINS, CompilerConfig


def test_defaults(monkeypatch):
    for name in ["NLC_OFFLINE", "NLC_MEMORY_SIZE", "NLC_DICTIONARY_URL", "NLC_CORS_ORIGINS"]:
        monkeypatch.delenv(name, raising=False)
    config = CompilerConfig.from_env()
    assert config.offline is False
    assert config.memory_size == 5
    assert config.cors_origins == DEFAULT_CORS_ORIGINS
    assert config.dictionary_label == "dictionaryapi.dev + fallback"


def test_from_env(monkeypatch):
    monkeypatch.setenv("NLC_OFFLINE", "yes")
    monkeypatch.setenv("NLC_MEMORY_SIZE", "8")
    monkeypatch.setenv("NLC_LOOKUP_TIMEOUT", "2.5")
    monkeypatch.setenv("NLC_DICTIONARY_URL", "http://dict.local/en/")
    monkeypatch.setenv("NLC_CORS_ORIGINS", "http://a.test, http://b.test,")
    config = CompilerConfig.from_env()
    assert config.offline is True
    assert config.memory_size == 8
    assert config.lookup_timeout == 2.5
    assert config.dictionary_url == "http://dict.local/en"
    assert config.cors_origins == ["http://a.test", "http://b.test"]
    assert config.dictionary_label == "fallback"


def test_dictionary_label_for_custom_host():
    assert CompilerConfig(dictionary_url="http://dict.local/en").dictionary_label == "dict.local + fallback"
