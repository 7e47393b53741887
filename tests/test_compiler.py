# tests/test_compiler.py
"""End-to-end tests for the compile entry point."""

import json
import xml.etree.ElementTree as ET

import pytest

from nlcompiler.core.compiler import CompileRequest, Compiler
from nlcompiler.core.config import CompilerConfig
from nlcompiler.core.layers.runner import COMPLETE, ERROR, PENDING


@pytest.fixture
def compiler():
    return Compiler(config=CompilerConfig(offline=True))


class BrokenResolver:
    async def resolve_many(self, words):
        raise RuntimeError("dictionary down")


def test_compile_json(compiler):
    result = compiler.compile_sync(CompileRequest("The dog chased the mouse"))

    assert result.success
    assert result.error is None
    assert [p.status for p in result.phases] == [COMPLETE] * 6
    doc = json.loads(result.output)
    assert doc == result.document
    assert doc["metadata"]["dictionary_api"] == "fallback"
    assert doc["summary"]["main_subject"] == "dog"
    assert [n["label"] for n in doc["knowledge_graph"]["nodes"]] == ["dog", "mouse", "chased"]


@pytest.mark.parametrize("fmt,prefix", [
    ("yaml", "metadata:\n"),
    ("xml", '<?xml version="1.0" encoding="UTF-8"?>'),
    ("bogus", "{"),
])
def test_compile_formats(compiler, fmt, prefix):
    result = compiler.compile_sync(CompileRequest("I walked", format=fmt))
    assert result.output.startswith(prefix)


def test_phase_details(compiler):
    result = compiler.compile_sync(CompileRequest("The dog chased the mouse"))
    details = {p.id: p.details for p in result.phases}
    assert details["lexical"] == "Processed 5 tokens | 2 dictionary hits | POS accuracy: 40.0%"
    assert details["syntax"] == "Intent: unknown (50.0% confidence) | 1 clause(s) | 2 dependencies"
    assert details["output"].startswith("Generated JSON output | Size: ")


def test_remote_dictionary(fake_dictionary):
    resolver = fake_dictionary({"dog": "noun", "chased": "verb", "mouse": "noun"})
    compiler = Compiler(resolver=resolver, config=CompilerConfig())
    result = compiler.compile_sync(CompileRequest("The dog chased the mouse"))

    doc = result.document
    assert doc["metadata"]["dictionary_api"] == "dictionaryapi.dev + fallback"
    assert doc["metadata"]["confidence_score"] == 0.825
    assert doc["tokens"][1]["definition"] == "definition of dog"


def test_on_phase_callback(compiler):
    events = []
    compiler.compile_sync(CompileRequest("I walked"), on_phase=events.append)
    assert len(events) == 12


def test_context_carries_across_compiles(compiler):
    session = compiler.new_session()
    compiler.compile_sync(CompileRequest("Mark walked"), session)
    result = compiler.compile_sync(CompileRequest("He jumped"), session)

    refs = result.document["semantic_structure"]["context_references"]
    assert refs == [{"pronoun": "He", "refers_to": "Mark", "confidence": 0.7}]
    assert [e["subject"] for e in result.document["context_memory"]] == ["Mark"]
    assert [e.subject for e in session.memory] == ["Mark", "He"]


def test_memory_stays_bounded(compiler):
    session = compiler.new_session()
    for i in range(7):
        compiler.compile_sync(CompileRequest(f"dog{i} walked"), session)
    assert len(session.memory) == 5
    assert session.memory.last().subject == "dog6"
    assert session.analytics.total_compilations == 7


def test_empty_input(compiler):
    session = compiler.new_session()
    result = compiler.compile_sync(CompileRequest(""), session)

    assert result.success
    assert result.document["metadata"]["total_words"] == 0
    assert result.document["knowledge_graph"]["optimization_stats"]["reduction_percentage"] == 0.0
    assert session.memory.last().subject is None


def test_failure():
    compiler = Compiler(resolver=BrokenResolver(), config=CompilerConfig(offline=True))
    session = compiler.new_session()
    session_before = session.memory.to_list()
    events = []

    result = compiler.compile_sync(CompileRequest("The dog ran"), session, events.append)

    assert not result.success
    assert result.output is None
    assert result.error == "error: dictionary down"
    assert [p.status for p in result.phases[:6]] == [ERROR] + [PENDING] * 5

    terminal = result.phases[-1]
    assert terminal.phase == "error"
    assert terminal.name == "Compilation Error"
    assert terminal.details == "Error: dictionary down. Please try a different input."
    assert events[-1] is terminal

    assert session.memory.to_list() == session_before
    assert session.analytics.total_compilations == 1
    assert session.analytics.success_rate == 0.0


def test_result_to_dict(compiler):
    d = compiler.compile_sync(CompileRequest("I walked", format="yaml")).to_dict()
    assert set(d) == {"success", "format", "output", "phases", "error", "duration_ms"}
    assert d["format"] == "yaml"
    assert d["phases"][0] == {
        "phase": 1,
        "id": "lexical",
        "name": "Lexical Analysis",
        "status": "complete",
        "details": "Processed 2 tokens | 1 dictionary hits | POS accuracy: 50.0%",
    }


def test_xml_output_with_control_characters(compiler):
    result = compiler.compile_sync(CompileRequest("The dog\x0bran", format="xml"))
    root = ET.fromstring(result.output)
    assert root.findtext("original_text") == "The dogran"
    assert root.find("summary/main_subject").text == "dog"


def test_possessive_pronoun_sentence(fake_dictionary):
    compiler = Compiler(resolver=fake_dictionary({"dog": "noun", "runs": "verb"}), config=CompilerConfig())
    result = compiler.compile_sync(CompileRequest("My dog runs"))
    doc = result.document

    assert [t["pos"] for t in doc["tokens"]] == ["possessive-pronoun", "noun", "verb"]
    semantic = doc["semantic_structure"]
    assert [(e["name"], e["role"]) for e in semantic["entities"]] == [("My", "subject")]
    assert [a["action"] for a in semantic["actions"]] == ["runs"]
    assert [r["subject"] for r in semantic["relationships"] if r["type"] == "action"] == ["My"]

    graph = doc["knowledge_graph"]
    assert [n["label"] for n in graph["nodes"]] == ["My", "runs"]
    assert {"from": 0, "to": 1, "type": "performs", "confidence": 0.8} in graph["edges"]


def test_possessive_pronoun_sentence_offline(compiler):
    doc = compiler.compile_sync(CompileRequest("My dog runs")).document
    assert doc["tokens"][2]["pos"] == "noun"
    assert doc["summary"]["main_subject"] == "My"
    assert doc["summary"]["main_action"] == "N/A"
