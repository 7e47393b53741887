# tests/test_cli.py
"""Tests for the nlc command line."""

import json

import pytest

from nlcompiler.cli.main import main


def run_cli(monkeypatch, *argv):
    monkeypatch.setattr("sys.argv", ["nlc", *argv])
    main()


def test_compile_offline(monkeypatch, capsys):
    run_cli(monkeypatch, "compile", "The dog chased the mouse", "--offline", "--quiet")
    doc = json.loads(capsys.readouterr().out)
    assert doc["summary"]["main_subject"] == "dog"
    assert doc["metadata"]["dictionary_api"] == "fallback"


def test_compile_to_file(monkeypatch, tmp_path):
    out = tmp_path / "dog.xml"
    run_cli(monkeypatch, "compile", "The dog ran", "--offline", "-q", "-f", "xml", "-o", str(out))
    assert out.read_text().startswith('<?xml version="1.0" encoding="UTF-8"?>')


def test_compile_rejects_unknown_format(monkeypatch):
    with pytest.raises(SystemExit):
        run_cli(monkeypatch, "compile", "The dog ran", "--format", "toml")


def test_phases(monkeypatch, capsys):
    run_cli(monkeypatch, "phases", "The dog ran", "--offline", "--only", "lexical", "ir")
    out = capsys.readouterr().out
    assert "=== lexical.lex ===" in out
    assert "0: The [article] denoting a specific item" in out
    assert "=== ir.ir ===" in out
    assert "=== syntax.syn ===" not in out


def test_layers(monkeypatch, capsys):
    run_cli(monkeypatch, "layers")
    out = capsys.readouterr().out
    assert "1. lexical - Lexical Analysis" in out
    assert "depends_on: lexical, semantic, optimize" in out


def test_no_command_prints_help(monkeypatch, capsys):
    run_cli(monkeypatch)
    assert "usage: nlc" in capsys.readouterr().out
