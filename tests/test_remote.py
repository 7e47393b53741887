# tests/test_remote.py
"""The `nlc remote` commands and HTTP client, pointed at an in-process API."""

import json

import pytest

from nlcompiler.cli import client as api
from nlcompiler.cli.main import main


@pytest.fixture
def remote(monkeypatch, api_client):
    """Route the client's httpx calls into the TestClient."""
    monkeypatch.setattr(api.httpx, "post", api_client.post)
    monkeypatch.setattr(api.httpx, "get", api_client.get)
    monkeypatch.setattr(api.httpx, "delete", api_client.delete)
    return api_client


def run_cli(monkeypatch, *argv):
    monkeypatch.setattr("sys.argv", ["nlc", *argv])
    main()


def test_client_compile_and_session(remote):
    first = api.compile_text("Mark walked", session_id="r1")
    assert first["success"] is True
    assert first["session_id"] == "r1"

    second = api.compile_text("He jumped", fmt="yaml", session_id="r1")
    assert "refers_to: Mark" in second["output"]

    session = api.get_session("r1")
    assert session["analytics"]["total_compilations"] == 2

    assert api.delete_session("r1") == {"success": True}


def test_client_list_layers(remote):
    assert [l["id"] for l in api.list_layers()][:2] == ["lexical", "syntax"]


def test_client_raises_on_unknown_session(remote):
    with pytest.raises(api.httpx.HTTPStatusError):
        api.get_session("missing")


def test_remote_compile_command(remote, monkeypatch, capsys):
    run_cli(monkeypatch, "remote", "compile", "The dog ran", "--session", "r2")
    captured = capsys.readouterr()
    assert json.loads(captured.out)["original_text"] == "The dog ran"
    assert "session: r2" in captured.err


def test_remote_session_commands(remote, monkeypatch, capsys):
    run_cli(monkeypatch, "remote", "compile", "Mark walked", "--session", "r3")
    capsys.readouterr()

    run_cli(monkeypatch, "remote", "session", "r3")
    assert '"subject": "Mark"' in capsys.readouterr().out

    run_cli(monkeypatch, "remote", "forget", "r3")
    assert "Deleted session r3" in capsys.readouterr().out

    with pytest.raises(SystemExit):
        run_cli(monkeypatch, "remote", "session", "r3")
