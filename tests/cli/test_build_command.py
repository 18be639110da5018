"""Tests for build and schema CLI commands."""

import json
from pathlib import Path

import pytest

from domcanvas.__main__ import main

FIXTURES = Path(__file__).parent.parent / "fixtures"


@pytest.mark.unit
def test_build_prints_tree(capsys):
    """build prints the canvas header and widget tree."""
    code = main(["build", str(FIXTURES / "login_screen.json")])
    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("ImportedCanvas [canvas")
    assert "LoginScreen [panel" in out
    assert "! unsupported_node_kind: Unsupported node type: carousel" in out


@pytest.mark.unit
def test_build_json_output(capsys):
    """build --format json emits a serialized build result."""
    code = main(
        ["build", str(FIXTURES / "login_screen.json"), "--format", "json", "-t", "none"]
    )
    data = json.loads(capsys.readouterr().out)
    assert code == 0
    assert data["root"]["name"] == "LoginScreen"
    kinds = {d["kind"] for d in data["diagnostics"]}
    assert kinds == {"unsupported_node_kind", "missing_text_capability"}


@pytest.mark.unit
def test_build_writes_output_file(tmp_path):
    """build --output writes to the given path."""
    target = tmp_path / "tree.txt"
    code = main(["build", str(FIXTURES / "login_screen.json"), "-o", str(target)])
    assert code == 0
    assert "Submit [button" in target.read_text(encoding="utf-8")


@pytest.mark.unit
def test_build_unwritable_output(tmp_path):
    """An output path in a missing directory exits with status 1."""
    target = tmp_path / "missing" / "tree.txt"
    code = main(["build", str(FIXTURES / "login_screen.json"), "-o", str(target)])
    assert code == 1
    assert not target.exists()


@pytest.mark.unit
def test_build_malformed_document(tmp_path):
    """A document without root exits with status 1."""
    doc = tmp_path / "empty.json"
    doc.write_text("{}", encoding="utf-8")
    assert main(["build", str(doc)]) == 1


@pytest.mark.unit
def test_build_missing_file(tmp_path):
    """An unreadable file exits with status 1."""
    assert main(["build", str(tmp_path / "missing.json")]) == 1


@pytest.mark.unit
def test_build_wrongly_typed_values(tmp_path, capsys):
    """Wrongly typed values build with defaults instead of failing."""
    doc = tmp_path / "loose.json"
    doc.write_text(
        '{"root": {"type": "panel", "name": "Loose", '
        '"layout": {"type": "vertical", "spacing": "wide"}, "style": "red"}}',
        encoding="utf-8",
    )
    assert main(["build", str(doc)]) == 0
    assert "Loose [panel, bg #FFFFFF0D, vertical]" in capsys.readouterr().out


@pytest.mark.unit
def test_schema_command(capsys):
    """schema prints the document JSON Schema."""
    assert main(["schema"]) == 0
    schema = json.loads(capsys.readouterr().out)
    assert schema["title"] == "Document"


@pytest.mark.unit
def test_unknown_command():
    """Unknown commands fail with help."""
    assert main(["frobnicate"]) == 1
    assert main([]) == 1
    assert main(["--help"]) == 0
