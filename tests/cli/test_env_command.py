"""Tests for env CLI command."""

import pytest

from domcanvas.__main__ import main


@pytest.mark.unit
def test_env_lists_all_variables(capsys):
    """env with no category lists every variable."""
    assert main(["env"]) == 0
    out = capsys.readouterr().out
    assert "DOMCANVAS_LOG_LEVEL = 'INFO'" in out
    assert "DOMCANVAS_GRID_CELL_WIDTH" in out


@pytest.mark.unit
def test_env_filters_by_category(capsys):
    """env lists variables of a category only."""
    assert main(["env", "canvas"]) == 0
    out = capsys.readouterr().out
    assert "DOMCANVAS_REFERENCE_WIDTH" in out
    assert "DOMCANVAS_LOG_LEVEL" not in out


@pytest.mark.unit
def test_env_reflects_environment(capsys, monkeypatch):
    """env shows values from the environment."""
    monkeypatch.setenv("DOMCANVAS_REFERENCE_WIDTH", "720")
    assert main(["env", "canvas"]) == 0
    assert "DOMCANVAS_REFERENCE_WIDTH = 720" in capsys.readouterr().out


@pytest.mark.unit
def test_env_unknown_category():
    """Unknown env categories fail."""
    assert main(["env", "nope"]) == 1
