"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Isolation from DOMCANVAS_* variables set in the developer's shell
- Sample UI documents shared across test modules
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

from domcanvas.config import EnvVar

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Configuration Constants
# =============================================================================

FIXTURES_DIR = Path(__file__).parent / "tests" / "fixtures"


# =============================================================================
# Environment Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    """Run every test against the built-in configuration defaults."""
    for var in EnvVar:
        monkeypatch.delenv(var.value.name, raising=False)


# =============================================================================
# Document Fixtures
# =============================================================================


@pytest.fixture
def minimal_document() -> dict[str, Any]:
    """Smallest valid document: a single unnamed container."""
    return {"root": {}}


@pytest.fixture
def dashboard_document() -> dict[str, Any]:
    """Dashboard with every supported kind, both layout families and an
    unsupported subtree."""
    return {
        "root": {
            "name": "Dashboard",
            "type": "panel",
            "layout": {
                "type": "vertical",
                "padding": {"left": 16, "right": 16, "top": 24.7, "bottom": 8},
                "spacing": 12,
            },
            "children": [
                {
                    "name": "Header",
                    "type": "container",
                    "layout": {"type": "horizontal", "alignment": "middleLeft"},
                    "children": [
                        {
                            "name": "Title",
                            "type": "text",
                            "text": "Overview",
                            "style": {
                                "fontSize": 36,
                                "textColor": {"r": 0.1, "g": 0.1, "b": 0.1, "a": 1},
                            },
                        },
                        {
                            "name": "Refresh",
                            "type": "button",
                            "text": "Refresh",
                            "size": {"preferredWidth": 160, "minHeight": 50},
                        },
                    ],
                },
                {
                    "name": "Tiles",
                    "type": "container",
                    "layout": {
                        "type": "grid",
                        "columns": 4,
                        "spacing": 8,
                        "cellSize": {"x": 120, "y": 90},
                    },
                    "children": [
                        {"name": "Sales", "type": "image", "image": "tiles/sales.png"},
                        {
                            "name": "Users",
                            "type": "image",
                            "style": {"backgroundColor": {"r": 0.3, "g": 0.6, "b": 0.9}},
                        },
                        None,
                        {
                            "name": "Chart",
                            "type": "chart",
                            "children": [{"name": "Legend", "type": "text"}],
                        },
                    ],
                },
                {
                    "name": "Footer",
                    "type": "panel",
                    "style": {"backgroundColor": {"r": 0, "g": 0, "b": 0, "a": 0.5}},
                    "size": {"preferredHeight": 40},
                },
            ],
        }
    }


@pytest.fixture
def login_screen_path() -> Path:
    """Path to the login screen document on disk."""
    return FIXTURES_DIR / "login_screen.json"


@pytest.fixture
def login_screen_document(login_screen_path) -> dict[str, Any]:
    """Login screen document loaded as raw JSON."""
    return json.loads(login_screen_path.read_text(encoding="utf-8"))
