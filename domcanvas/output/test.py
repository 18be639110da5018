"""Tests for output module."""

import json

import pytest

from domcanvas.builder import (
    GridGroup,
    RectPadding,
    TextSupport,
    build_document,
    import_document,
)
from domcanvas.output import (
    format_build_result,
    format_widget_tree,
    instruction_to_dict,
    record_to_dict,
    result_to_dict,
)
from domcanvas.schema import Alignment, Vector2, parse_document


@pytest.fixture
def form_result():
    """Build result for a small form."""
    return import_document(
        {
            "root": {
                "name": "Form",
                "type": "panel",
                "layout": {"type": "vertical", "spacing": 8},
                "children": [
                    {"name": "Title", "type": "text", "text": "Sign in"},
                    {"name": "Submit", "type": "button", "text": "Go"},
                ],
            }
        }
    )


class TestFormatWidgetTree:
    """Tests for format_widget_tree."""

    @pytest.mark.unit
    def test_single_record(self):
        """Single record shows name and kind."""
        result = import_document({"root": {"name": "Root"}})
        assert format_widget_tree(result.root) == "Root [container]"

    @pytest.mark.unit
    def test_nested_tree(self, form_result):
        """Nested records use box-drawing connectors."""
        text = format_widget_tree(form_result.root)
        lines = text.split("\n")
        assert lines[0].startswith("Form [panel, bg #FFFFFF0D, vertical]")
        assert lines[1] == '├── Title [text, text "Sign in"]'
        assert lines[2].startswith("└── Submit [button, bg #")
        assert lines[3] == '    └── Label [text, text "Go"]'

    @pytest.mark.unit
    def test_grid_and_size_labels(self):
        """Grid and sizing instructions are summarised."""
        result = import_document(
            {
                "root": {
                    "layout": {"type": "grid", "columns": 4},
                    "size": {"preferredWidth": 320, "minHeight": 50},
                }
            }
        )
        text = format_widget_tree(result.root)
        assert "size w=320 min_h=50" in text
        assert "grid 4 cols" in text


class TestFormatBuildResult:
    """Tests for format_build_result."""

    @pytest.mark.unit
    def test_includes_canvas_and_diagnostics(self):
        """Canvas header and diagnostics are listed."""
        result = import_document(
            {"root": {"children": [{"type": "video"}]}},
        )
        text = format_build_result(result)
        assert text.startswith("ImportedCanvas [canvas, 1080x1920, match 0.5]")
        assert "! unsupported_node_kind: Unsupported node type: video" in text

    @pytest.mark.unit
    def test_missing_root(self):
        """A dropped root is reported."""
        result = import_document({"root": {"type": "video"}})
        assert "(no root record)" in format_build_result(result)


class TestDictConversion:
    """Tests for plain-dict conversion."""

    @pytest.mark.unit
    def test_instruction_to_dict(self):
        """Instructions convert with a kind tag and plain values."""
        grid = GridGroup(
            padding=RectPadding(left=2),
            spacing=Vector2(x=4, y=4),
            cell_size=Vector2(x=10, y=20),
            constraint_count=2,
            alignment=Alignment.MIDDLE_LEFT,
        )
        data = instruction_to_dict(grid)
        assert data["kind"] == "grid_group"
        assert data["padding"] == {"left": 2, "right": 0, "top": 0, "bottom": 0}
        assert data["cell_size"] == {"x": 10.0, "y": 20.0}
        assert data["alignment"] == "middleLeft"
        assert data["constraint"] == "fixedColumnCount"

    @pytest.mark.unit
    def test_record_to_dict(self, form_result):
        """Records convert recursively and exclude the source node."""
        data = record_to_dict(form_result.root)
        assert data["name"] == "Form"
        assert data["kind"] == "panel"
        assert "source" not in data
        assert [c["name"] for c in data["children"]] == ["Title", "Submit"]
        assert data["children"][0]["instructions"][0]["widget"] == "rich"

    @pytest.mark.unit
    def test_record_to_dict_shallow(self, form_result):
        """Non-recursive conversion omits children."""
        assert "children" not in record_to_dict(form_result.root, recursive=False)

    @pytest.mark.unit
    def test_result_is_json_serializable(self):
        """Whole results survive json.dumps."""
        doc = parse_document({"root": {"type": "text", "text": "x"}})
        result = build_document(doc, text_support=TextSupport.NONE)
        data = json.loads(json.dumps(result_to_dict(result)))
        assert data["canvas"]["name"] == "ImportedCanvas"
        assert data["root"]["instructions"] == []
        assert data["diagnostics"][0]["kind"] == "missing_text_capability"
