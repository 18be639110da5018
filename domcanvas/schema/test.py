"""Unit tests for the Schema module."""

import pytest
from pydantic import ValidationError

from domcanvas.schema import (
    Alignment,
    Color,
    Document,
    Layout,
    LayoutKind,
    MalformedDocumentError,
    Node,
    NodeKind,
    Offsets,
    Vector2,
    export_json_schema,
    parse_alignment,
    parse_document,
    parse_layout_kind,
    parse_node_kind,
)


class TestNodeKindParsing:
    """Tests for node type resolution."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("container", NodeKind.CONTAINER),
            ("Panel", NodeKind.PANEL),
            ("TEXT", NodeKind.TEXT),
            ("bUtToN", NodeKind.BUTTON),
            ("image", NodeKind.IMAGE),
        ],
    )
    def test_case_insensitive_match(self, value, expected):
        """Known kinds match regardless of case."""
        assert parse_node_kind(value) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_is_container(self, value):
        """Empty or missing type defaults to container."""
        assert parse_node_kind(value) == NodeKind.CONTAINER

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["slider", "panels", " panel", "div"])
    def test_unrecognized_is_unknown(self, value):
        """Anything that is not an exact match is unknown."""
        assert parse_node_kind(value) == NodeKind.UNKNOWN


class TestLayoutKindParsing:
    """Tests for layout type resolution."""

    @pytest.mark.unit
    def test_known_kinds(self):
        """Known layout kinds resolve case-insensitively."""
        assert parse_layout_kind("Vertical") == LayoutKind.VERTICAL
        assert parse_layout_kind("horizontal") == LayoutKind.HORIZONTAL
        assert parse_layout_kind("GRID") == LayoutKind.GRID

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [None, "", "flex", "stack"])
    def test_fallback_is_none(self, value):
        """Missing or unrecognized layout kinds become NONE."""
        assert parse_layout_kind(value) == LayoutKind.NONE


class TestAlignmentParsing:
    """Tests for alignment resolution."""

    @pytest.mark.unit
    def test_camel_case_value(self):
        """Document spelling matches."""
        assert parse_alignment("middleCenter") == Alignment.MIDDLE_CENTER

    @pytest.mark.unit
    def test_case_insensitive(self):
        """Alignment match ignores case."""
        assert parse_alignment("LOWERRIGHT") == Alignment.LOWER_RIGHT

    @pytest.mark.unit
    def test_default_fallback(self):
        """Unrecognized alignment falls back to upper-left."""
        assert parse_alignment("centre") == Alignment.UPPER_LEFT
        assert parse_alignment(None) == Alignment.UPPER_LEFT

    @pytest.mark.unit
    def test_custom_fallback(self):
        """Caller-supplied fallback is honoured."""
        assert parse_alignment("", Alignment.LOWER_CENTER) == Alignment.LOWER_CENTER


class TestColor:
    """Tests for Color defaults and resolution."""

    @pytest.mark.unit
    def test_defaults_are_opaque_white(self):
        """Every channel defaults to 1."""
        assert Color() == Color(r=1, g=1, b=1, a=1)

    @pytest.mark.unit
    def test_zero_alpha_takes_fallback(self):
        """Literal zero alpha is replaced by the fallback alpha."""
        fallback = Color(r=1, g=1, b=1, a=1)
        resolved = Color(r=0, g=1, b=0, a=0).resolve(fallback)
        assert resolved == Color(r=0, g=1, b=0, a=1)

    @pytest.mark.unit
    def test_nonzero_alpha_preserved(self):
        """Non-zero alpha is kept as written."""
        fallback = Color(r=1, g=1, b=1, a=1)
        resolved = Color(r=0, g=1, b=0, a=0.3).resolve(fallback)
        assert resolved == Color(r=0, g=1, b=0, a=0.3)

    @pytest.mark.unit
    def test_other_channels_never_substituted(self):
        """Zero RGB channels are not treated as unset."""
        resolved = Color(r=0, g=0, b=0, a=0).resolve(Color(r=0.5, g=0.5, b=0.5, a=0.7))
        assert (resolved.r, resolved.g, resolved.b, resolved.a) == (0, 0, 0, 0.7)


class TestNode:
    """Tests for Node model behaviour."""

    @pytest.mark.unit
    def test_safe_name_prefers_name(self):
        """Name is returned verbatim."""
        node = Node(kind="panel", name="Header")
        assert node.safe_name() == "Header"

    @pytest.mark.unit
    def test_safe_name_falls_back_to_raw_type(self):
        """Missing name returns the type string as written."""
        assert Node(kind="Panel").safe_name() == "Panel"
        assert Node(kind="panel", name="").safe_name() == "panel"

    @pytest.mark.unit
    def test_safe_name_literal(self):
        """Missing name and type returns the literal fallback."""
        assert Node().safe_name() == "Node"
        assert Node(kind="", name="").safe_name() == "Node"

    @pytest.mark.unit
    def test_json_keys(self):
        """camelCase JSON keys populate snake_case attributes."""
        node = Node.model_validate(
            {
                "type": "text",
                "text": "Hi",
                "style": {"textColor": {"r": 0}, "fontSize": 18},
                "size": {"preferredWidth": 120, "minHeight": 40},
            }
        )
        assert node.kind == "text"
        assert node.style.font_size == 18
        assert node.style.has_text_color
        assert not node.style.has_background_color
        assert node.style.text_color == Color(r=0, g=1, b=1, a=1)
        assert node.size.preferred_width == 120
        assert node.size.min_height == 40
        assert node.size.preferred_height == 0

    @pytest.mark.unit
    def test_children_keep_order(self):
        """Children preserve document order."""
        node = Node.model_validate(
            {"children": [{"name": "a"}, {"name": "b"}, {"name": "c"}]}
        )
        assert [child.name for child in node.children] == ["a", "b", "c"]

    @pytest.mark.unit
    def test_null_fields_use_defaults(self):
        """Explicit nulls are treated as absent."""
        node = Node.model_validate(
            {"type": None, "layout": {"spacing": None, "columns": None}}
        )
        assert node.node_kind == NodeKind.CONTAINER
        assert node.layout.spacing == 0
        assert node.layout.columns == 1

    @pytest.mark.unit
    def test_null_children_entries_kept(self):
        """Null entries inside children survive parsing."""
        node = Node.model_validate({"children": [None, {"type": "text"}]})
        assert node.children[0] is None
        assert node.children[1].node_kind == NodeKind.TEXT

    @pytest.mark.unit
    def test_unknown_keys_ignored(self):
        """Extra keys do not fail parsing."""
        node = Node.model_validate({"type": "image", "opacity": 0.5})
        assert node.node_kind == NodeKind.IMAGE

    @pytest.mark.unit
    def test_frozen(self):
        """Parsed nodes are immutable."""
        node = Node(kind="panel")
        with pytest.raises(ValidationError):
            node.name = "changed"


class TestLayout:
    """Tests for Layout defaults."""

    @pytest.mark.unit
    def test_defaults(self):
        """An empty layout has documented defaults."""
        layout = Layout()
        assert layout.layout_kind == LayoutKind.NONE
        assert layout.get_padding() == Offsets()
        assert layout.spacing == 0
        assert layout.columns == 1
        assert layout.get_alignment() == Alignment.UPPER_LEFT

    @pytest.mark.unit
    def test_cell_size_default(self):
        """Missing cell size uses the supplied default."""
        default = Vector2(x=100, y=100)
        assert Layout().get_cell_size(default) == default
        explicit = Layout.model_validate({"cellSize": {"x": 40, "y": 20}})
        assert explicit.get_cell_size(default) == Vector2(x=40, y=20)

    @pytest.mark.unit
    def test_type_key(self):
        """Layout kind is read from the JSON `type` key."""
        layout = Layout.model_validate({"type": "Grid", "columns": 3})
        assert layout.layout_kind == LayoutKind.GRID


class TestParseDocument:
    """Tests for parse_document."""

    @pytest.mark.unit
    def test_minimal_example(self):
        """The canonical minimal document parses."""
        doc = parse_document(
            '{"root": {"type": "panel", "children": ['
            '{"type": "text", "text": "Hello", "style": {"fontSize": 24}}]}}'
        )
        assert isinstance(doc, Document)
        assert doc.root.node_kind == NodeKind.PANEL
        assert doc.root.children[0].text == "Hello"
        assert doc.root.children[0].style.font_size == 24

    @pytest.mark.unit
    def test_accepts_bytes(self):
        """UTF-8 bytes are decoded."""
        doc = parse_document('{"root": {"name": "Café"}}'.encode("utf-8"))
        assert doc.root.name == "Café"

    @pytest.mark.unit
    def test_accepts_mapping(self):
        """Already-decoded mappings are accepted."""
        doc = parse_document({"root": {"type": "button", "text": "Go"}})
        assert doc.root.node_kind == NodeKind.BUTTON

    @pytest.mark.unit
    def test_unknown_kind_is_not_an_error(self):
        """Unrecognized node types parse without failing."""
        doc = parse_document({"root": {"type": "carousel"}})
        assert doc.root.node_kind == NodeKind.UNKNOWN

    @pytest.mark.unit
    def test_empty_object_rejected(self):
        """A document without root is malformed."""
        with pytest.raises(MalformedDocumentError, match="no root"):
            parse_document("{}")

    @pytest.mark.unit
    def test_null_root_rejected(self):
        """A null root is treated as missing."""
        with pytest.raises(MalformedDocumentError):
            parse_document({"root": None})

    @pytest.mark.unit
    def test_invalid_json_rejected(self):
        """Undecodable text is malformed."""
        with pytest.raises(MalformedDocumentError, match="Invalid JSON"):
            parse_document("{root: ")

    @pytest.mark.unit
    def test_non_object_rejected(self):
        """Top-level arrays are malformed."""
        with pytest.raises(MalformedDocumentError, match="JSON object"):
            parse_document("[1, 2]")

    @pytest.mark.unit
    def test_wrongly_typed_root_rejected(self):
        """A root that is not an object counts as missing."""
        with pytest.raises(MalformedDocumentError, match="no root"):
            parse_document({"root": "panel"})


class TestWrongTypes:
    """Tests for wrongly typed values resolving to field defaults."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "layout, attribute, expected",
        [
            ({"type": "vertical", "spacing": "wide"}, "spacing", 0.0),
            ({"type": "grid", "columns": "three"}, "columns", 1),
            ({"type": "grid", "columns": 2.5}, "columns", 1),
            ({"type": 7}, "kind", "none"),
            ({"alignment": ["upperLeft"]}, "alignment", "upperLeft"),
            ({"padding": "8px"}, "padding", None),
            ({"cellSize": 64}, "cell_size", None),
        ],
    )
    def test_layout_value_defaults(self, layout, attribute, expected):
        """Wrongly typed layout fields take their defaults."""
        doc = parse_document({"root": {"type": "panel", "layout": layout}})
        assert getattr(doc.root.layout, attribute) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "style, attribute, expected",
        [
            ({"fontSize": 24.5}, "font_size", 0),
            ({"fontSize": "large"}, "font_size", 0),
            ({"backgroundColor": "red"}, "background_color", None),
            ({"textColor": {"r": "dark"}}, "text_color", Color(r=1, g=1, b=1, a=1)),
        ],
    )
    def test_style_value_defaults(self, style, attribute, expected):
        """Wrongly typed style fields take their defaults."""
        doc = parse_document({"root": {"type": "text", "style": style}})
        assert getattr(doc.root.style, attribute) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "field, value, attribute, expected",
        [
            ("text", 42, "text", None),
            ("name", {"first": "x"}, "name", None),
            ("style", "red", "style", None),
            ("layout", 3, "layout", None),
            ("size", [100, 50], "size", None),
            ("children", "not-a-list", "children", ()),
        ],
    )
    def test_node_value_defaults(self, field, value, attribute, expected):
        """Wrongly typed node fields take their defaults."""
        doc = parse_document({"root": {"type": "button", field: value}})
        assert getattr(doc.root, attribute) == expected

    @pytest.mark.unit
    def test_other_fields_survive(self):
        """One bad field leaves its siblings intact."""
        doc = parse_document(
            {
                "root": {
                    "type": "panel",
                    "name": "Main",
                    "layout": {"type": "vertical", "spacing": "wide", "columns": 3},
                }
            }
        )
        assert doc.root.name == "Main"
        assert doc.root.layout.layout_kind == LayoutKind.VERTICAL
        assert doc.root.layout.spacing == 0
        assert doc.root.layout.columns == 3

    @pytest.mark.unit
    def test_non_object_children_become_none(self):
        """Scalar child entries build to nothing, like nulls."""
        node = Node.model_validate({"children": [5, "x", {"type": "text"}]})
        assert node.children[:2] == (None, None)
        assert node.children[2].node_kind == NodeKind.TEXT

    @pytest.mark.unit
    def test_built_nodes_accepted_as_children(self):
        """Already constructed nodes pass through unchanged."""
        child = Node(kind="image")
        node = Node(children=(child,))
        assert node.children == (child,)


class TestExportJsonSchema:
    """Tests for JSON schema export."""

    @pytest.mark.unit
    def test_schema_uses_json_keys(self):
        """Schema exposes the document's JSON key names."""
        schema = export_json_schema()
        assert schema["title"] == "Document"
        node_schema = schema["$defs"]["Node"]
        assert "type" in node_schema["properties"]
        assert "children" in node_schema["properties"]
        style_schema = schema["$defs"]["Style"]
        assert "backgroundColor" in style_schema["properties"]
        assert "fontSize" in style_schema["properties"]
