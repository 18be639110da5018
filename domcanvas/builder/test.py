"""Unit tests for the tree builder."""

import pytest

from domcanvas.schema import (
    Alignment,
    Color,
    LayoutKind,
    MalformedDocumentError,
    Node,
    NodeKind,
    Vector2,
    parse_document,
)

from .defaults import BuildDefaults
from .lib import DiagnosticKind, TreeBuilder, build_document, import_document
from .records import (
    BackgroundFill,
    GridGroup,
    InstructionKind,
    Interactive,
    LayoutGroup,
    RectDescriptor,
    RectPadding,
    SizingHint,
    TextRender,
    TextSupport,
    WidgetRecord,
)
from .text import (
    LegacyTextHandle,
    RichTextHandle,
    parse_text_support,
    resolve_text_support,
    select_text_handle,
)


@pytest.fixture
def builder():
    """Builder for a host with the preferred text widget."""
    return TreeBuilder(text_support=TextSupport.RICH)


def _node(data: dict) -> Node:
    return Node.model_validate(data)


def _count_nodes(node: Node | None) -> int:
    """Count expected records: known nodes plus synthesized button labels."""
    if node is None or node.node_kind == NodeKind.UNKNOWN:
        return 0
    label = 1 if node.node_kind == NodeKind.BUTTON and node.text else 0
    return 1 + label + sum(_count_nodes(child) for child in node.children)


class TestTreeShape:
    """Tests for structural preservation."""

    @pytest.mark.unit
    def test_shape_matches_input(self, builder, dashboard_document):
        """Output has one record per known input node."""
        doc = parse_document(dashboard_document)
        result = builder.build_document(doc)
        assert result.root.count() == _count_nodes(doc.root)

    @pytest.mark.unit
    def test_child_order_preserved(self, builder):
        """Children appear in document order."""
        node = _node(
            {"children": [{"name": "first"}, {"name": "second"}, {"name": "third"}]}
        )
        record = builder.build(node)
        assert [child.name for child in record.children] == [
            "first",
            "second",
            "third",
        ]

    @pytest.mark.unit
    def test_none_node_builds_nothing(self, builder):
        """A missing node produces no record."""
        assert builder.build(None) is None

    @pytest.mark.unit
    def test_null_children_skipped(self, builder):
        """Null child entries leave no gap in the output."""
        record = builder.build(_node({"children": [None, {"name": "kept"}, None]}))
        assert [child.name for child in record.children] == ["kept"]

    @pytest.mark.unit
    def test_positioning_is_centered(self, builder):
        """Every record starts centred with zero size."""
        record = builder.build(_node({"type": "panel"}))
        center = Vector2(x=0.5, y=0.5)
        assert record.positioning.anchor_min == center
        assert record.positioning.anchor_max == center
        assert record.positioning.pivot == center
        assert record.positioning.anchored_position == Vector2()
        assert record.positioning.size_delta == Vector2()

    @pytest.mark.unit
    def test_record_references_source(self, builder):
        """Records keep a reference to the input node."""
        node = _node({"type": "text", "text": "Hi"})
        assert builder.build(node).source is node

    @pytest.mark.unit
    def test_rebuild_is_deterministic(self, dashboard_document):
        """Building twice from one document yields equal trees."""
        doc = parse_document(dashboard_document)
        first = build_document(doc, text_support=TextSupport.RICH)
        second = build_document(doc, text_support=TextSupport.RICH)
        assert first.root == second.root
        assert first.canvas == second.canvas
        assert first.diagnostics == second.diagnostics


class TestUnknownKind:
    """Tests for the unsupported node policy."""

    @pytest.mark.unit
    def test_unknown_subtree_dropped(self, builder):
        """An unknown node and its children produce nothing."""
        node = _node(
            {"type": "carousel", "children": [{"type": "text"}, {"type": "panel"}]}
        )
        assert builder.build(node) is None
        diagnostics = builder.diagnostics
        assert len(diagnostics) == 1
        assert diagnostics[0].kind == DiagnosticKind.UNSUPPORTED_NODE_KIND
        assert diagnostics[0].value == "carousel"

    @pytest.mark.unit
    def test_unknown_child_does_not_abort(self, builder):
        """Siblings of an unknown node are still built."""
        node = _node(
            {
                "type": "panel",
                "children": [
                    {"name": "a"},
                    {"type": "slider", "children": [{"name": "lost"}]},
                    {"name": "b"},
                ],
            }
        )
        record = builder.build(node)
        assert [child.name for child in record.children] == ["a", "b"]
        assert len(builder.diagnostics) == 1

    @pytest.mark.unit
    def test_unknown_root(self):
        """An unknown root yields a result without a root record."""
        result = import_document({"root": {"type": "video"}})
        assert result.root is None
        assert result.has_diagnostics

    @pytest.mark.unit
    def test_sink_receives_diagnostics(self):
        """Diagnostics are passed to the sink as they occur."""
        received = []
        builder = TreeBuilder(sink=received.append)
        builder.build(_node({"type": "video"}))
        assert len(received) == 1
        assert received[0].node_name == "video"


class TestPanelAndContainer:
    """Tests for panel and container rules."""

    @pytest.mark.unit
    def test_container_has_no_background(self, builder):
        """Containers carry no background instruction."""
        record = builder.build(_node({"type": "container"}))
        assert record.kind == NodeKind.CONTAINER
        assert record.instructions == ()

    @pytest.mark.unit
    def test_missing_type_is_container(self, builder):
        """Nodes without type build as containers named 'Node'."""
        record = builder.build(_node({}))
        assert record.kind == NodeKind.CONTAINER
        assert record.name == "Node"

    @pytest.mark.unit
    def test_panel_default_background(self, builder):
        """Panels without a style get translucent white."""
        record = builder.build(_node({"type": "panel"}))
        fill = record.instruction(BackgroundFill)
        assert fill.color == Color(r=1, g=1, b=1, a=0.05)

    @pytest.mark.unit
    def test_panel_style_without_background(self, builder):
        """A style without backgroundColor keeps the translucent default."""
        record = builder.build(_node({"type": "panel", "style": {"fontSize": 12}}))
        assert record.instruction(BackgroundFill).color.a == 0.05

    @pytest.mark.unit
    def test_panel_background_zero_alpha(self, builder):
        """Zero alpha resolves against opaque white."""
        record = builder.build(
            _node(
                {
                    "type": "panel",
                    "style": {"backgroundColor": {"r": 0.2, "g": 0.3, "b": 0.4, "a": 0}},
                }
            )
        )
        assert record.instruction(BackgroundFill).color == Color(
            r=0.2, g=0.3, b=0.4, a=1
        )


class TestText:
    """Tests for text nodes."""

    @pytest.mark.unit
    def test_text_instruction(self, builder):
        """Text nodes carry content, centre alignment and style."""
        record = builder.build(
            _node(
                {
                    "type": "text",
                    "text": "Hello",
                    "style": {"fontSize": 24, "textColor": {"r": 1, "g": 0, "b": 0}},
                }
            )
        )
        text = record.instruction(TextRender)
        assert text.widget == TextSupport.RICH
        assert text.content == "Hello"
        assert text.alignment == Alignment.MIDDLE_CENTER
        assert text.font_size == 24
        assert text.color == Color(r=1, g=0, b=0, a=1)

    @pytest.mark.unit
    def test_text_defaults(self, builder):
        """Missing text, colour and size leave host defaults."""
        text = builder.build(_node({"type": "text"})).instruction(TextRender)
        assert text.content == ""
        assert text.color is None
        assert text.font_size is None

    @pytest.mark.unit
    def test_text_color_zero_alpha_black_fallback(self, builder):
        """Text colour alpha falls back to opaque black's alpha."""
        text = builder.build(
            _node({"type": "text", "style": {"textColor": {"r": 0.5, "a": 0}}})
        ).instruction(TextRender)
        assert text.color == Color(r=0.5, g=1, b=1, a=1)

    @pytest.mark.unit
    def test_non_positive_font_size_ignored(self, builder):
        """Zero or negative font sizes are not applied."""
        text = builder.build(
            _node({"type": "text", "style": {"fontSize": -3}})
        ).instruction(TextRender)
        assert text.font_size is None

    @pytest.mark.unit
    def test_legacy_widget(self):
        """Fallback widget is used when that is all the host has."""
        builder = TreeBuilder(text_support=TextSupport.LEGACY)
        text = builder.build(_node({"type": "text", "text": "x"})).instruction(
            TextRender
        )
        assert text.widget == TextSupport.LEGACY

    @pytest.mark.unit
    def test_missing_text_capability(self):
        """Without text support the record exists but has no text."""
        builder = TreeBuilder(text_support=TextSupport.NONE)
        record = builder.build(_node({"type": "text", "text": "Hello"}))
        assert record is not None
        assert not record.has_instruction(InstructionKind.TEXT)
        assert len(builder.diagnostics) == 1
        assert builder.diagnostics[0].kind == DiagnosticKind.MISSING_TEXT_CAPABILITY

    @pytest.mark.unit
    def test_missing_text_capability_keeps_other_instructions(self):
        """Size and layout still apply to a textless text node."""
        builder = TreeBuilder(text_support=TextSupport.NONE)
        record = builder.build(
            _node({"type": "text", "size": {"minHeight": 30}, "layout": {"type": "vertical"}})
        )
        assert record.instruction(SizingHint).min_height == 30
        assert record.instruction(LayoutGroup) is not None


class TestButton:
    """Tests for button nodes."""

    @pytest.mark.unit
    def test_button_instructions(self, builder):
        """Buttons get a light gray background and interactivity."""
        record = builder.build(_node({"type": "button"}))
        assert record.instruction(BackgroundFill).color == Color(
            r=0.9, g=0.9, b=0.9, a=1
        )
        assert record.instruction(Interactive).transition == "colorTint"

    @pytest.mark.unit
    def test_button_without_text_has_no_label(self, builder):
        """Empty or absent text synthesizes no children."""
        assert builder.build(_node({"type": "button"})).children == ()
        assert builder.build(_node({"type": "button", "text": ""})).children == ()

    @pytest.mark.unit
    def test_button_label_synthesized(self, builder):
        """Non-empty text adds exactly one label child before declared ones."""
        record = builder.build(
            _node(
                {
                    "type": "button",
                    "text": "Submit",
                    "style": {"fontSize": 18},
                    "children": [{"name": "icon", "type": "image"}],
                }
            )
        )
        assert [child.name for child in record.children] == ["Label", "icon"]
        label = record.children[0]
        assert label.kind == NodeKind.TEXT
        assert label.positioning == RectDescriptor.centered()
        text = label.instruction(TextRender)
        assert text.content == "Submit"
        assert text.font_size == 18

    @pytest.mark.unit
    def test_button_background_zero_alpha(self, builder):
        """Button colour alpha falls back to the light gray alpha."""
        record = builder.build(
            _node({"type": "button", "style": {"backgroundColor": {"r": 0, "g": 0, "b": 1, "a": 0}}})
        )
        assert record.instruction(BackgroundFill).color == Color(r=0, g=0, b=1, a=1)

    @pytest.mark.unit
    def test_button_label_without_text_capability(self):
        """The label record survives without text support."""
        builder = TreeBuilder(text_support=TextSupport.NONE)
        record = builder.build(_node({"type": "button", "text": "Go"}))
        assert len(record.children) == 1
        assert record.children[0].instructions == ()
        assert builder.diagnostics[0].kind == DiagnosticKind.MISSING_TEXT_CAPABILITY


class TestImage:
    """Tests for image nodes."""

    @pytest.mark.unit
    def test_image_without_color(self, builder):
        """Images without backgroundColor get no fill instruction."""
        record = builder.build(_node({"type": "image", "image": "logo.png"}))
        assert record.kind == NodeKind.IMAGE
        assert record.instruction(BackgroundFill) is None

    @pytest.mark.unit
    def test_image_with_color(self, builder):
        """Images with backgroundColor get a tint resolved against white."""
        record = builder.build(
            _node({"type": "image", "style": {"backgroundColor": {"r": 0.1, "a": 0.5}}})
        )
        assert record.instruction(BackgroundFill).color == Color(
            r=0.1, g=1, b=1, a=0.5
        )


class TestSizing:
    """Tests for sizing hints."""

    @pytest.mark.unit
    def test_no_size_no_instruction(self, builder):
        """Nodes without size carry no sizing hint."""
        record = builder.build(_node({"type": "panel"}))
        assert record.instruction(SizingHint) is None

    @pytest.mark.unit
    def test_only_positive_values(self, builder):
        """Zero and negative fields are omitted."""
        record = builder.build(
            _node(
                {
                    "size": {
                        "preferredWidth": 200,
                        "preferredHeight": 0,
                        "minWidth": -5,
                        "minHeight": 48,
                    }
                }
            )
        )
        assert record.instruction(SizingHint) == SizingHint(
            preferred_width=200, min_height=48
        )

    @pytest.mark.unit
    def test_empty_size_still_attached(self, builder):
        """A present but empty size yields a hint with no values."""
        record = builder.build(_node({"size": {}}))
        assert record.instruction(SizingHint) == SizingHint()


class TestLayout:
    """Tests for layout group instructions."""

    @pytest.mark.unit
    @pytest.mark.parametrize("kind", ["vertical", "horizontal"])
    def test_linear_layout(self, builder, kind):
        """Linear layouts carry padding, spacing, alignment and fixed flags."""
        record = builder.build(
            _node(
                {
                    "layout": {
                        "type": kind,
                        "padding": {"left": 8.9, "right": 8, "top": 4, "bottom": 4},
                        "spacing": 12,
                        "alignment": "middleCenter",
                    }
                }
            )
        )
        group = record.instruction(LayoutGroup)
        assert group.axis == LayoutKind(kind)
        assert group.padding == RectPadding(left=8, right=8, top=4, bottom=4)
        assert group.spacing == 12
        assert group.alignment == Alignment.MIDDLE_CENTER
        assert group.child_control_width and group.child_control_height
        assert not group.child_force_expand_width
        assert not group.child_force_expand_height

    @pytest.mark.unit
    def test_alignment_fallback(self, builder):
        """Unrecognized alignment becomes upper-left."""
        record = builder.build(
            _node({"layout": {"type": "vertical", "alignment": "centre"}})
        )
        assert record.instruction(LayoutGroup).alignment == Alignment.UPPER_LEFT

    @pytest.mark.unit
    def test_grid_defaults(self, builder):
        """Grids default to 100x100 cells with the requested columns."""
        record = builder.build(_node({"layout": {"type": "grid", "columns": 3}}))
        grid = record.instruction(GridGroup)
        assert grid.constraint == "fixedColumnCount"
        assert grid.constraint_count == 3
        assert grid.cell_size == Vector2(x=100, y=100)
        assert grid.alignment == Alignment.UPPER_LEFT
        assert grid.padding == RectPadding()

    @pytest.mark.unit
    @pytest.mark.parametrize("columns", [0, -4])
    def test_grid_columns_clamped(self, builder, columns):
        """Non-positive column counts clamp to one."""
        record = builder.build(_node({"layout": {"type": "grid", "columns": columns}}))
        assert record.instruction(GridGroup).constraint_count == 1

    @pytest.mark.unit
    def test_grid_spacing_and_cell_size(self, builder):
        """Spacing applies to both axes; explicit cell size wins."""
        record = builder.build(
            _node(
                {
                    "layout": {
                        "type": "grid",
                        "spacing": 6,
                        "cellSize": {"x": 64, "y": 32},
                    }
                }
            )
        )
        grid = record.instruction(GridGroup)
        assert grid.spacing == Vector2(x=6, y=6)
        assert grid.cell_size == Vector2(x=64, y=32)

    @pytest.mark.unit
    @pytest.mark.parametrize("kind", ["none", "flex", None])
    def test_no_layout_instruction(self, builder, kind):
        """None or unrecognized layout kinds attach nothing."""
        record = builder.build(_node({"layout": {"type": kind}}))
        assert not record.has_instruction(InstructionKind.LAYOUT_GROUP)
        assert not record.has_instruction(InstructionKind.GRID_GROUP)

    @pytest.mark.unit
    def test_custom_defaults(self):
        """Defaults are taken from the supplied structure."""
        defaults = BuildDefaults(
            grid_cell_size=Vector2(x=50, y=25),
            layout_alignment=Alignment.LOWER_RIGHT,
        )
        builder = TreeBuilder(defaults=defaults)
        grid = builder.build(
            _node({"layout": {"type": "grid", "alignment": "?"}})
        ).instruction(GridGroup)
        assert grid.cell_size == Vector2(x=50, y=25)
        assert grid.alignment == Alignment.LOWER_RIGHT


class TestBuildDocument:
    """Tests for whole-document builds."""

    @pytest.mark.unit
    def test_canvas_descriptor(self):
        """Whole-document builds describe the top-level canvas."""
        result = import_document({"root": {"type": "panel"}})
        canvas = result.canvas
        assert canvas.name == "ImportedCanvas"
        assert canvas.reference_resolution == Vector2(x=1080, y=1920)
        assert canvas.match_width_or_height == 0.5
        assert canvas.render_mode == "screenSpaceOverlay"
        assert canvas.positioning == RectDescriptor.stretch()
        assert canvas.ensure_event_system

    @pytest.mark.unit
    def test_minimal_example(self):
        """The canonical example builds a panel with one text child."""
        result = import_document(
            '{"root": {"type": "panel", "children": ['
            '{"type": "text", "text": "Hello", "style": {"fontSize": 24}}]}}'
        )
        assert result.root.name == "panel"
        assert not result.has_diagnostics
        (child,) = result.root.children
        assert child.instruction(TextRender).font_size == 24

    @pytest.mark.unit
    def test_malformed_document_raises(self):
        """Documents without root fail before building."""
        with pytest.raises(MalformedDocumentError):
            import_document("{}")

    @pytest.mark.unit
    def test_diagnostics_scoped_per_call(self):
        """Each build_document call reports only its own diagnostics."""
        builder = TreeBuilder()
        bad = parse_document({"root": {"type": "video"}})
        good = parse_document({"root": {"type": "panel"}})
        assert len(builder.build_document(bad).diagnostics) == 1
        assert builder.build_document(good).diagnostics == []
        assert len(builder.diagnostics) == 1

    @pytest.mark.unit
    def test_defaults_from_environment(self, monkeypatch):
        """Environment overrides flow into the canvas and grid defaults."""
        monkeypatch.setenv("DOMCANVAS_REFERENCE_WIDTH", "720")
        monkeypatch.setenv("DOMCANVAS_GRID_CELL_HEIGHT", "48")
        defaults = BuildDefaults.from_environment()
        assert defaults.reference_resolution.x == 720
        assert defaults.grid_cell_size.y == 48
        result = import_document({"root": {}}, defaults=defaults)
        assert result.canvas.reference_resolution.x == 720

    @pytest.mark.unit
    def test_clear_diagnostics(self):
        """Clearing empties the accumulated list without touching results."""
        builder = TreeBuilder()
        result = builder.build_document(parse_document({"root": {"type": "video"}}))
        builder.clear_diagnostics()
        assert builder.diagnostics == []
        assert len(result.diagnostics) == 1

    @pytest.mark.unit
    def test_event_system_from_environment(self, monkeypatch):
        """The canvas event system flag follows the environment."""
        monkeypatch.setenv("DOMCANVAS_ENSURE_EVENT_SYSTEM", "no")
        defaults = BuildDefaults.from_environment()
        result = import_document({"root": {}}, defaults=defaults)
        assert not result.canvas.ensure_event_system


class TestWrongTypes:
    """Wrongly typed values build with defaults and report nothing."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "layout, expected",
        [
            (
                {"type": "vertical", "spacing": "wide"},
                LayoutGroup(
                    axis=LayoutKind.VERTICAL,
                    padding=RectPadding(),
                    spacing=0.0,
                    alignment=Alignment.UPPER_LEFT,
                ),
            ),
            (
                {"type": "horizontal", "padding": "8px", "alignment": 4},
                LayoutGroup(
                    axis=LayoutKind.HORIZONTAL,
                    padding=RectPadding(),
                    spacing=0.0,
                    alignment=Alignment.UPPER_LEFT,
                ),
            ),
            (
                {"type": "grid", "columns": "three", "cellSize": 64},
                GridGroup(
                    padding=RectPadding(),
                    spacing=Vector2(x=0, y=0),
                    cell_size=Vector2(x=100, y=100),
                    constraint_count=1,
                    alignment=Alignment.UPPER_LEFT,
                ),
            ),
        ],
    )
    def test_layout_defaults(self, layout, expected):
        result = import_document({"root": {"type": "panel", "layout": layout}})
        assert not result.has_diagnostics
        assert result.root.instructions[-1] == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("font_size", [24.5, "large", [24]])
    def test_font_size_defaults(self, font_size):
        result = import_document(
            {"root": {"type": "text", "text": "Hi", "style": {"fontSize": font_size}}}
        )
        assert not result.has_diagnostics
        text = result.root.instruction(TextRender)
        assert text.content == "Hi"
        assert text.font_size is None

    @pytest.mark.unit
    def test_non_string_text_is_empty(self):
        result = import_document({"root": {"type": "text", "text": 42}})
        assert not result.has_diagnostics
        assert result.root.instruction(TextRender).content == ""

    @pytest.mark.unit
    def test_non_object_style_and_layout(self):
        """A style or layout that is not an object is absent."""
        result = import_document(
            {"root": {"type": "panel", "style": "red", "layout": 3, "size": "big"}}
        )
        assert not result.has_diagnostics
        assert result.root.instructions == (
            BackgroundFill(color=BuildDefaults().panel_background),
        )

    @pytest.mark.unit
    def test_button_without_string_text_has_no_label(self):
        result = import_document({"root": {"type": "button", "text": ["Go"]}})
        assert not result.has_diagnostics
        assert result.root.children == ()

    @pytest.mark.unit
    def test_non_object_children_skipped(self):
        result = import_document(
            {"root": {"children": [1, "x", {"type": "image", "name": "Logo"}]}}
        )
        assert not result.has_diagnostics
        assert [child.name for child in result.root.children] == ["Logo"]


class TestTextHandles:
    """Tests for text widget handle selection."""

    @pytest.mark.unit
    def test_select_handle(self):
        """Each supported widget maps to its handle class."""
        assert select_text_handle(TextSupport.RICH) is RichTextHandle
        assert select_text_handle(TextSupport.LEGACY) is LegacyTextHandle
        assert select_text_handle(TextSupport.NONE) is None

    @pytest.mark.unit
    def test_resolve_text_support(self):
        """Preferred widget wins over the fallback."""
        assert resolve_text_support(True, True) == TextSupport.RICH
        assert resolve_text_support(False, True) == TextSupport.LEGACY
        assert resolve_text_support(False, False) == TextSupport.NONE

    @pytest.mark.unit
    def test_parse_text_support(self):
        """Names parse case-insensitively with a default."""
        assert parse_text_support("Legacy") == TextSupport.LEGACY
        assert parse_text_support("none") == TextSupport.NONE
        assert parse_text_support("bogus") == TextSupport.RICH
        assert parse_text_support(None, TextSupport.NONE) == TextSupport.NONE

    @pytest.mark.unit
    def test_handle_roundtrip(self):
        """Handle setters end up in the instruction."""
        handle = LegacyTextHandle()
        handle.set_content("abc")
        handle.set_color(Color(r=0, g=0, b=0))
        handle.set_font_size(11)
        assert handle.to_instruction() == TextRender(
            widget=TextSupport.LEGACY,
            content="abc",
            alignment=Alignment.MIDDLE_CENTER,
            color=Color(r=0, g=0, b=0, a=1),
            font_size=11,
        )


class TestWidgetRecord:
    """Tests for record helpers."""

    @pytest.mark.unit
    def test_count(self):
        """Count includes the record and all descendants."""
        leaf = WidgetRecord(name="leaf", kind=NodeKind.TEXT)
        mid = WidgetRecord(name="mid", kind=NodeKind.PANEL, children=(leaf, leaf))
        root = WidgetRecord(name="root", kind=NodeKind.CONTAINER, children=(mid,))
        assert root.count() == 4

    @pytest.mark.unit
    def test_equality_ignores_source(self):
        """Records built from different but equal nodes compare equal."""
        first = WidgetRecord(name="a", kind=NodeKind.PANEL, source=Node(name="a"))
        second = WidgetRecord(name="a", kind=NodeKind.PANEL, source=None)
        assert first == second
