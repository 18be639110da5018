"""Tree builder: documents to widget-construction records.

The builder walks a parsed Document depth-first, deciding for every node
which widget kind, layout behaviour and style instructions apply, and emits
a separate tree of WidgetRecords. It never raises for data issues: bad
values degrade to defaults, and the two problems worth reporting (an
unsupported node type, a host without text support) become diagnostics.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from domcanvas.core import get_logger
from domcanvas.schema import (
    Document,
    Layout,
    LayoutKind,
    Node,
    NodeKind,
    Size,
    Vector2,
    parse_document,
)

from .defaults import BuildDefaults
from .records import (
    BackgroundFill,
    CanvasDescriptor,
    GridGroup,
    Instruction,
    Interactive,
    LayoutGroup,
    RectDescriptor,
    RectPadding,
    SizingHint,
    TextRender,
    TextSupport,
    WidgetRecord,
)
from .text import select_text_handle

logger = get_logger("builder")


class DiagnosticKind(str, Enum):
    """Non-fatal problems reported while building."""

    UNSUPPORTED_NODE_KIND = "unsupported_node_kind"
    MISSING_TEXT_CAPABILITY = "missing_text_capability"


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem found while building a node.

    Attributes:
        kind: Classification of the problem.
        node_name: Safe name of the node concerned.
        message: Human-readable explanation.
        value: The offending value, if any.
    """

    kind: DiagnosticKind
    node_name: str
    message: str
    value: str | None = None


DiagnosticSink = Callable[[Diagnostic], None]


@dataclass
class BuildResult:
    """Result of building a whole document.

    Attributes:
        canvas: Top-level surface to realize the tree under.
        root: Record for the document root, or None if the root was dropped.
        diagnostics: Problems reported during the build, in order.
    """

    canvas: CanvasDescriptor
    root: WidgetRecord | None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_diagnostics(self) -> bool:
        """Check if any diagnostics were reported."""
        return len(self.diagnostics) > 0


class TreeBuilder:
    """Builds widget records for one build session.

    The host's text support is fixed when the builder is created, so every
    text node of a session is treated the same way.

    Args:
        text_support: Text widget the host can provide.
        defaults: Fallback values for construction rules.
        sink: Optional callable receiving each diagnostic as it is reported.

    Example:
        >>> builder = TreeBuilder(text_support=TextSupport.RICH)
        >>> result = builder.build_document(document)
        >>> result.root.name
        'panel'
    """

    def __init__(
        self,
        text_support: TextSupport = TextSupport.RICH,
        defaults: BuildDefaults | None = None,
        sink: DiagnosticSink | None = None,
    ):
        self._text_support = text_support
        self._text_handle = select_text_handle(text_support)
        self._defaults = defaults or BuildDefaults()
        self._sink = sink
        self._diagnostics: list[Diagnostic] = []

    @property
    def text_support(self) -> TextSupport:
        return self._text_support

    @property
    def defaults(self) -> BuildDefaults:
        return self._defaults

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """All diagnostics reported by this builder so far."""
        return list(self._diagnostics)

    def clear_diagnostics(self) -> None:
        """Forget diagnostics accumulated by earlier builds."""
        self._diagnostics.clear()

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def build_document(self, document: Document) -> BuildResult:
        """Build the canvas descriptor and record tree for a document.

        Args:
            document: Parsed document.

        Returns:
            BuildResult with the diagnostics reported by this call only.
        """
        start = len(self._diagnostics)
        root = self.build(document.root)
        diagnostics = self._diagnostics[start:]
        logger.debug(
            f"Built {root.count() if root else 0} record(s) "
            f"with {len(diagnostics)} diagnostic(s)"
        )
        return BuildResult(
            canvas=self.build_canvas(),
            root=root,
            diagnostics=diagnostics,
        )

    def build_canvas(self) -> CanvasDescriptor:
        """Descriptor for the top-level canvas."""
        return CanvasDescriptor(
            name=self._defaults.canvas_name,
            reference_resolution=self._defaults.reference_resolution,
            match_width_or_height=self._defaults.match_width_or_height,
            ensure_event_system=self._defaults.ensure_event_system,
        )

    def build(self, node: Node | None) -> WidgetRecord | None:
        """Build the record for a node and, recursively, its children.

        Args:
            node: Node to build. None builds to nothing.

        Returns:
            The record, or None for a missing node or an unsupported kind.
            An unsupported node's children are not built either.
        """
        if node is None:
            return None

        kind = node.node_kind
        if kind == NodeKind.UNKNOWN:
            self._report(
                DiagnosticKind.UNSUPPORTED_NODE_KIND,
                node,
                f"Unsupported node type: {node.kind}",
                value=node.kind,
            )
            return None

        instructions: list[Instruction] = []
        synthesized: list[WidgetRecord] = []

        if kind in (NodeKind.PANEL, NodeKind.CONTAINER):
            instructions.extend(self._panel_instructions(node, kind))
        elif kind == NodeKind.TEXT:
            text = self._text_instruction(node)
            if text is not None:
                instructions.append(text)
        elif kind == NodeKind.BUTTON:
            instructions.extend(self._button_instructions(node))
            if node.text:
                synthesized.append(self._button_label(node))
        elif kind == NodeKind.IMAGE:
            instructions.extend(self._image_instructions(node))

        if node.size is not None:
            instructions.append(self._sizing_hint(node.size))

        if node.layout is not None:
            group = self._layout_group(node.layout)
            if group is not None:
                instructions.append(group)

        children = synthesized + [
            record
            for record in (self.build(child) for child in node.children)
            if record is not None
        ]

        return WidgetRecord(
            name=node.safe_name(),
            kind=kind,
            positioning=RectDescriptor.centered(),
            instructions=tuple(instructions),
            children=tuple(children),
            source=node,
        )

    # -------------------------------------------------------------------------
    # Kind-specific rules
    # -------------------------------------------------------------------------

    def _panel_instructions(self, node: Node, kind: NodeKind) -> list[Instruction]:
        if kind != NodeKind.PANEL:
            return []
        style = node.style
        if style is not None and style.background_color is not None:
            color = style.background_color.resolve(self._defaults.panel_fallback)
        else:
            color = self._defaults.panel_background
        return [BackgroundFill(color=color)]

    def _button_instructions(self, node: Node) -> list[Instruction]:
        style = node.style
        background = self._defaults.button_background
        if style is not None and style.background_color is not None:
            color = style.background_color.resolve(background)
        else:
            color = background
        return [
            BackgroundFill(color=color),
            Interactive(transition=self._defaults.button_transition),
        ]

    def _button_label(self, node: Node) -> WidgetRecord:
        """Label record centred inside a button, reusing its text and style."""
        text = self._text_instruction(node)
        return WidgetRecord(
            name=self._defaults.label_name,
            kind=NodeKind.TEXT,
            positioning=RectDescriptor.centered(),
            instructions=(text,) if text is not None else (),
            source=node,
        )

    def _image_instructions(self, node: Node) -> list[Instruction]:
        style = node.style
        if style is None or style.background_color is None:
            return []
        color = style.background_color.resolve(self._defaults.image_fallback)
        return [BackgroundFill(color=color)]

    def _text_instruction(self, node: Node) -> TextRender | None:
        if self._text_handle is None:
            self._report(
                DiagnosticKind.MISSING_TEXT_CAPABILITY,
                node,
                f"No text widget available; text of '{node.safe_name()}' omitted",
            )
            return None

        handle = self._text_handle(alignment=self._defaults.text_alignment)
        handle.set_content(node.text or "")

        style = node.style
        if style is not None:
            if style.text_color is not None:
                handle.set_color(style.text_color.resolve(self._defaults.text_fallback))
            if style.font_size > 0:
                handle.set_font_size(style.font_size)

        return handle.to_instruction()

    # -------------------------------------------------------------------------
    # Size and layout
    # -------------------------------------------------------------------------

    def _sizing_hint(self, size: Size) -> SizingHint:
        def positive(value: float) -> float | None:
            return value if value > 0 else None

        return SizingHint(
            preferred_width=positive(size.preferred_width),
            preferred_height=positive(size.preferred_height),
            min_width=positive(size.min_width),
            min_height=positive(size.min_height),
        )

    def _layout_group(self, layout: Layout) -> LayoutGroup | GridGroup | None:
        layout_kind = layout.layout_kind
        padding = _to_rect_padding(layout)
        alignment = layout.get_alignment(self._defaults.layout_alignment)

        if layout_kind in (LayoutKind.VERTICAL, LayoutKind.HORIZONTAL):
            return LayoutGroup(
                axis=layout_kind,
                padding=padding,
                spacing=layout.spacing,
                alignment=alignment,
            )

        if layout_kind == LayoutKind.GRID:
            return GridGroup(
                padding=padding,
                spacing=Vector2(x=layout.spacing, y=layout.spacing),
                cell_size=layout.get_cell_size(self._defaults.grid_cell_size),
                constraint_count=max(1, layout.columns),
                alignment=alignment,
            )

        return None

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    def _report(
        self,
        kind: DiagnosticKind,
        node: Node,
        message: str,
        value: str | None = None,
    ) -> None:
        diagnostic = Diagnostic(
            kind=kind,
            node_name=node.safe_name(),
            message=message,
            value=value,
        )
        self._diagnostics.append(diagnostic)
        logger.warning(message)
        if self._sink is not None:
            self._sink(diagnostic)


def _to_rect_padding(layout: Layout) -> RectPadding:
    """Truncate float padding to the integral offsets hosts apply."""
    padding = layout.get_padding()
    return RectPadding(
        left=int(padding.left),
        right=int(padding.right),
        top=int(padding.top),
        bottom=int(padding.bottom),
    )


def build_document(
    document: Document,
    text_support: TextSupport = TextSupport.RICH,
    defaults: BuildDefaults | None = None,
    sink: DiagnosticSink | None = None,
) -> BuildResult:
    """Build a parsed document in a fresh build session.

    Args:
        document: Parsed document.
        text_support: Text widget the host can provide.
        defaults: Fallback values for construction rules.
        sink: Optional diagnostic callback.

    Returns:
        BuildResult with canvas, record tree and diagnostics.
    """
    builder = TreeBuilder(text_support=text_support, defaults=defaults, sink=sink)
    return builder.build_document(document)


def import_document(
    raw: str | bytes | bytearray | Mapping[str, Any],
    text_support: TextSupport = TextSupport.RICH,
    defaults: BuildDefaults | None = None,
    sink: DiagnosticSink | None = None,
) -> BuildResult:
    """Parse and build a document in one step.

    Raises:
        MalformedDocumentError: If the document cannot be parsed. Nothing is
            built in that case.
    """
    document = parse_document(raw)
    return build_document(document, text_support, defaults, sink)


__all__ = [
    "DiagnosticKind",
    "Diagnostic",
    "DiagnosticSink",
    "BuildResult",
    "TreeBuilder",
    "build_document",
    "import_document",
]
