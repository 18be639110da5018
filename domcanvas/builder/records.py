"""Widget-construction records produced by the tree builder.

A record describes one widget for a host to realize: its display name, a
positioning descriptor, the construction instructions to apply, and its
ordered children. Records never reference host objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TypeVar

from domcanvas.schema import Alignment, Color, LayoutKind, Node, NodeKind, Vector2


class TextSupport(str, Enum):
    """Text widget implementation a host can provide.

    RICH is the preferred widget, LEGACY the fallback, NONE means the host
    cannot render text at all.
    """

    RICH = "rich"
    LEGACY = "legacy"
    NONE = "none"


class InstructionKind(str, Enum):
    """Kinds of construction instruction attached to a record."""

    BACKGROUND = "background"
    TEXT = "text"
    INTERACTIVE = "interactive"
    SIZING = "sizing"
    LAYOUT_GROUP = "layout_group"
    GRID_GROUP = "grid_group"


# =============================================================================
# Positioning
# =============================================================================


@dataclass(frozen=True)
class RectDescriptor:
    """Anchor-based rectangle relative to the parent widget."""

    anchor_min: Vector2
    anchor_max: Vector2
    pivot: Vector2
    anchored_position: Vector2 = field(default_factory=Vector2)
    size_delta: Vector2 = field(default_factory=Vector2)

    @classmethod
    def centered(cls) -> RectDescriptor:
        """Zero-size rectangle anchored at the parent's center."""
        center = Vector2(x=0.5, y=0.5)
        return cls(anchor_min=center, anchor_max=center, pivot=center)

    @classmethod
    def stretch(cls) -> RectDescriptor:
        """Rectangle filling the parent with zero offsets."""
        return cls(
            anchor_min=Vector2(x=0, y=0),
            anchor_max=Vector2(x=1, y=1),
            pivot=Vector2(x=0.5, y=0.5),
        )


@dataclass(frozen=True)
class RectPadding:
    """Integral edge padding as hosts apply it."""

    left: int = 0
    right: int = 0
    top: int = 0
    bottom: int = 0


# =============================================================================
# Instructions
# =============================================================================


@dataclass(frozen=True)
class BackgroundFill:
    """Filled background (or image tint) colour."""

    color: Color

    @property
    def kind(self) -> InstructionKind:
        return InstructionKind.BACKGROUND


@dataclass(frozen=True)
class TextRender:
    """Text content and styling for a text widget.

    Attributes:
        widget: Which text widget implementation renders the text.
        content: Text to display.
        alignment: Anchor of the text within its rectangle.
        color: Text colour, or None for the host default.
        font_size: Font size, or None for the host default.
    """

    widget: TextSupport
    content: str
    alignment: Alignment
    color: Color | None = None
    font_size: int | None = None

    @property
    def kind(self) -> InstructionKind:
        return InstructionKind.TEXT


@dataclass(frozen=True)
class Interactive:
    """Clickable behaviour with a visual transition."""

    transition: str = "colorTint"

    @property
    def kind(self) -> InstructionKind:
        return InstructionKind.INTERACTIVE


@dataclass(frozen=True)
class SizingHint:
    """Layout sizing hints; None means no hint for that dimension."""

    preferred_width: float | None = None
    preferred_height: float | None = None
    min_width: float | None = None
    min_height: float | None = None

    @property
    def kind(self) -> InstructionKind:
        return InstructionKind.SIZING


@dataclass(frozen=True)
class LayoutGroup:
    """Linear (vertical or horizontal) arrangement of children.

    Children's sizes are controlled by the group on both axes, while forced
    expansion stays off so children keep their preferred size along the
    growth axis.
    """

    axis: LayoutKind
    padding: RectPadding
    spacing: float
    alignment: Alignment
    child_control_width: bool = True
    child_control_height: bool = True
    child_force_expand_width: bool = False
    child_force_expand_height: bool = False

    @property
    def kind(self) -> InstructionKind:
        return InstructionKind.LAYOUT_GROUP


@dataclass(frozen=True)
class GridGroup:
    """Grid arrangement with a fixed column count."""

    padding: RectPadding
    spacing: Vector2
    cell_size: Vector2
    constraint_count: int
    alignment: Alignment
    constraint: str = "fixedColumnCount"

    @property
    def kind(self) -> InstructionKind:
        return InstructionKind.GRID_GROUP


Instruction = (
    BackgroundFill | TextRender | Interactive | SizingHint | LayoutGroup | GridGroup
)

_I = TypeVar(
    "_I", BackgroundFill, TextRender, Interactive, SizingHint, LayoutGroup, GridGroup
)


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class WidgetRecord:
    """Construction instructions for a single widget.

    Attributes:
        name: Display name of the widget.
        kind: Node kind the record was built as.
        positioning: Rectangle relative to the parent.
        instructions: Construction instructions, in application order.
        children: Child records in rendering order.
        source: Input node the record was built from. Not part of equality.
    """

    name: str
    kind: NodeKind
    positioning: RectDescriptor = field(default_factory=RectDescriptor.centered)
    instructions: tuple[Instruction, ...] = ()
    children: tuple[WidgetRecord, ...] = ()
    source: Node | None = field(default=None, compare=False, repr=False)

    def instruction(self, instruction_type: type[_I]) -> _I | None:
        """Return the first instruction of the given type, if any."""
        for item in self.instructions:
            if isinstance(item, instruction_type):
                return item
        return None

    def has_instruction(self, kind: InstructionKind) -> bool:
        return any(item.kind == kind for item in self.instructions)

    def count(self) -> int:
        """Number of records in this subtree, including this one."""
        return 1 + sum(child.count() for child in self.children)


@dataclass(frozen=True)
class CanvasDescriptor:
    """Top-level surface the record tree is realized under.

    Attributes:
        name: Name of the canvas widget.
        render_mode: How the canvas is composited.
        scale_mode: How the canvas scales with the screen.
        reference_resolution: Design resolution the layout targets.
        match_width_or_height: Scaler blend between width (0) and height (1).
        positioning: Rectangle of the canvas, filling its parent.
        raycaster: Whether the canvas receives pointer input.
        ensure_event_system: Whether the host must ensure an input event
            system exists.
    """

    name: str
    reference_resolution: Vector2
    match_width_or_height: float
    render_mode: str = "screenSpaceOverlay"
    scale_mode: str = "scaleWithScreenSize"
    positioning: RectDescriptor = field(default_factory=RectDescriptor.stretch)
    raycaster: bool = True
    ensure_event_system: bool = True


__all__ = [
    "TextSupport",
    "InstructionKind",
    "RectDescriptor",
    "RectPadding",
    "BackgroundFill",
    "TextRender",
    "Interactive",
    "SizingHint",
    "LayoutGroup",
    "GridGroup",
    "Instruction",
    "WidgetRecord",
    "CanvasDescriptor",
]
