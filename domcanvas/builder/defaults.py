"""Default values applied by the tree builder."""

from dataclasses import dataclass, field

from domcanvas.config import EnvVar, get_environment
from domcanvas.schema import Alignment, Color, Vector2


def _white() -> Color:
    return Color(r=1, g=1, b=1, a=1)


@dataclass(frozen=True)
class BuildDefaults:
    """Every literal the construction rules fall back to.

    Attributes:
        panel_background: Panel fill when the style has no background colour.
        panel_fallback: Colour a panel background is resolved against.
        button_background: Button fill, also its resolution fallback.
        image_fallback: Colour an image tint is resolved against.
        text_fallback: Colour a text colour is resolved against.
        text_alignment: Alignment of all text instructions.
        layout_alignment: Child alignment when a layout's is unrecognized.
        grid_cell_size: Cell size for grids without an explicit one.
        button_transition: Visual transition of interactive buttons.
        label_name: Name of the label synthesized inside buttons.
        canvas_name: Name of the top-level canvas.
        reference_resolution: Canvas design resolution.
        match_width_or_height: Canvas scaler blend.
        ensure_event_system: Whether hosts must ensure an input event system.
    """

    panel_background: Color = field(
        default_factory=lambda: Color(r=1, g=1, b=1, a=0.05)
    )
    panel_fallback: Color = field(default_factory=_white)
    button_background: Color = field(
        default_factory=lambda: Color(r=0.9, g=0.9, b=0.9, a=1)
    )
    image_fallback: Color = field(default_factory=_white)
    text_fallback: Color = field(default_factory=lambda: Color(r=0, g=0, b=0, a=1))
    text_alignment: Alignment = Alignment.MIDDLE_CENTER
    layout_alignment: Alignment = Alignment.UPPER_LEFT
    grid_cell_size: Vector2 = field(default_factory=lambda: Vector2(x=100, y=100))
    button_transition: str = "colorTint"
    label_name: str = "Label"
    canvas_name: str = "ImportedCanvas"
    reference_resolution: Vector2 = field(
        default_factory=lambda: Vector2(x=1080, y=1920)
    )
    match_width_or_height: float = 0.5
    ensure_event_system: bool = True

    @classmethod
    def from_environment(cls) -> "BuildDefaults":
        """Defaults with canvas and grid values read from the environment."""
        return cls(
            grid_cell_size=Vector2(
                x=get_environment(EnvVar.GRID_CELL_WIDTH),
                y=get_environment(EnvVar.GRID_CELL_HEIGHT),
            ),
            reference_resolution=Vector2(
                x=get_environment(EnvVar.REFERENCE_WIDTH),
                y=get_environment(EnvVar.REFERENCE_HEIGHT),
            ),
            match_width_or_height=get_environment(EnvVar.MATCH_WIDTH_OR_HEIGHT),
            ensure_event_system=get_environment(EnvVar.ENSURE_EVENT_SYSTEM),
        )


__all__ = ["BuildDefaults"]
