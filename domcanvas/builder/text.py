"""Text widget handles.

A host answers a single capability question, which text widget it can
provide. The builder turns that answer into a handle class once per build
session and fills one handle per text instruction through the same
interface, whichever widget ends up rendering the text.
"""

from abc import ABC, abstractmethod

from domcanvas.schema import Alignment, Color

from .records import TextRender, TextSupport


class TextWidgetHandle(ABC):
    """Write-only interface over a text widget's properties.

    Example:
        >>> handle = RichTextHandle()
        >>> handle.set_content("Hello")
        >>> handle.set_font_size(24)
        >>> handle.to_instruction().font_size
        24
    """

    def __init__(self, alignment: Alignment = Alignment.MIDDLE_CENTER):
        self._content = ""
        self._alignment = alignment
        self._color: Color | None = None
        self._font_size: int | None = None

    @property
    @abstractmethod
    def widget(self) -> TextSupport:
        """Text widget implementation this handle targets."""
        ...

    def set_content(self, content: str) -> None:
        self._content = content

    def set_color(self, color: Color) -> None:
        self._color = color

    def set_font_size(self, size: int) -> None:
        self._font_size = size

    def to_instruction(self) -> TextRender:
        """Freeze the handle's state into a text instruction."""
        return TextRender(
            widget=self.widget,
            content=self._content,
            alignment=self._alignment,
            color=self._color,
            font_size=self._font_size,
        )


class RichTextHandle(TextWidgetHandle):
    """Handle for the host's preferred text widget."""

    @property
    def widget(self) -> TextSupport:
        return TextSupport.RICH


class LegacyTextHandle(TextWidgetHandle):
    """Handle for the host's fallback text widget."""

    @property
    def widget(self) -> TextSupport:
        return TextSupport.LEGACY


_HANDLES: dict[TextSupport, type[TextWidgetHandle]] = {
    TextSupport.RICH: RichTextHandle,
    TextSupport.LEGACY: LegacyTextHandle,
}


def select_text_handle(support: TextSupport) -> type[TextWidgetHandle] | None:
    """Map a host's text support to a handle class.

    Returns:
        The handle class, or None when the host cannot render text.
    """
    return _HANDLES.get(support)


def resolve_text_support(preferred: bool, fallback: bool) -> TextSupport:
    """Pick the text widget from the host's two availability flags.

    The preferred widget wins when available; the fallback is used only
    when the preferred one is missing.
    """
    if preferred:
        return TextSupport.RICH
    if fallback:
        return TextSupport.LEGACY
    return TextSupport.NONE


def parse_text_support(
    value: str | None, default: TextSupport = TextSupport.RICH
) -> TextSupport:
    """Parse a text support name (rich, legacy, none), case-insensitively."""
    if not value:
        return default
    try:
        return TextSupport(value.strip().lower())
    except ValueError:
        return default


__all__ = [
    "TextWidgetHandle",
    "RichTextHandle",
    "LegacyTextHandle",
    "select_text_handle",
    "resolve_text_support",
    "parse_text_support",
]
