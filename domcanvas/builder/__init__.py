"""Tree builder - documents to widget-construction records.

Example usage:
    >>> from domcanvas.builder import TextSupport, import_document
    >>> result = import_document('{"root": {"type": "panel"}}')
    >>> result.root.kind
    <NodeKind.PANEL: 'panel'>
"""

from .defaults import BuildDefaults
from .lib import (
    BuildResult,
    Diagnostic,
    DiagnosticKind,
    DiagnosticSink,
    TreeBuilder,
    build_document,
    import_document,
)
from .records import (
    BackgroundFill,
    CanvasDescriptor,
    GridGroup,
    Instruction,
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
    TextWidgetHandle,
    parse_text_support,
    resolve_text_support,
    select_text_handle,
)

__all__ = [
    # Builder
    "BuildDefaults",
    "BuildResult",
    "TreeBuilder",
    "build_document",
    "import_document",
    # Diagnostics
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticSink",
    # Records
    "CanvasDescriptor",
    "RectDescriptor",
    "RectPadding",
    "WidgetRecord",
    # Instructions
    "Instruction",
    "InstructionKind",
    "BackgroundFill",
    "TextRender",
    "Interactive",
    "SizingHint",
    "LayoutGroup",
    "GridGroup",
    # Text
    "TextSupport",
    "TextWidgetHandle",
    "RichTextHandle",
    "LegacyTextHandle",
    "select_text_handle",
    "resolve_text_support",
    "parse_text_support",
]
