"""Schema module - document model for declarative UI layout JSON.

This module provides:
- Frozen document models (Document, Node, Layout, Style, Size, Color, ...)
- Enumeration parsing with per-field fallback
- Document parsing and JSON Schema export

Example usage:
    >>> from domcanvas.schema import parse_document
    >>> doc = parse_document('{"root": {"type": "panel"}}')
    >>> doc.root.safe_name()
    'panel'
"""

from .lib import (
    Alignment,
    Color,
    Document,
    Layout,
    LayoutKind,
    MalformedDocumentError,
    Node,
    NodeKind,
    Offsets,
    Size,
    Style,
    Vector2,
    export_json_schema,
    parse_alignment,
    parse_document,
    parse_layout_kind,
    parse_node_kind,
)

__all__ = [
    # Enums
    "Alignment",
    "LayoutKind",
    "NodeKind",
    # Enum parsing
    "parse_alignment",
    "parse_layout_kind",
    "parse_node_kind",
    # Models
    "Color",
    "Document",
    "Layout",
    "Node",
    "Offsets",
    "Size",
    "Style",
    "Vector2",
    # Parsing
    "MalformedDocumentError",
    "parse_document",
    "export_json_schema",
]
