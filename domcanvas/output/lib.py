"""Output formatting for widget record trees.

Generates human-readable text trees for review and plain, JSON-serializable
dicts for renderers outside Python.
"""

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel

from domcanvas.builder import (
    BackgroundFill,
    BuildResult,
    CanvasDescriptor,
    Diagnostic,
    GridGroup,
    Instruction,
    Interactive,
    LayoutGroup,
    SizingHint,
    TextRender,
    WidgetRecord,
)
from domcanvas.schema import Color


def _to_plain(value: Any) -> Any:
    """Convert models, enums and dataclasses to JSON-compatible values."""
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    return value


def instruction_to_dict(instruction: Instruction) -> dict[str, Any]:
    """Convert an instruction to a dict tagged with its kind."""
    return {"kind": instruction.kind.value, **_to_plain(instruction)}


def record_to_dict(record: WidgetRecord, recursive: bool = True) -> dict[str, Any]:
    """Convert a record (and by default its subtree) to a plain dict.

    Args:
        record: Record to convert.
        recursive: Include converted children when True.

    Returns:
        Dict with name, kind, positioning, instructions and children.
    """
    data: dict[str, Any] = {
        "name": record.name,
        "kind": record.kind.value,
        "positioning": _to_plain(record.positioning),
        "instructions": [instruction_to_dict(i) for i in record.instructions],
    }
    if recursive:
        data["children"] = [record_to_dict(child) for child in record.children]
    return data


def canvas_to_dict(canvas: CanvasDescriptor) -> dict[str, Any]:
    return _to_plain(canvas)


def diagnostic_to_dict(diagnostic: Diagnostic) -> dict[str, Any]:
    return _to_plain(diagnostic)


def result_to_dict(result: BuildResult) -> dict[str, Any]:
    """Convert a whole build result to a plain dict."""
    return {
        "canvas": canvas_to_dict(result.canvas),
        "root": record_to_dict(result.root) if result.root is not None else None,
        "diagnostics": [diagnostic_to_dict(d) for d in result.diagnostics],
    }


def _color_hex(color: Color) -> str:
    channels = (color.r, color.g, color.b, color.a)
    return "#" + "".join(
        f"{round(max(0.0, min(1.0, c)) * 255):02X}" for c in channels
    )


def _describe(instruction: Instruction) -> str:
    """Short label for an instruction in the text tree."""
    if isinstance(instruction, BackgroundFill):
        return f"bg {_color_hex(instruction.color)}"
    if isinstance(instruction, TextRender):
        return f'text "{instruction.content}"'
    if isinstance(instruction, Interactive):
        return "interactive"
    if isinstance(instruction, SizingHint):
        hints = [
            f"{name}={value:g}"
            for name, value in (
                ("w", instruction.preferred_width),
                ("h", instruction.preferred_height),
                ("min_w", instruction.min_width),
                ("min_h", instruction.min_height),
            )
            if value is not None
        ]
        return "size " + " ".join(hints) if hints else "size"
    if isinstance(instruction, LayoutGroup):
        return instruction.axis.value
    if isinstance(instruction, GridGroup):
        return f"grid {instruction.constraint_count} cols"
    return instruction.kind.value


def format_widget_tree(record: WidgetRecord) -> str:
    """Format a record tree as a human-readable tree.

    Example output:
        Main [panel, bg #FFFFFF0D, vertical]
        ├── Title [text, text "Hello"]
        └── Submit [button, bg #E6E6E6FF, interactive]
            └── Label [text, text "Submit"]

    Args:
        record: Root record to format.

    Returns:
        Formatted tree string.
    """
    lines: list[str] = []
    _format_record(record, lines, "", is_last=True, is_root=True)
    return "\n".join(lines)


def _format_record(
    record: WidgetRecord,
    lines: list[str],
    prefix: str,
    is_last: bool,
    is_root: bool = False,
) -> None:
    """Recursively format a record and its children."""
    if is_root:
        connector = ""
        child_prefix = ""
    else:
        connector = "└── " if is_last else "├── "
        child_prefix = prefix + ("    " if is_last else "│   ")

    attrs = [record.kind.value]
    attrs.extend(_describe(instruction) for instruction in record.instructions)
    lines.append(f"{prefix}{connector}{record.name} [{', '.join(attrs)}]")

    for i, child in enumerate(record.children):
        _format_record(child, lines, child_prefix, i == len(record.children) - 1)


def format_build_result(result: BuildResult) -> str:
    """Format canvas, record tree and diagnostics for terminal review."""
    canvas = result.canvas
    resolution = canvas.reference_resolution
    lines = [
        f"{canvas.name} [canvas, {resolution.x:g}x{resolution.y:g}, "
        f"match {canvas.match_width_or_height:g}]"
    ]
    if result.root is not None:
        lines.append(format_widget_tree(result.root))
    else:
        lines.append("(no root record)")
    for diagnostic in result.diagnostics:
        lines.append(f"! {diagnostic.kind.value}: {diagnostic.message}")
    return "\n".join(lines)


__all__ = [
    "instruction_to_dict",
    "record_to_dict",
    "canvas_to_dict",
    "diagnostic_to_dict",
    "result_to_dict",
    "format_widget_tree",
    "format_build_result",
]
