"""Document model for declarative UI layout JSON.

This module is the single source of truth for the document format consumed
by the tree builder. It provides:
- Frozen pydantic models for documents, nodes, layouts, styles and sizes
- String-to-enum resolution with a fixed fallback per field
- Document parsing with a single hard failure (MalformedDocumentError)
- JSON Schema export for document authors

Parsing is permissive: absent, null or wrongly typed fields take their
documented defaults, and unrecognized enumeration strings resolve to a
fallback member rather than failing. Only a document that cannot be decoded,
that is not an object, or that has no root node, is rejected.
"""

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

# =============================================================================
# Enumerations
# =============================================================================


class NodeKind(str, Enum):
    """Widget kind a node is built as.

    UNKNOWN is produced for unrecognized `type` strings; such nodes are
    dropped by the builder together with their subtree.
    """

    CONTAINER = "container"
    PANEL = "panel"
    TEXT = "text"
    BUTTON = "button"
    IMAGE = "image"
    UNKNOWN = "unknown"


class LayoutKind(str, Enum):
    """Strategy used to arrange a node's children."""

    NONE = "none"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    GRID = "grid"


class Alignment(str, Enum):
    """Nine-point anchor used for child and text alignment."""

    UPPER_LEFT = "upperLeft"
    UPPER_CENTER = "upperCenter"
    UPPER_RIGHT = "upperRight"
    MIDDLE_LEFT = "middleLeft"
    MIDDLE_CENTER = "middleCenter"
    MIDDLE_RIGHT = "middleRight"
    LOWER_LEFT = "lowerLeft"
    LOWER_CENTER = "lowerCenter"
    LOWER_RIGHT = "lowerRight"


_E = TypeVar("_E", bound=Enum)


def _match_enum(enum_cls: type[_E], value: str | None) -> _E | None:
    """Case-insensitive exact match of a string against enum values."""
    if not value:
        return None
    wanted = value.lower()
    for member in enum_cls:
        if member.value.lower() == wanted:
            return member
    return None


def parse_node_kind(value: str | None) -> NodeKind:
    """Resolve a node `type` string.

    Args:
        value: Raw string from the document.

    Returns:
        CONTAINER for empty or missing values, the matching member when the
        string names one, UNKNOWN otherwise.
    """
    if not value:
        return NodeKind.CONTAINER
    return _match_enum(NodeKind, value) or NodeKind.UNKNOWN


def parse_layout_kind(value: str | None) -> LayoutKind:
    """Resolve a layout `type` string, falling back to NONE."""
    return _match_enum(LayoutKind, value) or LayoutKind.NONE


def parse_alignment(
    value: str | None, fallback: Alignment = Alignment.UPPER_LEFT
) -> Alignment:
    """Resolve an alignment string, falling back to `fallback`."""
    return _match_enum(Alignment, value) or fallback


# =============================================================================
# Document Models
# =============================================================================


class _DocumentModel(BaseModel):
    """Base for all document models.

    Keys are camelCase in JSON and snake_case in Python. Explicit nulls are
    treated as absent, and a value of the wrong type (such as a string
    where a style object is expected) is replaced by the field default.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @field_validator("*", mode="wrap")
    @classmethod
    def _default_on_error(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        """Replace a wrongly typed value with the field's default."""
        try:
            return handler(value)
        except ValidationError:
            field = cls.model_fields[info.field_name]
            return field.get_default(call_default_factory=True)


class Color(_DocumentModel):
    """RGBA colour with float channels in the 0-1 range."""

    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0

    def resolve(self, fallback: "Color") -> "Color":
        """Resolve against a fallback colour.

        A literal zero alpha is read as "unset" and replaced by the
        fallback's alpha. All other channels are taken as written.
        """
        alpha = fallback.a if self.a == 0 else self.a
        return Color(r=self.r, g=self.g, b=self.b, a=alpha)


class Offsets(_DocumentModel):
    """Edge offsets used for layout padding."""

    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0


class Vector2(_DocumentModel):
    """Two-dimensional size or position."""

    x: float = 0.0
    y: float = 0.0


class Size(_DocumentModel):
    """Sizing hints for a node within its parent's layout.

    Zero means "no hint"; only strictly positive values are applied.
    """

    preferred_width: float = 0.0
    preferred_height: float = 0.0
    min_width: float = 0.0
    min_height: float = 0.0


class Style(_DocumentModel):
    """Visual appearance of a node.

    `corner_radius` and `border_color` are carried for renderers but no
    construction rule reads them.
    """

    background_color: Color | None = None
    text_color: Color | None = None
    font_size: int = 0
    corner_radius: float = 0.0
    border_color: Color | None = None

    @property
    def has_background_color(self) -> bool:
        return self.background_color is not None

    @property
    def has_text_color(self) -> bool:
        return self.text_color is not None


class Layout(_DocumentModel):
    """How a node arranges its children."""

    kind: str | None = Field(default="none", alias="type")
    padding: Offsets | None = None
    spacing: float = 0.0
    alignment: str | None = "upperLeft"
    columns: int = 1
    cell_size: Vector2 | None = None

    @property
    def layout_kind(self) -> LayoutKind:
        return parse_layout_kind(self.kind)

    def get_padding(self) -> Offsets:
        """Padding, or all-zero offsets when absent."""
        return self.padding or Offsets()

    def get_cell_size(self, default: Vector2) -> Vector2:
        """Explicit cell size, or `default` when absent."""
        return self.cell_size or default

    def get_alignment(self, fallback: Alignment = Alignment.UPPER_LEFT) -> Alignment:
        return parse_alignment(self.alignment, fallback)


class Node(_DocumentModel):
    """Recursive node definition for the UI document.

    Attributes:
        kind: Raw `type` string, resolved through `node_kind`.
        name: Optional display name.
        text: Text content for text and button nodes.
        image: Image reference; resolved by the host, not by the builder.
        layout: Arrangement of this node's children.
        style: Visual appearance of this node.
        size: Sizing hints within the parent's layout.
        children: Ordered child nodes. Null and non-object entries are kept
            as None and build to nothing.

    Example:
        >>> node = Node.model_validate(
        ...     {"type": "text", "text": "Hello", "style": {"fontSize": 24}}
        ... )
        >>> node.node_kind
        <NodeKind.TEXT: 'text'>
    """

    kind: str | None = Field(default=None, alias="type")
    name: str | None = None
    text: str | None = None
    image: str | None = None
    layout: Layout | None = None
    style: Style | None = None
    size: Size | None = None
    children: tuple["Node | None", ...] = ()

    @field_validator("children", mode="before")
    @classmethod
    def _coerce_children(cls, value: Any) -> Any:
        """Entries that are not objects build to nothing, like nulls."""
        if not isinstance(value, (list, tuple)):
            return ()
        return tuple(
            item if isinstance(item, (Mapping, Node)) else None for item in value
        )

    @property
    def node_kind(self) -> NodeKind:
        return parse_node_kind(self.kind)

    def safe_name(self) -> str:
        """Human-readable identifier.

        Returns the name when set, else the raw type string, else "Node".
        """
        if self.name:
            return self.name
        return self.kind or "Node"


class Document(_DocumentModel):
    """Root document object mirroring the JSON structure."""

    root: Node | None = None


# =============================================================================
# Parsing
# =============================================================================


class MalformedDocumentError(Exception):
    """Raised when a document cannot be understood at all.

    Only undecodable input, a non-object top level and a missing root are
    malformed; every other problem resolves to a field default.
    """


def parse_document(raw: str | bytes | bytearray | Mapping[str, Any]) -> Document:
    """Parse a document from JSON text or an already decoded mapping.

    Args:
        raw: UTF-8 JSON text, or a mapping produced by a JSON decoder.

    Returns:
        The parsed, immutable Document.

    Raises:
        MalformedDocumentError: If the input cannot be decoded, is not an
            object, or has no root node.

    Example:
        >>> doc = parse_document('{"root": {"type": "panel"}}')
        >>> doc.root.node_kind
        <NodeKind.PANEL: 'panel'>
    """
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedDocumentError(f"Invalid JSON: {e}") from e
    else:
        data = raw

    if not isinstance(data, Mapping):
        raise MalformedDocumentError(
            f"Document must be a JSON object, got {type(data).__name__}"
        )

    document = Document.model_validate(dict(data))
    if document.root is None:
        raise MalformedDocumentError("Document has no root node")

    return document


def export_json_schema() -> dict[str, Any]:
    """Export the Document JSON Schema using JSON key names.

    Returns:
        JSON Schema dict suitable for validation or editor tooling.
    """
    return Document.model_json_schema(by_alias=True)


__all__ = [
    # Enums
    "NodeKind",
    "LayoutKind",
    "Alignment",
    # Enum parsing
    "parse_node_kind",
    "parse_layout_kind",
    "parse_alignment",
    # Models
    "Color",
    "Offsets",
    "Vector2",
    "Size",
    "Style",
    "Layout",
    "Node",
    "Document",
    # Parsing
    "MalformedDocumentError",
    "parse_document",
    "export_json_schema",
]
