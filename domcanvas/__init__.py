"""domcanvas: UI JSON documents to widget-construction record trees."""

from domcanvas.schema import (
    Document,
    MalformedDocumentError,
    Node,
    NodeKind,
    export_json_schema,
    parse_document,
)
from domcanvas.builder import (
    BuildDefaults,
    BuildResult,
    DiagnosticKind,
    TextSupport,
    TreeBuilder,
    WidgetRecord,
    build_document,
    import_document,
)
from domcanvas.hosts import WidgetHost, build_for_host, get_host, list_hosts, realize

__all__ = [
    # Schema
    "Document",
    "Node",
    "NodeKind",
    "MalformedDocumentError",
    "parse_document",
    "export_json_schema",
    # Builder
    "BuildDefaults",
    "BuildResult",
    "DiagnosticKind",
    "TextSupport",
    "TreeBuilder",
    "WidgetRecord",
    "build_document",
    "import_document",
    # Hosts
    "WidgetHost",
    "build_for_host",
    "get_host",
    "list_hosts",
    "realize",
]
