"""Plain-dict host for external renderers.

Realizes records into nested JSON-serializable dicts, one dict per widget,
so that renderers outside Python can consume a build without reimplementing
the construction rules.
"""

from typing import Any

from domcanvas.builder import (
    CanvasDescriptor,
    TextSupport,
    WidgetRecord,
    parse_text_support,
)
from domcanvas.config import EnvVar, get_environment
from domcanvas.hosts.lib import WidgetHost, register_host
from domcanvas.output import canvas_to_dict, record_to_dict


@register_host
class DictHost(WidgetHost):
    """Realizes widget records as nested dicts.

    Example output:
        {
          "canvas": {"name": "ImportedCanvas", ...},
          "children": [
            {"name": "panel", "kind": "panel", "instructions": [...],
             "children": []}
          ]
        }

    Args:
        text_support: Text widget to report. Defaults to the
            DOMCANVAS_TEXT_SUPPORT environment variable.
    """

    def __init__(self, text_support: TextSupport | None = None):
        if text_support is None:
            text_support = parse_text_support(get_environment(EnvVar.TEXT_SUPPORT))
        self._text_support = text_support
        self.widgets_created = 0

    @property
    def name(self) -> str:
        """Host identifier."""
        return "dict"

    def text_support(self) -> TextSupport:
        return self._text_support

    def create_canvas(self, canvas: CanvasDescriptor) -> dict[str, Any]:
        return {"canvas": canvas_to_dict(canvas), "children": []}

    def create_widget(
        self, record: WidgetRecord, parent: dict[str, Any]
    ) -> dict[str, Any]:
        widget = record_to_dict(record, recursive=False)
        widget["children"] = []
        parent["children"].append(widget)
        self.widgets_created += 1
        return widget
