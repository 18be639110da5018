"""Plain-dict widget host."""

from domcanvas.hosts.dict.lib import DictHost

__all__ = ["DictHost"]
