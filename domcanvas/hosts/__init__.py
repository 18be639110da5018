"""Widget host abstraction and registry."""

from domcanvas.hosts.lib import (
    WidgetHost,
    build_for_host,
    get_host,
    list_hosts,
    realize,
    register_host,
)

__all__ = [
    "WidgetHost",
    "build_for_host",
    "get_host",
    "list_hosts",
    "realize",
    "register_host",
]
