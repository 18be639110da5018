"""Host abstraction for realizing widget records.

A host is the UI toolkit side of an import: it answers which text widget it
can provide and turns records into concrete widgets. This module defines the
abstract base class, the depth-first realization walk, and a registry for
accessing hosts by name.
"""

from abc import ABC, abstractmethod
from typing import Any

from domcanvas.builder import (
    BuildDefaults,
    BuildResult,
    CanvasDescriptor,
    DiagnosticSink,
    TextSupport,
    WidgetRecord,
    build_document,
)
from domcanvas.core import get_logger
from domcanvas.schema import Document

logger = get_logger("hosts")


class WidgetHost(ABC):
    """Abstract base class for widget hosts.

    Subclasses must implement:
        - name: Host identifier string
        - text_support: Which text widget the host can provide
        - create_canvas: Create the top-level surface
        - create_widget: Create one widget under a parent

    Example:
        >>> class MyHost(WidgetHost):
        ...     name = "mine"
        ...     def text_support(self):
        ...         return TextSupport.LEGACY
        ...     def create_canvas(self, canvas):
        ...         return Surface(canvas.name)
        ...     def create_widget(self, record, parent):
        ...         return parent.add(record.name)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Host identifier string."""
        ...

    @abstractmethod
    def text_support(self) -> TextSupport:
        """Report which text widget this host can provide.

        Queried once per build session; the answer applies to every node
        of that session.
        """
        ...

    @abstractmethod
    def create_canvas(self, canvas: CanvasDescriptor) -> Any:
        """Create the top-level surface.

        Args:
            canvas: Canvas descriptor from the build result.

        Returns:
            Host handle used as the parent of the root widget.
        """
        ...

    @abstractmethod
    def create_widget(self, record: WidgetRecord, parent: Any) -> Any:
        """Create a widget for a record under `parent`.

        Called parent-first, so `parent` is always already realized.

        Args:
            record: Record to realize. Its children are realized separately.
            parent: Handle returned for the parent record or the canvas.

        Returns:
            Host handle used as the parent of the record's children.
        """
        ...


def build_for_host(
    document: Document,
    host: WidgetHost,
    defaults: BuildDefaults | None = None,
    sink: DiagnosticSink | None = None,
) -> BuildResult:
    """Build a document using the host's text support.

    Args:
        document: Parsed document.
        host: Host whose capability decides text handling.
        defaults: Fallback values for construction rules.
        sink: Optional diagnostic callback.

    Returns:
        BuildResult ready for `realize`.
    """
    support = host.text_support()
    logger.debug(f"[{host.name}] Text support: {support.value}")
    return build_document(document, text_support=support, defaults=defaults, sink=sink)


def realize(result: BuildResult, host: WidgetHost) -> Any:
    """Realize a build result on a host, parent before children.

    Args:
        result: Build result to realize.
        host: Target host.

    Returns:
        The host's canvas handle.
    """
    canvas = host.create_canvas(result.canvas)
    if result.root is not None:
        _realize_record(result.root, canvas, host)
    return canvas


def _realize_record(record: WidgetRecord, parent: Any, host: WidgetHost) -> None:
    handle = host.create_widget(record, parent)
    for child in record.children:
        _realize_record(child, handle, host)


# Host registry - populated by host modules on import
_registry: dict[str, type[WidgetHost]] = {}


def register_host(host_cls: type[WidgetHost]) -> type[WidgetHost]:
    """Register a host class in the registry.

    Uses a temporary instance to retrieve the host name.

    Args:
        host_cls: The host class to register.

    Returns:
        The host class (for decorator chaining).
    """
    _registry[host_cls().name] = host_cls
    return host_cls


def get_host(name: str, **kwargs: Any) -> WidgetHost:
    """Get a host instance by name.

    Args:
        name: The host identifier (e.g., "dict").
        **kwargs: Passed to the host constructor.

    Returns:
        WidgetHost: An instance of the requested host.

    Raises:
        KeyError: If no host with the given name is registered.
    """
    if name not in _registry:
        _import_hosts()
        if name not in _registry:
            available = ", ".join(_registry.keys()) or "(none)"
            raise KeyError(f"Unknown host '{name}'. Available: {available}")
    return _registry[name](**kwargs)


def list_hosts() -> list[str]:
    """List all registered host names."""
    _import_hosts()
    return list(_registry.keys())


def _import_hosts() -> None:
    """Import host modules to trigger registration."""
    import importlib

    for module_name in ("dict",):
        importlib.import_module(f"domcanvas.hosts.{module_name}")


__all__ = [
    "WidgetHost",
    "build_for_host",
    "realize",
    "register_host",
    "get_host",
    "list_hosts",
]
