"""Centralized configuration management for domcanvas.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from domcanvas.config import EnvVar, get_environment
    >>>
    >>> width = get_environment(EnvVar.REFERENCE_WIDTH)  # Returns int: 1080
    >>> width = get_environment(EnvVar.REFERENCE_WIDTH, override=720)
    >>>
    >>> for var in list_environment_variables("canvas"):
    ...     info = get_environment_info(var)
    ...     print(f"{info.name}: {info.description}")

Environment Variable Categories:
    general: Logging level and dict host text support
    canvas: Reference resolution and scaler match
    layout: Grid cell size fallback
"""

from .lib import (
    EnvConfig,
    EnvVar,
    get_environment,
    get_environment_info,
    get_reference_resolution,
    list_environment_variables,
)

__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_reference_resolution",
    # Introspection
    "list_environment_variables",
]
