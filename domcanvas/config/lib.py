"""Centralized environment configuration management for domcanvas.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from domcanvas.config import EnvVar, get_environment
    >>>
    >>> width = get_environment(EnvVar.REFERENCE_WIDTH)  # Returns int
    >>> width = get_environment(EnvVar.REFERENCE_WIDTH, override=720)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "DOMCANVAS_LOG_LEVEL").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str, int, float, bool).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by domcanvas.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - general: Logging and host capability
        - canvas: Top-level canvas scaling
        - layout: Layout group defaults
    """

    # -------------------------------------------------------------------------
    # General
    # -------------------------------------------------------------------------
    LOG_LEVEL = EnvConfig(
        name="DOMCANVAS_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Logging level for the CLI (DEBUG, INFO, WARNING, ...)",
        category="general",
    )
    TEXT_SUPPORT = EnvConfig(
        name="DOMCANVAS_TEXT_SUPPORT",
        default="rich",
        var_type=str,
        description="Text widget available to the dict host (rich, legacy, none)",
        category="general",
    )

    # -------------------------------------------------------------------------
    # Canvas Scaling
    # -------------------------------------------------------------------------
    REFERENCE_WIDTH = EnvConfig(
        name="DOMCANVAS_REFERENCE_WIDTH",
        default=1080,
        var_type=int,
        description="Canvas reference resolution width in pixels",
        category="canvas",
    )
    REFERENCE_HEIGHT = EnvConfig(
        name="DOMCANVAS_REFERENCE_HEIGHT",
        default=1920,
        var_type=int,
        description="Canvas reference resolution height in pixels",
        category="canvas",
    )
    MATCH_WIDTH_OR_HEIGHT = EnvConfig(
        name="DOMCANVAS_MATCH_WIDTH_OR_HEIGHT",
        default=0.5,
        var_type=float,
        description="Canvas scaler blend between width (0) and height (1)",
        category="canvas",
    )
    ENSURE_EVENT_SYSTEM = EnvConfig(
        name="DOMCANVAS_ENSURE_EVENT_SYSTEM",
        default=True,
        var_type=bool,
        description="Ask hosts to create an input event system with the canvas",
        category="canvas",
    )

    # -------------------------------------------------------------------------
    # Layout Defaults
    # -------------------------------------------------------------------------
    GRID_CELL_WIDTH = EnvConfig(
        name="DOMCANVAS_GRID_CELL_WIDTH",
        default=100.0,
        var_type=float,
        description="Grid cell width when a grid layout omits cellSize",
        category="layout",
    )
    GRID_CELL_HEIGHT = EnvConfig(
        name="DOMCANVAS_GRID_CELL_HEIGHT",
        default=100.0,
        var_type=float,
        description="Grid cell height when a grid layout omits cellSize",
        category="layout",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _parse_bool(value: str) -> bool | None:
    """Parse string to boolean.

    Recognizes: true/false, 1/0, yes/no (case-insensitive).
    Returns None for unrecognized values.
    """
    normalized = value.lower().strip()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    return None


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None:
        return default

    if var_type is str:
        return value

    if var_type is int:
        try:
            return int(value)
        except ValueError:
            return default

    if var_type is float:
        try:
            return float(value)
        except ValueError:
            return default

    if var_type is bool:
        result = _parse_bool(value)
        return result if result is not None else default

    # Unknown type, return as-is
    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: float) -> float: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: bool) -> bool: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str, int, float or bool).

    Example:
        >>> get_environment(EnvVar.REFERENCE_WIDTH)
        1080
        >>> get_environment(EnvVar.REFERENCE_WIDTH, override=720)
        720
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (general, canvas, layout).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


def get_reference_resolution() -> tuple[int, int]:
    """Get the canvas reference resolution as (width, height)."""
    return (
        get_environment(EnvVar.REFERENCE_WIDTH),
        get_environment(EnvVar.REFERENCE_HEIGHT),
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
