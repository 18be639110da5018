"""Output formatting for widget record trees."""

from .lib import (
    canvas_to_dict,
    diagnostic_to_dict,
    format_build_result,
    format_widget_tree,
    instruction_to_dict,
    record_to_dict,
    result_to_dict,
)

__all__ = [
    "canvas_to_dict",
    "diagnostic_to_dict",
    "format_build_result",
    "format_widget_tree",
    "instruction_to_dict",
    "record_to_dict",
    "result_to_dict",
]
