"""Utility modules."""

from .text import (
    contains_target_script,
    normalize_for_display,
    safe_truncate,
)

__all__ = [
    "contains_target_script",
    "normalize_for_display",
    "safe_truncate",
]
