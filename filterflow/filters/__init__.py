"""FilterFlow filter registry package.

This package holds the process-wide registry of filter functions and the
functions used to register, replace, override and apply them.
"""

from filterflow.filters.registry import (
    FilterRegistry,
    apply_filter,
    filter_exists,
    override_filter,
    register_filter,
    replace_filter,
)

__all__ = [
    "FilterRegistry",
    "apply_filter",
    "filter_exists",
    "override_filter",
    "register_filter",
    "replace_filter",
]
