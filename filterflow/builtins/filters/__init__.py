"""Built-in filters registered in every FilterRegistry."""

from filterflow.builtins.filters.string_filters import STRING_FILTERS
from filterflow.builtins.filters.value_filters import VALUE_FILTERS

# Combine all filters into a single registry
ALL_BUILTIN_FILTERS = {**STRING_FILTERS, **VALUE_FILTERS}

__all__ = [
    "ALL_BUILTIN_FILTERS",
    "STRING_FILTERS",
    "VALUE_FILTERS",
]
