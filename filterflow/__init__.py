"""FilterFlow: named filter registry and filter-chain expressions.

Example:
    from filterflow import compile_expression, register_filter

    compile_expression("name|upper|truncate:5").render({"name": "filterflow"})
"""

from filterflow.expression import Expression, compile_expression
from filterflow.filters import (
    FilterRegistry,
    apply_filter,
    filter_exists,
    override_filter,
    register_filter,
    replace_filter,
)
from filterflow.value import NIL, Value, as_value

__all__ = [
    "NIL",
    "Expression",
    "FilterRegistry",
    "Value",
    "apply_filter",
    "as_value",
    "compile_expression",
    "filter_exists",
    "override_filter",
    "register_filter",
    "replace_filter",
]
