"""Filters for numbers, collections and structured data."""

from collections.abc import Mapping
from typing import Any

import jmespath

from filterflow.exceptions import TemplateError
from filterflow.value import NIL, Value, as_value


def filter_default(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Return the parameter when the value is falsy."""
    return in_value if in_value else param


def filter_length(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Get the length of the value."""
    return as_value(in_value.len())


def filter_first(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Get the first item of a sequence or the first character of a string."""
    return in_value.get_item(0) if in_value.len() else NIL


def filter_last(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Get the last item of a sequence or the last character of a string."""
    return in_value.get_item(in_value.len() - 1) if in_value.len() else NIL


def filter_join(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Join the items of a sequence with the parameter as separator."""
    if not in_value.is_iterable:
        return as_value(in_value.string())
    return as_value(param.string().join(as_value(item).string() for item in in_value.raw))


def filter_add(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Add numbers, or concatenate strings when either side is not a number."""
    if in_value.is_number and param.is_number:
        return as_value(in_value.raw + param.raw)
    return as_value(in_value.string() + param.string())


def filter_integer(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Convert the value to an integer (0 when not convertible)."""
    return as_value(in_value.integer())


def filter_float(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Convert the value to a float (0.0 when not convertible)."""
    return as_value(in_value.number())


def _flatten(items: list[Any]) -> list[Any]:
    result = []
    for item in items:
        if isinstance(item, list | tuple):
            result.extend(_flatten(item))
        else:
            result.append(item)
    return result


def filter_flatten_list(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Flatten nested lists.

    Example:
        [1, [2, [3, 4]], 5] | flatten_list  ->  [1, 2, 3, 4, 5]
    """
    return as_value(_flatten(list(in_value.raw or [])))


def filter_unique_list(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Remove duplicates while preserving order."""
    seen = []
    for item in in_value.raw or []:
        if item not in seen:
            seen.append(item)
    return as_value(seen)


def filter_json_query(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Query structured data using a JMESPath expression.

    Example:
        data | json_query:"a.b"
    """
    if param.is_nil:
        raise TemplateError("json_query requires a JMESPath expression as parameter", sender="filter:json_query")
    return as_value(jmespath.search(param.string(), in_value.raw))


VALUE_FILTERS = {
    "default": filter_default,
    "length": filter_length,
    "first": filter_first,
    "last": filter_last,
    "join": filter_join,
    "add": filter_add,
    "integer": filter_integer,
    "float": filter_float,
    "flatten_list": filter_flatten_list,
    "unique_list": filter_unique_list,
    "json_query": filter_json_query,
}
