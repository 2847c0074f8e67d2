"""String filters, partly wrapping Jinja2's own filter implementations."""

import re
from collections.abc import Mapping
from typing import Any

from jinja2 import filters as j2_filters

from filterflow.exceptions import TemplateError
from filterflow.value import Value, as_value

DEFAULT_CENTER_WIDTH = 80
TRUNCATE_ELLIPSIS = "..."


def filter_upper(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Convert a string to uppercase."""
    return as_value(in_value.string().upper())


def filter_lower(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Convert a string to lowercase."""
    return as_value(in_value.string().lower())


def filter_title(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Titlecase a string."""
    return as_value(j2_filters.do_title(in_value.string()))


def filter_capitalize(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Capitalize the first character and lowercase the rest."""
    return as_value(j2_filters.do_capitalize(in_value.string()))


def filter_center(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Center a string in a field of the given width (default 80)."""
    width = DEFAULT_CENTER_WIDTH if param.is_nil else param.integer()
    return as_value(j2_filters.do_center(in_value.string(), width))


def filter_wordcount(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Count the words in a string."""
    return as_value(j2_filters.do_wordcount(in_value.string()))


def filter_striptags(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Strip SGML/XML tags and collapse whitespace."""
    return as_value(j2_filters.do_striptags(in_value.string()))


def filter_filesizeformat(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Format a byte count as a human-readable size; a truthy parameter selects binary prefixes."""
    return as_value(j2_filters.do_filesizeformat(in_value.number(), binary=bool(param)))


def filter_urlencode(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Percent-encode a string, or a mapping/sequence of pairs as a query string."""
    raw = in_value.raw if in_value.is_iterable else in_value.string()
    return as_value(j2_filters.do_urlencode(raw))


def filter_truncate(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Truncate a string to at most N characters, ending with an ellipsis when cut.

    Example:
        "hello world" | truncate:5  ->  "he..."
    """
    if param.is_nil:
        raise TemplateError("truncate requires the maximum length as parameter", sender="filter:truncate")
    text = in_value.string()
    length = param.integer()
    if len(text) <= length:
        return as_value(text)
    if length <= len(TRUNCATE_ELLIPSIS):
        return as_value(text[: max(length, 0)])
    return as_value(text[: length - len(TRUNCATE_ELLIPSIS)] + TRUNCATE_ELLIPSIS)


def filter_cut(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Remove all occurrences of the parameter from the string."""
    return as_value(in_value.string().replace(param.string(), ""))


def filter_split(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Split a string on the parameter, or on whitespace when no parameter is given."""
    separator = None if param.is_nil else param.string()
    return as_value(in_value.string().split(separator))


def filter_to_snake_case(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Convert a string to snake_case.

    Example:
        "MyVariableName" | to_snake_case  ->  "my_variable_name"
    """
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", in_value.string())
    return as_value(re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower())


def filter_to_kebab_case(in_value: Value, param: Value, bind: Mapping[str, Any]) -> Value:
    """Convert a string to kebab-case."""
    return as_value(filter_to_snake_case(in_value, param, bind).string().replace("_", "-"))


STRING_FILTERS = {
    "upper": filter_upper,
    "lower": filter_lower,
    "title": filter_title,
    "capitalize": filter_capitalize,
    "center": filter_center,
    "wordcount": filter_wordcount,
    "striptags": filter_striptags,
    "filesizeformat": filter_filesizeformat,
    "urlencode": filter_urlencode,
    "truncate": filter_truncate,
    "cut": filter_cut,
    "split": filter_split,
    "to_snake_case": filter_to_snake_case,
    "to_kebab_case": filter_to_kebab_case,
}
