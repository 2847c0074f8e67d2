"""Unit tests for the built-in filters."""

import pytest

from filterflow.builtins.filters import ALL_BUILTIN_FILTERS, STRING_FILTERS, VALUE_FILTERS
from filterflow.builtins.filters.string_filters import (
    filter_capitalize,
    filter_center,
    filter_cut,
    filter_filesizeformat,
    filter_split,
    filter_striptags,
    filter_to_kebab_case,
    filter_to_snake_case,
    filter_truncate,
    filter_urlencode,
    filter_wordcount,
)
from filterflow.builtins.filters.value_filters import (
    filter_add,
    filter_default,
    filter_first,
    filter_flatten_list,
    filter_join,
    filter_json_query,
    filter_last,
    filter_length,
    filter_unique_list,
)
from filterflow.exceptions import TemplateError
from filterflow.utils import is_filter_function
from filterflow.value import NIL, Value


def call(func, value, param=None):
    return func(Value(value), Value(param) if param is not None else NIL, {})


class TestBuiltinCollection:
    """Tests for the built-in filter tables."""

    def test_all_filters_combined(self):
        assert len(ALL_BUILTIN_FILTERS) == len(STRING_FILTERS) + len(VALUE_FILTERS)

    def test_all_filters_have_filter_signature(self):
        for name, func in ALL_BUILTIN_FILTERS.items():
            assert is_filter_function(func), name

    def test_all_filters_documented(self):
        for name, func in ALL_BUILTIN_FILTERS.items():
            assert func.__doc__, name


class TestStringFilters:
    """Tests for string filters."""

    @pytest.mark.parametrize(
        ("text", "length", "expected"),
        [
            ("hello world", 5, "he..."),
            ("hello", 5, "hello"),
            ("hello", 10, "hello"),
            ("hello world", 3, "hel"),
            ("hello world", 0, ""),
        ],
    )
    def test_truncate(self, text, length, expected):
        assert call(filter_truncate, text, length).raw == expected

    def test_truncate_requires_length(self):
        with pytest.raises(TemplateError, match="truncate requires the maximum length"):
            call(filter_truncate, "hello world")

    def test_capitalize(self):
        assert call(filter_capitalize, "hELLO").raw == "Hello"

    def test_center_default_width(self):
        assert len(call(filter_center, "x").raw) == 80

    def test_center_width(self):
        assert call(filter_center, "x", 5).raw == "  x  "

    def test_wordcount(self):
        assert call(filter_wordcount, "one two  three").raw == 3

    def test_striptags(self):
        assert call(filter_striptags, "<b>bold</b>   text").raw == "bold text"

    def test_filesizeformat(self):
        assert call(filter_filesizeformat, 1000).raw == "1.0 kB"
        assert call(filter_filesizeformat, 1024, True).raw == "1.0 KiB"

    def test_urlencode(self):
        assert call(filter_urlencode, "a b/c").raw == "a%20b/c"
        assert call(filter_urlencode, {"q": "x y"}).raw == "q=x+y"

    def test_cut(self):
        assert call(filter_cut, "a-b-c", "-").raw == "abc"

    def test_split(self):
        assert call(filter_split, "a b  c").raw == ["a", "b", "c"]
        assert call(filter_split, "a,b", ",").raw == ["a", "b"]

    def test_case_conversion(self):
        assert call(filter_to_snake_case, "MyVariableName").raw == "my_variable_name"
        assert call(filter_to_kebab_case, "MyVariableName").raw == "my-variable-name"


class TestValueFilters:
    """Tests for value and collection filters."""

    def test_default(self):
        assert call(filter_default, "", "fallback").raw == "fallback"
        assert call(filter_default, "set", "fallback").raw == "set"
        assert call(filter_default, None, "fallback").raw == "fallback"

    def test_length(self):
        assert call(filter_length, [1, 2, 3]).raw == 3

    def test_first_last(self):
        assert call(filter_first, [1, 2, 3]).raw == 1
        assert call(filter_last, "abc").raw == "c"
        assert call(filter_first, []) is NIL

    def test_join(self):
        assert call(filter_join, ["a", 1, None], ", ").raw == "a, 1, "

    def test_add(self):
        assert call(filter_add, 2, 3).raw == 5
        assert call(filter_add, "a", 3).raw == "a3"

    def test_flatten_list(self):
        assert call(filter_flatten_list, [1, [2, [3, 4]], 5]).raw == [1, 2, 3, 4, 5]

    def test_unique_list(self):
        assert call(filter_unique_list, [1, 2, 1, 3, 2]).raw == [1, 2, 3]

    def test_json_query(self):
        data = {"hosts": [{"name": "a", "up": True}, {"name": "b", "up": False}]}

        assert call(filter_json_query, data, "hosts[?up].name").raw == ["a"]

    def test_json_query_requires_param(self):
        with pytest.raises(TemplateError, match="requires a JMESPath expression"):
            call(filter_json_query, {})
