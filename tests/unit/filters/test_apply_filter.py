"""Unit tests for apply_filter."""

from unittest.mock import MagicMock

import pytest

from filterflow.constants import SENDER_APPLY_FILTER
from filterflow.exceptions import TemplateError, UnknownFilterError
from filterflow.filters import apply_filter, register_filter
from filterflow.value import NIL, Value, as_value


class TestApplyFilter:
    """Test suite for applying filters by name."""

    def test_apply_builtin(self):
        result = apply_filter("upper", "hello")

        assert isinstance(result, Value)
        assert result.raw == "HELLO"

    def test_apply_with_param(self):
        assert apply_filter("truncate", "hello world", 5).raw == "he..."

    def test_unknown_filter(self):
        """Test an unregistered name raises UnknownFilterError from applyfilter."""
        with pytest.raises(UnknownFilterError) as exc_info:
            apply_filter("bogus", "x")

        error = exc_info.value
        assert error.filter_name == "bogus"
        assert error.sender == SENDER_APPLY_FILTER
        assert "filter with name 'bogus' not found" in str(error)
        assert not error.has_location

    def test_none_param_is_nil(self):
        """Test a missing parameter reaches the filter as the NIL sentinel."""
        spy = MagicMock(return_value=as_value("ok"))
        register_filter("spy", spy)

        apply_filter("spy", "x")

        value, param, bind = spy.call_args.args
        assert value == Value("x")
        assert param is NIL
        assert bind == {}

    def test_values_passed_through(self):
        """Test Value arguments are handed over without re-wrapping."""
        spy = MagicMock(return_value=NIL)
        register_filter("spy", spy)
        value = Value([1, 2])
        param = Value(3)
        bind = {"user": "alice"}

        apply_filter("spy", value, param, bind)

        spy.assert_called_once_with(value, param, bind)

    def test_filter_error_passes_through_unchanged(self):
        """Test exceptions raised by the filter reach the caller untouched."""
        error = TemplateError("broken input", sender="filter:fails")

        def fails(in_value, param, bind):
            raise error

        register_filter("fails", fails)

        with pytest.raises(TemplateError) as exc_info:
            apply_filter("fails", "x")

        assert exc_info.value is error
        assert not exc_info.value.has_location

    def test_generic_error_passes_through_unchanged(self):
        def fails(in_value, param, bind):
            raise ValueError("nope")

        register_filter("fails", fails)

        with pytest.raises(ValueError, match="nope"):
            apply_filter("fails", "x")
