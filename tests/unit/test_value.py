"""Unit tests for filterflow.value."""

import pytest

from filterflow.value import NIL, Value, as_value


class TestValue:
    """Test suite for the Value wrapper."""

    def test_immutable(self):
        value = Value(1)
        with pytest.raises(AttributeError, match="immutable"):
            value.foo = 2

    def test_type_checks(self):
        assert Value(None).is_nil
        assert Value("a").is_string
        assert Value(True).is_bool
        assert not Value(True).is_integer
        assert Value(3).is_integer
        assert Value(1.5).is_float
        assert Value(3).is_number
        assert Value([1]).is_iterable
        assert not Value("abc").is_iterable

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(None, ""), (True, "True"), (12, "12"), ("x", "x")],
    )
    def test_string(self, raw, expected):
        assert Value(raw).string() == expected

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(7, 7), ("12", 12), (" 3.9 ", 3), (2.7, 2), ("abc", 0), (None, 0)],
    )
    def test_integer(self, raw, expected):
        assert Value(raw).integer() == expected

    def test_number(self):
        assert Value("2.5").number() == 2.5
        assert Value("x").number() == 0.0

    def test_len(self):
        assert Value("abc").len() == 3
        assert Value([1, 2]).len() == 2
        assert Value(5).len() == 0

    def test_get_item(self):
        """Test mapping, index and attribute lookups."""
        data = Value({"user": {"name": "alice"}, "items": [10, 20], "1": "one"})

        assert data.get_item("user").get_item("name").raw == "alice"
        assert data.get_item("items").get_item(1).raw == 20
        assert data.get_item(1).raw == "one"
        assert data.get_item("missing") is NIL
        assert data.get_item("items").get_item(5) is NIL
        assert Value("abc").get_item("upper").is_nil is False
        assert Value(object()).get_item("_hidden") is NIL

    def test_equality_and_hash(self):
        assert Value(1) == Value(1)
        assert Value(1) != Value(2)
        assert hash(Value("a")) == hash(Value("a"))
        assert isinstance(hash(Value([1])), int)

    def test_bool(self):
        assert not Value("")
        assert Value("x")
        assert not NIL


class TestAsValue:
    """Tests for as_value."""

    def test_none_is_nil(self):
        assert as_value(None) is NIL

    def test_value_passthrough(self):
        value = Value(3)
        assert as_value(value) is value

    def test_wraps_raw(self):
        assert as_value([1]).raw == [1]
