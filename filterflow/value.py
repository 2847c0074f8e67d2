"""Runtime value wrapper passed between expressions and filters."""

from collections.abc import Iterable, Mapping
from typing import Any


class Value:
    """Immutable wrapper around a Python object flowing through a filter chain.

    Filters receive and return ``Value`` instances, which gives them a uniform
    set of lenient conversions (``string``, ``integer``, ``number``) regardless
    of what the template variables actually hold.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: Any = None):
        object.__setattr__(self, "_raw", raw)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def raw(self) -> Any:
        """The wrapped Python object."""
        return self._raw

    @property
    def is_nil(self) -> bool:
        return self._raw is None

    @property
    def is_string(self) -> bool:
        return isinstance(self._raw, str)

    @property
    def is_bool(self) -> bool:
        return isinstance(self._raw, bool)

    @property
    def is_integer(self) -> bool:
        return isinstance(self._raw, int) and not isinstance(self._raw, bool)

    @property
    def is_float(self) -> bool:
        return isinstance(self._raw, float)

    @property
    def is_number(self) -> bool:
        return self.is_integer or self.is_float

    @property
    def is_iterable(self) -> bool:
        return isinstance(self._raw, Iterable) and not isinstance(self._raw, str | bytes)

    def string(self) -> str:
        """Return the value as a string; nil becomes the empty string."""
        if self._raw is None:
            return ""
        if isinstance(self._raw, bool):
            return "True" if self._raw else "False"
        return str(self._raw)

    def integer(self) -> int:
        """Return the value as an int, or 0 when it cannot be converted."""
        try:
            if isinstance(self._raw, str):
                return int(float(self._raw.strip()))
            return int(self._raw)
        except (TypeError, ValueError, OverflowError):
            return 0

    def number(self) -> float:
        """Return the value as a float, or 0.0 when it cannot be converted."""
        try:
            return float(self._raw)
        except (TypeError, ValueError):
            return 0.0

    def len(self) -> int:
        """Return the length of the value, or 0 when it has none."""
        try:
            return len(self._raw)
        except TypeError:
            return 0

    def get_item(self, key: Any) -> "Value":
        """Look up ``key`` as a mapping key, a sequence index or an attribute.

        Missing keys and attributes yield ``NIL``.
        """
        raw = self._raw
        if raw is None:
            return NIL
        if isinstance(raw, Mapping):
            if key in raw:
                return as_value(raw[key])
            return as_value(raw.get(str(key))) if not isinstance(key, str) else NIL
        if isinstance(key, int) and isinstance(raw, list | tuple | str):
            try:
                return as_value(raw[key])
            except IndexError:
                return NIL
        if isinstance(key, str) and not key.startswith("_"):
            return as_value(getattr(raw, key, None))
        return NIL

    def __bool__(self) -> bool:
        return bool(self._raw)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Value):
            return self._raw == other._raw
        return NotImplemented

    def __hash__(self) -> int:
        try:
            return hash(self._raw)
        except TypeError:
            return id(self)

    def __repr__(self) -> str:
        return f"Value({self._raw!r})"

    def __str__(self) -> str:
        return self.string()


# The canonical "no parameter" value handed to filters called without an argument.
NIL = Value(None)


def as_value(obj: Any) -> Value:
    """Wrap ``obj`` in a Value; Values pass through and None maps to NIL."""
    if isinstance(obj, Value):
        return obj
    if obj is None:
        return NIL
    return Value(obj)
