from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Protocol

from filterflow.constants import DEFAULT_TEMPLATE_NAME
from filterflow.value import NIL, Value, as_value


class Evaluator(Protocol):
    """Anything that can produce a Value from an execution context."""

    def evaluate(self, ctx: "ExecutionContext") -> Value: ...


class ExecutionContext:
    """Per-render state: the variables visible to an expression and its identity.

    ``public`` holds the caller-supplied variables. It is exposed read-only and is
    handed as-is to every filter function. ``private`` variables shadow public
    ones during resolution but are never passed to filters.

    A context belongs to a single render; parsed expressions are shared, contexts
    are not.
    """

    def __init__(
        self,
        public: Mapping[str, Any] | None = None,
        private: Mapping[str, Any] | None = None,
        template_name: str = DEFAULT_TEMPLATE_NAME,
    ):
        self._public = MappingProxyType(dict(public or {}))
        self._private = dict(private or {})
        self.template_name = template_name

    @property
    def public(self) -> Mapping[str, Any]:
        """Read-only view of the publicly bound variables."""
        return self._public

    def resolve(self, name: str) -> Value:
        """Resolve a top-level variable name; unknown names yield NIL."""
        if name in self._private:
            return as_value(self._private[name])
        if name in self._public:
            return as_value(self._public[name])
        return NIL

    def evaluate(self, evaluator: Evaluator) -> Value:
        """Evaluate an argument expression against this context."""
        return evaluator.evaluate(self)
