"""Parsed expression nodes.

Every node is a frozen dataclass: once the parser builds a node it never
changes, so a parsed expression can be evaluated from many threads at once.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from filterflow.constants import SENDER_RESOLVER
from filterflow.context import Evaluator, ExecutionContext
from filterflow.exceptions import FilterExecutionError, TemplateError
from filterflow.lexer import Token
from filterflow.logger import logger
from filterflow.value import NIL, Value, as_value

FilterFunction = Callable[[Value, Value, Mapping[str, Any]], Value]


@dataclass(frozen=True, slots=True)
class Literal:
    """A constant known at parse time (number, string, true/false/nil)."""

    token: Token
    value: Value

    def evaluate(self, ctx: ExecutionContext) -> Value:
        return self.value


@dataclass(frozen=True, slots=True)
class Variable:
    """A variable reference such as ``user.name`` or ``items.0``."""

    token: Token
    parts: tuple[str | int, ...]

    def evaluate(self, ctx: ExecutionContext) -> Value:
        current = ctx.resolve(self.parts[0])
        for part in self.parts[1:]:
            try:
                current = current.get_item(part)
            except Exception as e:
                raise TemplateError(
                    f"Cannot resolve '{part}' on {type(current.raw).__name__}: {e}",
                    sender=SENDER_RESOLVER,
                    orig_error=e,
                ).update_from_token_if_needed(ctx.template_name, self.token) from e
        return current


@dataclass(frozen=True, slots=True)
class FilterCall:
    """One filter application inside a chain.

    ``filter_func`` is bound by the parser; the registry is not consulted again
    at render time. ``parameter`` stays unevaluated and is evaluated against the
    context of each render.
    """

    token: Token
    name: str
    filter_func: FilterFunction
    parameter: Evaluator | None = None

    def execute(self, value: Value, ctx: ExecutionContext) -> Value:
        if self.parameter is not None:
            param = ctx.evaluate(self.parameter)
        else:
            param = NIL

        try:
            filtered = self.filter_func(value, param, ctx.public)
        except TemplateError as e:
            raise e.update_from_token_if_needed(ctx.template_name, self.token)
        except Exception as e:
            logger.debug(f"Filter '{self.name}' failed: {e}")
            raise FilterExecutionError(
                f"Filter '{self.name}' failed: {e}", sender=f"filter:{self.name}", orig_error=e
            ).update_from_token_if_needed(ctx.template_name, self.token) from e

        return as_value(filtered)


@dataclass(frozen=True, slots=True)
class FilteredExpression:
    """A variable or literal followed by zero or more filter calls."""

    base: Evaluator
    filters: tuple[FilterCall, ...] = ()

    def evaluate(self, ctx: ExecutionContext) -> Value:
        value = ctx.evaluate(self.base)
        for filter_call in self.filters:
            value = filter_call.execute(value, ctx)
        return value
