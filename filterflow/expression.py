from collections.abc import Mapping
from typing import Any

from filterflow.constants import DEFAULT_TEMPLATE_NAME
from filterflow.context import ExecutionContext
from filterflow.exceptions import TemplateError
from filterflow.lexer import Lexer
from filterflow.logger import logger
from filterflow.nodes import FilteredExpression
from filterflow.parser import Parser
from filterflow.value import Value


class Expression:
    """A compiled filter expression, e.g. ``user.name|lower|truncate:10``.

    Compiling binds every filter in the chain to its function, so later changes
    to the registry do not affect an existing Expression. Instances are
    immutable and can be evaluated concurrently.
    """

    __slots__ = ("name", "source", "root")

    def __init__(self, name: str, source: str, root: FilteredExpression):
        self.name = name
        self.source = source
        self.root = root

    def evaluate(self, variables: Mapping[str, Any] | None = None) -> Value:
        """Evaluate the expression with ``variables`` as the public bound variables."""
        ctx = ExecutionContext(public=variables, template_name=self.name)
        return self.root.evaluate(ctx)

    def render(self, variables: Mapping[str, Any] | None = None) -> str:
        """Evaluate and return the result as a string (nil becomes "")."""
        return self.evaluate(variables).string()

    def __repr__(self) -> str:
        return f"Expression(name={self.name!r}, source={self.source!r})"


def compile_expression(source: str, name: str = DEFAULT_TEMPLATE_NAME) -> Expression:
    """Lex and parse ``source`` into an Expression.

    The expression may be wrapped in ``{{ ... }}`` delimiters.

    Args:
        source: The expression source.
        name: Identity reported in error messages.

    Returns:
        The compiled Expression.

    Raises:
        TemplateSyntaxError: On lexing/parsing errors (including MissingArgumentError).
        UnknownFilterError: If the chain references an unregistered filter.
    """
    try:
        tokens = Lexer(source, name).tokenize()
        root = Parser(tokens, name).parse_expression()
    except TemplateError as e:
        logger.debug(f"Failed to compile expression '{source}': {e}")
        raise

    logger.debug(f"Compiled expression '{source}' with {len(root.filters)} filter(s)")
    return Expression(name, source, root)
