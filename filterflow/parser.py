from filterflow.constants import (
    DEFAULT_TEMPLATE_NAME,
    FILTER_ARGUMENT_TERMINATORS,
    SENDER_PARSER,
    TokenType,
)
from filterflow.context import Evaluator
from filterflow.exceptions import MissingArgumentError, TemplateSyntaxError, UnknownFilterError
from filterflow.filters.registry import FilterRegistry
from filterflow.lexer import Token
from filterflow.nodes import FilterCall, FilteredExpression, Literal, Variable
from filterflow.value import as_value

_KEYWORD_VALUES = {"true": True, "false": False, "nil": None}


class Parser:
    """Recursive-descent parser over a token list produced by the Lexer.

    Grammar handled here::

        Expression  := Argument ( "|" FilterChain )?
        FilterChain := Filter ( "|" Filter )*
        Filter      := IDENT ( ":" Argument )?
        Argument    := Variable | Literal
    """

    def __init__(self, tokens: list[Token], template_name: str = DEFAULT_TEMPLATE_NAME):
        self.tokens = tokens
        self.template_name = template_name
        self._idx = 0

    def current(self) -> Token | None:
        """Return the token at the current position without consuming it."""
        if self._idx < len(self.tokens):
            return self.tokens[self._idx]
        return None

    def peek(self, typ: TokenType, val: str) -> Token | None:
        """Return the current token if it has the given type and value, without consuming it."""
        token = self.current()
        if token is not None and token.typ == typ and token.val == val:
            return token
        return None

    def peek_type(self, typ: TokenType) -> Token | None:
        token = self.current()
        if token is not None and token.typ == typ:
            return token
        return None

    def match(self, typ: TokenType, val: str) -> Token | None:
        """Consume and return the current token if it has the given type and value."""
        token = self.peek(typ, val)
        if token is not None:
            self._idx += 1
        return token

    def match_type(self, typ: TokenType) -> Token | None:
        """Consume and return the current token if it has the given type."""
        token = self.peek_type(typ)
        if token is not None:
            self._idx += 1
        return token

    def error(self, message: str, token: Token | None = None) -> TemplateSyntaxError:
        """Build a syntax error located at ``token``, or at the current position."""
        if token is None:
            token = self.current() or (self.tokens[-1] if self.tokens else None)
        error = TemplateSyntaxError(message, sender=SENDER_PARSER, template_name=self.template_name)
        return error.update_from_token_if_needed(self.template_name, token)

    def parse_expression(self) -> FilteredExpression:
        """Parse a whole expression, optionally wrapped in ``{{ ... }}``, up to EOF."""
        opened = self.match(TokenType.SYMBOL, "{{")
        base = self.parse_variable_or_literal()

        filters: tuple[FilterCall, ...] = ()
        if self.match(TokenType.SYMBOL, "|"):
            filters = self.parse_filter_chain()

        if opened and not self.match(TokenType.SYMBOL, "}}"):
            raise self.error("Expected '}}' to close the expression.")

        if not self.peek_type(TokenType.EOF):
            token = self.current()
            if token is None:
                raise self.error("Unexpected end of tokens.")
            raise self.error(f"Unexpected token '{token.val}'.")

        return FilteredExpression(base=base, filters=filters)

    def parse_filter_chain(self) -> tuple[FilterCall, ...]:
        """Parse ``Filter ( "|" Filter )*``; the order of the result is the render order."""
        filters = [self.parse_filter()]
        while self.match(TokenType.SYMBOL, "|"):
            filters.append(self.parse_filter())
        return tuple(filters)

    def parse_filter(self) -> FilterCall:
        """Parse a single ``IDENT ( ":" Argument )?`` filter call.

        The filter function is looked up right away and stored on the node, so an
        unknown filter is reported at parse time and rendering never has to go
        back to the registry.
        """
        ident_token = self.match_type(TokenType.IDENTIFIER)
        if ident_token is None:
            raise self.error("Filter name must be an identifier.")

        filter_func = FilterRegistry().get(ident_token.val)
        if filter_func is None:
            raise UnknownFilterError(
                ident_token.val, sender=SENDER_PARSER, template_name=self.template_name
            ).update_from_token_if_needed(self.template_name, ident_token)

        parameter: Evaluator | None = None
        if self.match(TokenType.SYMBOL, ":"):
            if self.current() is None or self.peek_type(TokenType.EOF) or any(
                self.peek(TokenType.SYMBOL, symbol) for symbol in FILTER_ARGUMENT_TERMINATORS
            ):
                raise MissingArgumentError(
                    f"Filter parameter required after ':' for filter '{ident_token.val}'.",
                    sender=SENDER_PARSER,
                    template_name=self.template_name,
                ).update_from_token_if_needed(self.template_name, self.current())
            parameter = self.parse_variable_or_literal()

        return FilterCall(token=ident_token, name=ident_token.val, filter_func=filter_func, parameter=parameter)

    def parse_variable_or_literal(self) -> Evaluator:
        """Parse a number, string, keyword or dotted variable reference."""
        token = self.current()

        if self.match(TokenType.SYMBOL, "-"):
            number_token = self.match_type(TokenType.NUMBER)
            if number_token is None:
                raise self.error("A number must follow '-'.")
            return Literal(token=token, value=as_value(-self._number(number_token)))

        if number_token := self.match_type(TokenType.NUMBER):
            return Literal(token=number_token, value=as_value(self._number(number_token)))

        if string_token := self.match_type(TokenType.STRING):
            return Literal(token=string_token, value=as_value(string_token.val))

        if keyword_token := self.match_type(TokenType.KEYWORD):
            raw = _KEYWORD_VALUES[keyword_token.val]
            return Literal(token=keyword_token, value=as_value(raw))

        if ident_token := self.match_type(TokenType.IDENTIFIER):
            return self._parse_variable(ident_token)

        raise self.error("Expected either a number, string, keyword or identifier.")

    def _parse_variable(self, ident_token: Token) -> Variable:
        parts: list[str | int] = [ident_token.val]
        while self.match(TokenType.SYMBOL, "."):
            if part_token := self.match_type(TokenType.IDENTIFIER):
                parts.append(part_token.val)
            elif index_token := self.match_type(TokenType.NUMBER):
                # "items.0.1" lexes its indices as the float "0.1"
                for index in index_token.val.split("."):
                    parts.append(self._index(index, index_token))
            else:
                raise self.error("Expected an identifier or index after '.'.")
        return Variable(token=ident_token, parts=tuple(parts))

    def _number(self, token: Token) -> int | float:
        # int() and float() would also accept non-ASCII digits such as "\u0663"
        if not token.val.isascii():
            raise self.error(f"Invalid number '{token.val}'.", token)
        try:
            return float(token.val) if "." in token.val else int(token.val)
        except ValueError:
            raise self.error(f"Invalid number '{token.val}'.", token) from None

    def _index(self, text: str, token: Token) -> int:
        if not text.isascii() or not text.isdigit():
            raise self.error(f"Invalid index '{text}'.", token)
        return int(text)
