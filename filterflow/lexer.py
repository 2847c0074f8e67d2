"""Tokenizer for filter expressions such as ``name|upper|truncate:5``."""

from dataclasses import dataclass

from filterflow.constants import DEFAULT_TEMPLATE_NAME, KEYWORDS, SENDER_LEXER, SYMBOLS, TokenType
from filterflow.exceptions import TemplateSyntaxError

# str.isdigit also accepts superscripts and other non-ASCII digits int() rejects
_DIGITS = frozenset("0123456789")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"', "'": "'"}


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token together with its source position."""

    typ: TokenType
    val: str
    line: int
    col: int
    filename: str = DEFAULT_TEMPLATE_NAME

    def __str__(self) -> str:
        return f"<Token {self.typ} '{self.val}' line={self.line} col={self.col}>"


class Lexer:
    """Turn an expression source string into a list of tokens.

    The returned list always ends with an EOF token, so a parser can peek past
    the last real token without bounds checks.
    """

    def __init__(self, source: str, name: str = DEFAULT_TEMPLATE_NAME):
        self.source = source
        self.name = name
        self._pos = 0
        self._line = 1
        self._col = 1

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            self._skip_whitespace()
            if self._pos >= len(self.source):
                tokens.append(Token(TokenType.EOF, "", self._line, self._col, self.name))
                return tokens
            tokens.append(self._next_token())

    def _next_token(self) -> Token:
        char = self.source[self._pos]
        line, col = self._line, self._col

        if char.isalpha() or char == "_":
            word = self._consume_while(lambda c: c.isalnum() or c == "_")
            typ = TokenType.KEYWORD if word in KEYWORDS else TokenType.IDENTIFIER
            return Token(typ, word, line, col, self.name)

        if char in _DIGITS:
            return Token(TokenType.NUMBER, self._consume_number(), line, col, self.name)

        if char in ("'", '"'):
            return Token(TokenType.STRING, self._consume_string(char), line, col, self.name)

        for symbol in SYMBOLS:
            if self.source.startswith(symbol, self._pos):
                self._advance(len(symbol))
                return Token(TokenType.SYMBOL, symbol, line, col, self.name)

        raise TemplateSyntaxError(
            f"Unexpected character '{char}'.",
            sender=SENDER_LEXER,
            template_name=self.name,
            line=line,
            column=col,
        )

    def _consume_number(self) -> str:
        number = self._consume_while(_DIGITS.__contains__)
        # A dot only belongs to the number when a digit follows; "a.0.b" style
        # lookups lex the dot as a symbol.
        if self._peek_char() == "." and self._peek_char(1) in _DIGITS:
            self._advance(1)
            number += "." + self._consume_while(_DIGITS.__contains__)
        return number

    def _consume_string(self, quote: str) -> str:
        start_line, start_col = self._line, self._col
        self._advance(1)
        chars: list[str] = []
        while self._pos < len(self.source):
            char = self.source[self._pos]
            if char == quote:
                self._advance(1)
                return "".join(chars)
            if char == "\\":
                escaped = self._peek_char(1)
                if escaped not in _ESCAPES:
                    raise TemplateSyntaxError(
                        f"Unknown escape sequence '\\{escaped}'.",
                        sender=SENDER_LEXER,
                        template_name=self.name,
                        line=self._line,
                        column=self._col,
                    )
                chars.append(_ESCAPES[escaped])
                self._advance(2)
                continue
            chars.append(char)
            self._advance(1)

        raise TemplateSyntaxError(
            "Unterminated string literal.",
            sender=SENDER_LEXER,
            template_name=self.name,
            line=start_line,
            column=start_col,
        )

    def _consume_while(self, predicate) -> str:
        start = self._pos
        while self._pos < len(self.source) and predicate(self.source[self._pos]):
            self._advance(1)
        return self.source[start : self._pos]

    def _skip_whitespace(self) -> None:
        self._consume_while(str.isspace)

    def _peek_char(self, offset: int = 0) -> str:
        index = self._pos + offset
        return self.source[index] if index < len(self.source) else ""

    def _advance(self, count: int) -> None:
        for char in self.source[self._pos : self._pos + count]:
            if char == "\n":
                self._line += 1
                self._col = 1
            else:
                self._col += 1
        self._pos += count


def tokenize(source: str, name: str = DEFAULT_TEMPLATE_NAME) -> list[Token]:
    """Shortcut for ``Lexer(source, name).tokenize()``."""
    return Lexer(source, name).tokenize()
