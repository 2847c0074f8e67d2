from enum import StrEnum


class TokenType(StrEnum):
    """Kinds of tokens produced by the expression lexer."""

    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    NUMBER = "number"
    STRING = "string"
    SYMBOL = "symbol"
    EOF = "eof"


# Symbols recognized by the lexer, longest first so "}}" wins over "}".
SYMBOLS = ("{{", "}}", "|", ":", ".", ",", "(", ")", "-")

KEYWORDS = ("true", "false", "nil")

# Sender tags carried by TemplateError instances
SENDER_APPLY_FILTER = "applyfilter"
SENDER_PARSER = "parser"
SENDER_LEXER = "lexer"
SENDER_RESOLVER = "resolver"

# Tokens that end a filter segment; an argument can never start with one of these
FILTER_ARGUMENT_TERMINATORS = ("}}", "|")

DEFAULT_TEMPLATE_NAME = "<string>"

# Defaults for FilterFlowSettings
FILTERFLOW_DEFAULT_SETTINGS_FILE = "filterflow.yaml"
FILTERFLOW_DEFAULT_FILTERS_DIR = "filters"
FILTERFLOW_DEFAULT_LOGGER = {"directory": ".filterflow/logs", "level": "INFO"}

# Module prefix used to flag registry entries as built-in
BUILTIN_FILTERS_MODULE_PREFIX = "filterflow.builtins"
