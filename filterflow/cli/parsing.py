import ast
import re
from typing import Any

import typer

from filterflow.cli.exceptions import CLIRenderError

# Splits on commas that are NOT inside any type of quotes or brackets
_PAIR_SEPARATOR = re.compile(
    r"""
    ,                           # Match a comma
    (?=                         # Followed by (positive lookahead)
        (?:                     # Non-capturing group
            [^"'{}()[\]]*       # Any chars except quotes/brackets
            (?:                 # Non-capturing group
                "[^"]*"         # Double quoted content
                |'[^']*'        # OR single quoted content
                |{[^}]*}        # OR curly bracket content
                |\([^)]*\)      # OR parentheses content
                |\[[^\]]*\]     # OR square bracket content
            )
        )*                      # Zero or more times
        [^"'{}()[\]]*           # Any chars except quotes/brackets
        $                       # Until end of string
    )
    """,
    flags=re.VERBOSE,
)


def get_settings_path(ctx: typer.Context) -> str | None:
    """Return the --settings path given to the main command, if any."""
    if not ctx.obj:
        return None
    return ctx.obj.get("settings") or None


def process_value(value_str: str) -> Any:
    """
    Process a string value into the appropriate Python type.

    Python literals (numbers, lists, dicts, True/False/None) are evaluated;
    anything else stays a string.

    Args:
        value_str: The string value to process

    Returns:
        Processed value as the appropriate Python type
    """
    try:
        return ast.literal_eval(value_str)
    except (ValueError, SyntaxError):
        return value_str


def parse_vars(value: str | None) -> dict[str, Any]:
    """
    Parse a string of key=value pairs into a dictionary of variables.

    Quoted values stay strings (with the quotes removed); unquoted values are
    evaluated as Python literals, falling back to plain strings.

    Args:
        value: String containing key=value pairs, e.g., "a=1,b='hello',c=[1,2]".

    Returns:
        Dictionary of parsed key-value pairs.

    Raises:
        CLIRenderError: If parsing fails, with examples.

    Examples:
        - Simple unquoted: "a=1,b=hello" -> {"a": 1, "b": "hello"}
        - Quoted strings: "a='hello',b=\"world\"" -> {"a": "hello", "b": "world"}
        - Lists: "a=[1,2,3]" -> {"a": [1, 2, 3]}
        - Dicts: "a={'key': 'val'}" -> {"a": {"key": "val"}}
    """
    if not value:
        return {}

    try:
        parsed_dict = {}
        for pair in _PAIR_SEPARATOR.split(value):
            if "=" not in pair:
                raise CLIRenderError(f"Invalid vars format: {pair}.")

            k, v = pair.split("=", 1)
            k = k.strip().strip("'\"")
            v = v.strip()

            if len(v) >= 2 and v[0] == v[-1] and v[0] in ("'", '"'):  # noqa: PLR2004
                parsed_dict[k] = v[1:-1]
            else:
                parsed_dict[k] = process_value(v)

    except Exception as e:
        raise CLIRenderError(
            "Vars format examples:\n"
            "- Simple values: \"key='value'\"\n"
            "- Lists: \"key=['value1', 'value2']\"\n"
            "- Dicts: \"key={'inner_key': 'value'}\"\n"
            f"Error: {e!s}"
        ) from e

    return parsed_dict
