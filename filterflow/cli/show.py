import json
import textwrap
from pathlib import Path
from typing import Any

import typer
import yaml
from tabulate import tabulate
from termcolor import colored

from filterflow.bootstrap import bootstrap
from filterflow.cli.constants import (
    CWD,
    DESCRIPTION_FIRST_SENTENCE_LENGTH,
    DESCRIPTION_WRAP_WIDTH,
    EXIT_CODE_CONFIGURATION_ERROR,
)
from filterflow.cli.exceptions import CLIShowError
from filterflow.cli.parsing import get_settings_path
from filterflow.exceptions import FilterFlowError
from filterflow.filters.registry import FilterRegistry
from filterflow.settings import FilterFlowSettings

FILTER_TABLE_HEADERS = ["Filter Name", "Description", "Source (python module)"]
SETTINGS_TABLE_HEADERS = ["Setting", "Value"]
UNKNOWN_SOURCE = "Unknown"


def show(
    ctx: typer.Context,
    filters: bool = typer.Option(False, "--filters", "-f", help="List every registered filter"),
    settings: bool = typer.Option(False, "--settings", "-s", help="Print the effective settings"),
    all: bool = typer.Option(False, "--all", "-a", help="Print both the filters and the settings"),
) -> None:
    """
    Print the filter catalog and/or the effective settings.
    """
    if not (filters or settings or all):
        raise typer.BadParameter("Pick at least one option: --filters, --settings, or --all.")

    try:
        loaded_settings = bootstrap(get_settings_path(ctx))
        if filters or all:
            show_filters_catalog(FilterRegistry())
        if settings or all:
            show_filterflow_settings(loaded_settings)
    except FilterFlowError as e:
        _fail(f"Could not load FilterFlow: {e}", "Review the settings file and the local_filters directories.", e)
    except yaml.YAMLError as e:
        _fail(f"Invalid YAML in settings file: {e}", "Fix the YAML syntax of the settings file.", e)
    except Exception as e:
        _fail(f"Unexpected failure while showing information: {e}", "Run again with a DEBUG log level.", e)


def _fail(message: str, hint: str, error: Exception) -> None:
    CLIShowError(message=message, hint=hint, original_exception=error).show()
    raise typer.Exit(code=EXIT_CODE_CONFIGURATION_ERROR) from None


def show_filters_catalog(registry: FilterRegistry) -> None:
    show_formatted_table("FILTERS CATALOG", render_filters_catalog_table_data(registry), FILTER_TABLE_HEADERS)


def show_filterflow_settings(settings: FilterFlowSettings) -> None:
    show_formatted_table("FILTERFLOW SETTINGS", render_table_data(settings.as_dict), SETTINGS_TABLE_HEADERS)


def show_formatted_table(banner_text: str, table_data: list[list[str]], headers: list[str]) -> None:
    """Print ``table_data`` as a rounded grid under a centered banner. Empty tables print nothing."""
    if not table_data:
        return

    table = tabulate(
        table_data,
        headers=[colored(header, "blue", attrs=["bold"]) for header in headers],
        tablefmt="rounded_grid",
        colalign=["center", *["left"] * (len(headers) - 1)],
    )
    display_banner(banner_text, table)
    typer.echo(table)


def display_banner(banner_text: str, table: str) -> None:
    width = len(table.splitlines()[0]) + 5
    typer.echo("\n\n" + colored(banner_text, "magenta", attrs=["bold", "underline"]).center(width))


def get_filter_source(registry: FilterRegistry, filter_name: str) -> str:
    """
    Describe where a filter was defined.

    Files under the current directory are shown as dotted module paths, other
    files as absolute paths. Filters registered in code fall back to their
    module name.
    """
    info = registry.get_filter_info(filter_name) or {}

    module_path = info.get("module_path")
    if module_path:
        path = Path(module_path)
        if not path.is_relative_to(CWD):
            return str(path)
        return ".".join(path.relative_to(CWD).with_suffix("").parts)

    return info.get("module_name") or UNKNOWN_SOURCE


def render_filters_catalog_table_data(registry: FilterRegistry) -> list[list[str]]:
    """Build one colored row per filter, built-in filters before custom ones."""
    catalog = registry.catalog
    rows = []
    for name in [*catalog.builtin_names(), *catalog.custom_names()]:
        func = registry.get(name)
        if func is None:
            continue
        rows.append(
            [
                colored(name, "cyan", attrs=["bold"]),
                colored(process_filter_description(func.__doc__ or "No description available"), "yellow"),
                colored(get_filter_source(registry, name), "light_green"),
            ]
        )
    return rows


def render_table_data(data: dict[str, Any], key_color: str = "cyan", value_color: str = "yellow") -> list[list[str]]:
    """Turn a mapping into two-column ``[key, value]`` rows."""
    return [[colored(key, key_color, attrs=["bold"]), format_value(value, value_color)] for key, value in data.items()]


def format_value(value: Any, color: str = "yellow") -> str:
    # dicts are shown as their JSON body without the enclosing braces
    text = json.dumps(value, indent=2)[1:-1].strip() if isinstance(value, dict) else str(value)
    return colored(text, color)


def extract_first_sentence(docstring: str) -> str:
    """Return the docstring's first sentence, cut to a fixed length with a trailing "..."."""
    first_line = docstring.strip().splitlines()[0] if docstring.strip() else ""
    sentence = first_line.split(". ")[0].rstrip(".").strip()
    limit = DESCRIPTION_FIRST_SENTENCE_LENGTH
    return sentence if len(sentence) <= limit else f"{sentence[: limit - 3]}..."


def process_filter_description(docstring: str) -> str:
    return textwrap.fill(extract_first_sentence(docstring), width=DESCRIPTION_WRAP_WIDTH)
