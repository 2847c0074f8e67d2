"""
Errors raised by the ``filterflow`` command line.

Each carries an optional hint and the exception that caused it, and knows how
to print itself as a Rich panel on stderr.
"""

import traceback

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from filterflow.exceptions import FilterFlowError

console = Console(stderr=True)


class FilterFlowCLIError(FilterFlowError):
    """Base class for errors reported to the user by a CLI command."""

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        code: int = 1,
        original_exception: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.code = code
        self.original_exception = original_exception

    def format_rich(self) -> str:
        """Build the Rich markup shown inside the error panel."""
        lines = [f"[red bold]Error:[/] {escape(self.message)}"]
        if self.hint:
            lines.append(f"[yellow]Hint:[/] {escape(self.hint)}")

        cause = self.original_exception
        if cause is not None:
            lines += ["", "[dim]Caused by:[/]", f"[dim]{type(cause).__name__}: {escape(str(cause))}[/]"]
            trace = "".join(traceback.format_tb(cause.__traceback__))
            if trace:
                lines += ["[dim]Traceback:[/]", f"[dim]{escape(trace)}[/]"]

        return "\n".join(lines)

    def show(self) -> None:
        console.print(Panel(self.format_rich(), title="[red]filterflow[/]", border_style="red"))


class CLIShowError(FilterFlowCLIError):
    """Raised by ``filterflow show``."""


class CLIRenderError(FilterFlowCLIError):
    """Raised by ``filterflow render``, mostly for malformed ``--vars``."""
