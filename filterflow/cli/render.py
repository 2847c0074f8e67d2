import typer

from filterflow.bootstrap import bootstrap
from filterflow.cli.constants import (
    EXIT_CODE_CONFIGURATION_ERROR,
    EXIT_CODE_TEMPLATE_ERROR,
    EXIT_CODE_UNEXPECTED_ERROR,
)
from filterflow.cli.exceptions import CLIRenderError
from filterflow.cli.parsing import get_settings_path, parse_vars
from filterflow.exceptions import FilterFlowError, TemplateError
from filterflow.expression import compile_expression

VARS_OPTION = typer.Option(
    None,
    "--vars",
    "-v",
    help="Variables for the expression as key=value pairs, e.g. \"name='World',count=3\"",
)


def render(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="The filter expression to evaluate, e.g. \"name|upper\""),
    vars: str | None = VARS_OPTION,
) -> None:
    """
    Compiles a filter expression and prints its result.
    """
    try:
        bootstrap(get_settings_path(ctx))
        variables = parse_vars(vars)
        result = compile_expression(expression, name="<cli>").render(variables)
        typer.echo(result)

    except CLIRenderError as e:
        e.show()
        raise typer.Exit(code=EXIT_CODE_CONFIGURATION_ERROR) from None

    except TemplateError as e:
        CLIRenderError(
            message=f"Could not render expression: {e}",
            hint="Run 'filterflow show --filters' to list the available filters.",
        ).show()
        raise typer.Exit(code=EXIT_CODE_TEMPLATE_ERROR) from None

    except FilterFlowError as e:
        CLIRenderError(
            message=f"FilterFlow configuration error: {e}",
            hint="Check your FilterFlow settings and custom filter directories.",
            original_exception=e,
        ).show()
        raise typer.Exit(code=EXIT_CODE_CONFIGURATION_ERROR) from None

    except Exception as e:
        CLIRenderError(
            message=f"Unexpected error while rendering '{expression}': {e}",
            hint="This may be a bug. Please report it if the issue persists.",
            original_exception=e,
        ).show()
        raise typer.Exit(code=EXIT_CODE_UNEXPECTED_ERROR) from None
