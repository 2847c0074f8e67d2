import typer

from filterflow.cli import render, show

app = typer.Typer(
    help="FilterFlow compiles and evaluates filter expressions such as \"name|upper|truncate:5\".",
    add_completion=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    settings: str | None = typer.Option(None, "--settings", "-s", help="Path to a FilterFlow settings file."),
) -> None:
    """
    Settings are looked up in this order: --settings, then the FILTERFLOW_SETTINGS
    environment variable, then ./filterflow.yaml.
    """
    # the two later fallbacks live in FilterFlowSettings.load
    ctx.obj = {"settings": settings or ""}


app.command()(render.render)
app.command()(show.show)

if __name__ == "__main__":
    app()
