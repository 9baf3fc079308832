"""Main Typer CLI application for stellare_types."""

import logging

import typer

app = typer.Typer(
    help="Dimension tags, unit conversion and interop capabilities of stellare_types",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _register_commands() -> None:
    """
    Import command modules to register commands with the app.

    Commands use the @app.command() decorator and register themselves when
    their module is imported.
    """
    from stellare_types.cli import capabilities, units

    _ = capabilities
    _ = units


_register_commands()


if __name__ == "__main__":
    app()
