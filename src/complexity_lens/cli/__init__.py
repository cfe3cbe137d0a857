"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="complexity-lens",
    help="Complexity Lens - Algorithmic Complexity Reports for Source Code",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .report import report as _report, export as _export  # noqa: F401, E402
from .info import languages as _languages, diagnostics as _diagnostics  # noqa: F401, E402


def main() -> None:
    app()


__all__ = ["app", "main"]
