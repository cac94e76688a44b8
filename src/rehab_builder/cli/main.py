"""
CLI entry point using Typer.

Provides commands for exercise programme assembly:
- categories: List catalog categories
- templates: List exercise templates in a category
- build: Interactive programme editor (add, tune, reorder, save)
- show-payload: Validate and display a programme payload file
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from . import views
from .app import app
from .commands import build as _build  # noqa: F401  (registers commands)
from .commands import catalog as _catalog  # noqa: F401


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show request-level log messages"),
    ] = False,
) -> None:
    """
    Rehabilitation exercise programme builder.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=views.console, show_path=False)],
        force=True,
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
