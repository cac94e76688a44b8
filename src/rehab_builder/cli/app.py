"""Shared Typer app object, shared option types, and client utility."""

from dataclasses import replace
from typing import Annotated, Optional

import typer

from ..core.settings import Settings, load_settings
from ..io.api_client import CatalogClient

# Shared --api-url option type used by every command that talks to the API
ApiUrlOption = Annotated[
    Optional[str],
    typer.Option("--api-url", help="Base URL of the programs API (overrides settings)"),
]

app = typer.Typer(
    name="rehab-builder",
    help="Assemble, order and save rehabilitation exercise programmes.",
    no_args_is_help=True,
)


def get_settings(api_url: str | None = None) -> Settings:
    """Load settings, applying an --api-url override if given."""
    settings = load_settings()
    if api_url:
        settings = replace(settings, api_base_url=api_url)
    return settings


def get_client(settings: Settings) -> CatalogClient:
    """Get an API client for the configured base URL."""
    return CatalogClient(settings.api_base_url, timeout=settings.timeout_seconds)
