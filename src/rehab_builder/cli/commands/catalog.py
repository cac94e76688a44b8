"""Catalog commands: categories, templates."""

import asyncio
from typing import Annotated

import typer

from ...io.api_client import CatalogClientError
from .. import views
from ..app import ApiUrlOption, app, get_client, get_settings


@app.command()
def categories(api_url: ApiUrlOption = None) -> None:
    """
    List exercise categories available in the catalog.
    """
    client = get_client(get_settings(api_url))
    try:
        found = asyncio.run(client.list_categories())
    except CatalogClientError as e:
        views.print_error(f"Failed to load categories. {e}")
        raise typer.Exit(1)

    views.print_categories(found)


@app.command()
def templates(
    category_id: Annotated[str, typer.Argument(help="Category ID (see 'categories')")],
    api_url: ApiUrlOption = None,
) -> None:
    """
    List the exercise templates in one category.
    """
    client = get_client(get_settings(api_url))
    try:
        found = asyncio.run(client.list_templates(category_id))
    except CatalogClientError as e:
        views.print_error(f"Failed to load exercises. {e}")
        raise typer.Exit(1)

    views.print_templates(found)
