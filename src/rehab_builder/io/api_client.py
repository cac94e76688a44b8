"""
HTTP client for the exercise catalog and programs API.

Lists exercise categories, lists the templates in a category, and saves
assembled programs.  Transport and URL failures (timeouts included)
surface as CatalogAPIUnavailable; non-success responses and malformed bodies as
CatalogAPIError.
"""

import logging
from typing import Any

import httpx

from ..core.models import Category, ExerciseTemplate, ProgramPayload, SavedProgram
from .serializers import (
    ValidationError,
    dict_to_category,
    dict_to_saved_program,
    dict_to_template,
    program_to_dict,
)

logger = logging.getLogger(__name__)


class CatalogClientError(Exception):
    """Base exception for catalog client errors."""

    pass


class CatalogAPIUnavailable(CatalogClientError):
    """Raised when the API cannot be reached or the request timed out."""

    pass


class CatalogAPIError(CatalogClientError):
    """Raised when the API returns an error or an unreadable response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class CatalogClient:
    """
    HTTP client for the catalog/programs API.

    Endpoints (relative to ``base_url``):
        GET  /categories
        GET  /categories/{category_id}/exercises
        POST /combos
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the catalog client.

        Args:
            base_url: Base URL of the API (e.g., "http://localhost:3001/api")
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used to stub the API in tests)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        ok_statuses: tuple[int, ...] = (200,),
        action: str,
    ) -> Any:
        url = f"{self._base_url}{path}"
        logger.debug("%s %s", method, url)

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.request(method, url, json=json)
        except httpx.ConnectError as e:
            logger.error(f"Catalog API unavailable: {e}")
            raise CatalogAPIUnavailable(
                f"Catalog API is not available at {self._base_url}"
            ) from e
        except httpx.TimeoutException as e:
            logger.error(f"Catalog API timeout: {e}")
            raise CatalogAPIUnavailable("Catalog API request timed out") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Catalog API request failed: {e!r}")
            raise CatalogAPIUnavailable(
                f"Catalog API request to {url} failed: {e}"
            ) from e

        if response.status_code not in ok_statuses:
            logger.error(f"Catalog API error: {response.status_code} - {response.text}")
            raise CatalogAPIError(
                f"Failed to {action}: HTTP {response.status_code}",
                response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise CatalogAPIError(
                f"Failed to {action}: response is not valid JSON",
                response.status_code,
            ) from e

    async def list_categories(self) -> list[Category]:
        """
        Fetch all exercise categories.

        Returns:
            Categories in API order

        Raises:
            CatalogAPIUnavailable: If the API is not reachable
            CatalogAPIError: If the API returns an error response
        """
        data = await self._request("GET", "/categories", action="fetch categories")
        return self._parse_list(data, dict_to_category, "fetch categories")

    async def list_templates(self, category_id: str) -> list[ExerciseTemplate]:
        """
        Fetch the exercise templates of one category.

        Args:
            category_id: Category to list

        Returns:
            Templates in API order

        Raises:
            CatalogAPIUnavailable: If the API is not reachable
            CatalogAPIError: If the API returns an error response
        """
        data = await self._request(
            "GET",
            f"/categories/{category_id}/exercises",
            action="fetch exercises",
        )
        return self._parse_list(data, dict_to_template, "fetch exercises")

    async def save_program(self, payload: ProgramPayload) -> SavedProgram:
        """
        Persist an assembled program.

        Args:
            payload: Program to save

        Returns:
            SavedProgram echoed back by the API

        Raises:
            CatalogAPIUnavailable: If the API is not reachable
            CatalogAPIError: If the API returns an error response
        """
        data = await self._request(
            "POST",
            "/combos",
            json=program_to_dict(payload),
            ok_statuses=(200, 201),
            action="save program",
        )
        try:
            saved = dict_to_saved_program(data)
        except ValidationError as e:
            raise CatalogAPIError(f"Failed to save program: {e}") from e
        logger.info("Saved program %s (%s)", saved.id, saved.name)
        return saved

    @staticmethod
    def _parse_list(data: Any, parse, action: str) -> list:
        if not isinstance(data, list):
            raise CatalogAPIError(f"Failed to {action}: expected a list")
        try:
            return [parse(item) for item in data]
        except ValidationError as e:
            raise CatalogAPIError(f"Failed to {action}: {e}") from e
