"""
Asynchronous HTTP client for the WordPress REST API.

Uses ``httpx.AsyncClient`` so per-route metadata requests can run
concurrently. Transient transport failures are retried with tenacity when
``fetch_attempts`` is greater than one.
"""

import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    wait_exponential,
)

from wp_json_types.core.config import Settings, get_settings
from wp_json_types.core.exceptions import RouteDiscoveryError, SchemaFetchError
from wp_json_types.core.models import RouteLevel, SchemaEnvelope

logger = logging.getLogger(__name__)


def normalize_type_names(raw: str) -> str:
    """Rewrite the ``"bool"`` type name some endpoints emit to ``"boolean"``."""
    return raw.replace('"bool"', '"boolean"')


def _stop_after_configured_attempts(retry_state: RetryCallState) -> bool:
    """Stop once the client's ``fetch_attempts`` have been used up."""
    client = retry_state.args[0]
    return retry_state.attempt_number >= client._attempts


class WpApiClient:
    """Thin async wrapper around httpx for route and schema metadata.

    Use as an async context manager so the connection pool is closed::

        async with WpApiClient(settings) as client:
            routes = await client.get_routes()
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            settings: Configuration (falls back to ``get_settings()``).
            transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
        """
        settings = settings or get_settings()
        self._base_url = settings.base_url.rstrip("/")
        self._namespace = settings.namespace
        self._attempts = max(1, settings.fetch_attempts)
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=settings.http_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "WpApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @retry(
        stop=_stop_after_configured_attempts,
        wait=wait_exponential(multiplier=0.5, min=0.5, max=8),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    async def _request(self, method: str, path: str) -> httpx.Response:
        """Send a request, retrying transport errors up to ``fetch_attempts`` times."""
        resp = await self._client.request(method, path)
        resp.raise_for_status()
        return resp

    async def get_routes(self) -> dict[str, RouteLevel]:
        """GET the namespace index and return its route table.

        Returns:
            Mapping of route URI to its metadata, in the order the API lists them.

        Raises:
            RouteDiscoveryError: On any HTTP failure or a body without ``routes``.
        """
        try:
            resp = await self._request("GET", self._namespace)
            body = resp.json()
        except httpx.HTTPError as exc:
            raise RouteDiscoveryError(
                f"Failed to list routes at {self._base_url}{self._namespace}: {exc}"
            ) from exc
        except json.JSONDecodeError as exc:
            raise RouteDiscoveryError(f"Route index is not JSON: {exc}") from exc

        routes = body.get("routes") if isinstance(body, dict) else None
        if not isinstance(routes, dict):
            raise RouteDiscoveryError("Route index has no 'routes' table")

        try:
            return {uri: RouteLevel.model_validate(level) for uri, level in routes.items()}
        except ValidationError as exc:
            raise RouteDiscoveryError(f"Malformed route table: {exc}") from exc

    async def get_schema(self, uri: str) -> dict[str, Any]:
        """Issue an OPTIONS request for ``uri`` and return its JSON Schema.

        Raises:
            SchemaFetchError: On HTTP failure, invalid JSON, or a missing schema.
        """
        try:
            resp = await self._request("OPTIONS", uri)
        except httpx.HTTPError as exc:
            raise SchemaFetchError(uri, f"Metadata request failed ({exc})") from exc

        try:
            envelope = SchemaEnvelope.model_validate(json.loads(normalize_type_names(resp.text)))
        except (json.JSONDecodeError, ValidationError) as exc:
            raise SchemaFetchError(uri, f"Malformed metadata ({exc})") from exc

        schema = envelope.resource_schema
        if not schema or not schema.get("title"):
            raise SchemaFetchError(uri, "No titled schema in metadata")
        return schema
