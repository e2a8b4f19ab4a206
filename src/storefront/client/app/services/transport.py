"""Async HTTP transport for the storefront's read-only reference endpoints."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx

from storefront.client.config.schema import ClientSettings

logger = logging.getLogger(__name__)


class RemoteSourceError(Exception):
    """Raised when the remote source cannot deliver a usable payload."""

    def __init__(self, endpoint: str, message: str) -> None:
        super().__init__(f"{endpoint}: {message}")
        self.endpoint = endpoint


class RemoteStatusError(RemoteSourceError):
    """Raised for non-success HTTP statuses."""

    def __init__(self, endpoint: str, status_code: int, reason: str) -> None:
        super().__init__(endpoint, f"API {status_code}: {reason}")
        self.status_code = status_code


class MalformedPayloadError(RemoteSourceError):
    """Raised when a successful response body is not valid JSON."""


class RemoteSource:
    """Issue exactly one GET per call against the configured API."""

    def __init__(
        self,
        settings: ClientSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = settings.api_base_url
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if settings.api_token:
            headers["Authorization"] = f"Bearer {settings.api_token}"
        self._client = httpx.AsyncClient(
            headers=headers,
            timeout=httpx.Timeout(settings.timeout_seconds),
            transport=transport,
        )

    def resolve_url(self, endpoint: str) -> str:
        """Join ``endpoint`` onto the base URL unless it is already absolute."""

        if endpoint.startswith(("http://", "https://")):
            return endpoint
        return f"{self._base_url}/{endpoint.lstrip('/')}"

    async def get(self, endpoint: str, *, params: Mapping[str, str] | None = None) -> Any:
        """Return the decoded JSON body for ``endpoint`` or ``None`` when empty."""

        url = self.resolve_url(endpoint)
        logger.debug("GET %s", url)
        try:
            response = await self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise RemoteSourceError(endpoint, str(exc) or exc.__class__.__name__) from exc

        if not response.is_success:
            raise RemoteStatusError(endpoint, response.status_code, response.reason_phrase)

        text = response.text
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except (ValueError, RecursionError) as exc:
            raise MalformedPayloadError(endpoint, "Invalid JSON response") from exc

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RemoteSource":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = [
    "MalformedPayloadError",
    "RemoteSource",
    "RemoteSourceError",
    "RemoteStatusError",
]
