"""Outbound calls to Slack's ``search.messages`` Web API method.

The gateway is the only component that talks to Slack. It returns the
decoded response envelope exactly as received and does not interpret
``ok``/``error``; that is the normalizer's job.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Protocol

import httpx

__all__ = [
    "DEFAULT_API_BASE_URL",
    "DEFAULT_LIMIT",
    "DEFAULT_TIMEOUT_SECONDS",
    "SearchGateway",
    "SlackSearchGateway",
]

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://slack.com/api"
DEFAULT_LIMIT = 20
DEFAULT_TIMEOUT_SECONDS = 30.0

_SEARCH_METHOD = "search.messages"


class SearchGateway(Protocol):
    """Search operation required by the search client."""

    async def search(
        self, query: str, count: int | None = None, cursor: str | None = None
    ) -> dict[str, Any]:
        ...


class SlackSearchGateway:
    """:class:`SearchGateway` backed by ``httpx.AsyncClient``.

    Args:
        token: Slack bot (or user) token with the ``search:read`` scope.
        base_url: Web API root, without the method name.
        timeout: Per-request timeout in seconds.
        http_client: Optional pre-built client. When given, the gateway does
            not close it.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not token or not token.strip():
            raise ValueError("Slack bot token is required")
        self._token = token.strip()
        self._url = f"{base_url.rstrip('/')}/{_SEARCH_METHOD}"
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def search(
        self, query: str, count: int | None = None, cursor: str | None = None
    ) -> dict[str, Any]:
        """Run one ``search.messages`` call.

        Args:
            query: Fully translated query string.
            count: Page size; :data:`DEFAULT_LIMIT` when ``None``.
            cursor: Continuation token. Left out of the request entirely
                when ``None`` or empty.

        Returns:
            The decoded JSON envelope, including ``{"ok": false, ...}``.

        Raises:
            httpx.HTTPError: On transport failures or non-2xx statuses.
            ValueError: When the body is not valid JSON.
        """
        data: dict[str, str] = {
            "query": query,
            "count": str(count if count is not None else DEFAULT_LIMIT),
        }
        if cursor:
            data["cursor"] = cursor

        logger.debug(
            "search.messages query=%r count=%s cursor=%s",
            query,
            data["count"],
            "yes" if cursor else "no",
        )
        response = await self._client.post(
            self._url,
            data=data,
            headers={"Authorization": f"Bearer {self._token}"},
        )
        response.raise_for_status()
        return response.json()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this gateway created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> SlackSearchGateway:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
