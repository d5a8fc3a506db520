"""Core logic for aumai-slacksearch."""

from __future__ import annotations

import logging

from aumai_slacksearch.gateway import SearchGateway
from aumai_slacksearch.models import ChannelSearchFilters, SearchFilters, SearchResultSet
from aumai_slacksearch.normalize import normalize_search_response
from aumai_slacksearch.query import build_search_query

__all__ = ["SlackSearchClient"]

logger = logging.getLogger(__name__)


class SlackSearchClient:
    """Runs validated searches against a :class:`~aumai_slacksearch.gateway.SearchGateway`.

    Each call translates the filters into one query string, issues exactly
    one gateway request and normalises the envelope. The client keeps no
    state between calls.
    """

    def __init__(self, gateway: SearchGateway) -> None:
        self._gateway = gateway

    async def search_messages(self, filters: SearchFilters) -> SearchResultSet:
        """Search across every channel and conversation visible to the token.

        Args:
            filters: Validated workspace-wide filters.

        Returns:
            One normalised page of results.
        """
        return await self._execute(build_search_query(filters), filters)

    async def search_in_channel(self, filters: ChannelSearchFilters) -> SearchResultSet:
        """Search within ``filters.channel_id`` only."""
        return await self._execute(build_search_query(filters, filters.channel_id), filters)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _execute(self, query: str, filters: SearchFilters) -> SearchResultSet:
        envelope = await self._gateway.search(query, count=filters.limit, cursor=filters.cursor)
        result_set = normalize_search_response(envelope)
        logger.info(
            "Search returned %d result(s)%s",
            len(result_set.results),
            " with more pages" if result_set.next_cursor else "",
            extra={"result_count": len(result_set.results)},
        )
        return result_set
