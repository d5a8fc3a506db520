"""Tests for SlackSearchClient composition."""
from __future__ import annotations

from typing import Any

import pytest

from aumai_slacksearch.core import SlackSearchClient
from aumai_slacksearch.models import ChannelSearchFilters, SearchFilters

from conftest import RecordingGateway


class TestSlackSearchClient:
    async def test_search_messages_single_call(
        self, client: SlackSearchClient, gateway: RecordingGateway
    ) -> None:
        result_set = await client.search_messages(SearchFilters(query="deploy", user_id="U1"))

        assert gateway.calls == [{"query": "deploy from:U1", "count": None, "cursor": None}]
        assert len(result_set.results) == 2
        assert result_set.next_cursor == "dXNlcjpVMDYxTkZUVDI="

    async def test_search_in_channel_scopes_query(
        self, client: SlackSearchClient, gateway: RecordingGateway
    ) -> None:
        await client.search_in_channel(
            ChannelSearchFilters(query="urgent", channel_id="C456", has_threads=True)
        )
        assert gateway.calls[0]["query"] == "urgent has:thread in:C456"

    async def test_limit_and_cursor_passed_through(
        self, client: SlackSearchClient, gateway: RecordingGateway
    ) -> None:
        await client.search_messages(SearchFilters(query="q", limit=7, cursor="opaque=="))
        assert gateway.calls[0] == {"query": "q", "count": 7, "cursor": "opaque=="}

    async def test_failure_envelope_is_zero_results(self) -> None:
        client = SlackSearchClient(RecordingGateway({"ok": False, "error": "invalid_auth"}))
        result_set = await client.search_messages(SearchFilters(query="q"))
        assert result_set.to_payload() == {"results": []}

    async def test_gateway_errors_propagate(self) -> None:
        client = SlackSearchClient(RecordingGateway(error=ConnectionError("boom")))
        with pytest.raises(ConnectionError, match="boom"):
            await client.search_messages(SearchFilters(query="q"))

    async def test_calls_are_independent(self, full_envelope: dict[str, Any]) -> None:
        gateway = RecordingGateway(full_envelope)
        client = SlackSearchClient(gateway)
        first = await client.search_messages(SearchFilters(query="a"))
        second = await client.search_messages(SearchFilters(query="b"))
        assert first == second
        assert [call["query"] for call in gateway.calls] == ["a", "b"]
