"""Quickstart examples for aumai-slacksearch.

Demonstrates query translation, envelope normalisation and a full tool
call against a canned gateway, all without a Slack token. When
``SLACK_BOT_TOKEN`` is set, a final demo runs one real search.

    python examples/quickstart.py
"""

import asyncio
import os
from typing import Any

from aumai_slacksearch.core import SlackSearchClient
from aumai_slacksearch.gateway import SlackSearchGateway
from aumai_slacksearch.models import ChannelSearchFilters, SearchFilters
from aumai_slacksearch.normalize import normalize_search_response
from aumai_slacksearch.query import build_search_query
from aumai_slacksearch.server import build_registry

_CANNED_ENVELOPE: dict[str, Any] = {
    "ok": True,
    "messages": {
        "matches": [
            {"text": "release 2.3 is out", "user": "U01", "channel": {"id": "C01"}, "ts": "1.1"},
            {"text": None, "user": "U02", "channel": "C02"},
        ]
    },
    "response_metadata": {"next_cursor": "bmV4dF9wYWdl"},
}


class CannedGateway:
    """Offline gateway returning the same envelope for every query."""

    async def search(
        self, query: str, count: int | None = None, cursor: str | None = None
    ) -> dict[str, Any]:
        print(f"  -> search.messages query={query!r} count={count} cursor={cursor}")
        return _CANNED_ENVELOPE


def demo_query_translation() -> None:
    print("== Query translation")
    filters = SearchFilters(
        query="release", from_date="2024-01-01", user_id="U01", has_reactions=True
    )
    print(" ", build_search_query(filters))
    print(" ", build_search_query(ChannelSearchFilters(query="incident", channel_id="C42")))


def demo_normalisation() -> None:
    print("== Normalisation")
    print(normalize_search_response(_CANNED_ENVELOPE).to_json())
    print(normalize_search_response({"ok": False, "error": "invalid_auth"}).to_json())


async def demo_tool_calls() -> None:
    print("== Tool calls")
    registry = build_registry(SlackSearchClient(CannedGateway()))
    ok = await registry.call("search_in_channel", {"query": "release", "channel_id": "C01"})
    print(ok.content[0].text)
    rejected = await registry.call("search_messages", {"query": "", "limit": 500})
    print(rejected.content[0].text)


async def demo_live_search(token: str) -> None:
    print("== Live search")
    async with SlackSearchGateway(token) as gateway:
        client = SlackSearchClient(gateway)
        result_set = await client.search_messages(SearchFilters(query="hello", limit=3))
    print(result_set.to_json())


def main() -> None:
    demo_query_translation()
    demo_normalisation()
    asyncio.run(demo_tool_calls())
    token = os.environ.get("SLACK_BOT_TOKEN")
    if token:
        asyncio.run(demo_live_search(token))


if __name__ == "__main__":
    main()
