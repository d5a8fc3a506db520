"""Shared test fixtures for aumai-slacksearch."""
from __future__ import annotations

from typing import Any

import pytest

from aumai_slacksearch.core import SlackSearchClient
from aumai_slacksearch.server import ToolRegistry, build_registry


class RecordingGateway:
    """In-memory gateway that records every call and replays one envelope."""

    def __init__(self, envelope: Any = None, error: Exception | None = None) -> None:
        self.envelope = envelope if envelope is not None else {"ok": True, "messages": {"matches": []}}
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def search(
        self, query: str, count: int | None = None, cursor: str | None = None
    ) -> dict[str, Any]:
        self.calls.append({"query": query, "count": count, "cursor": cursor})
        if self.error is not None:
            raise self.error
        return self.envelope


# ---------------------------------------------------------------------------
# Raw envelopes
# ---------------------------------------------------------------------------


@pytest.fixture()
def full_envelope() -> dict[str, Any]:
    return {
        "ok": True,
        "query": "deploy",
        "messages": {
            "total": 2,
            "matches": [
                {
                    "text": "deploy finished",
                    "user": "U111",
                    "channel": {"id": "C111", "name": "releases"},
                    "ts": "1700000000.000100",
                },
                {
                    "text": "deploy rolled back",
                    "user": "U222",
                    "channel": "C222",
                    "ts": "1700000001.000200",
                },
            ],
        },
        "response_metadata": {"next_cursor": "dXNlcjpVMDYxTkZUVDI="},
    }


@pytest.fixture()
def empty_envelope() -> dict[str, Any]:
    return {"ok": True, "messages": {"matches": []}}


# ---------------------------------------------------------------------------
# Client, gateway and registry
# ---------------------------------------------------------------------------


@pytest.fixture()
def gateway(full_envelope: dict[str, Any]) -> RecordingGateway:
    return RecordingGateway(full_envelope)


@pytest.fixture()
def client(gateway: RecordingGateway) -> SlackSearchClient:
    return SlackSearchClient(gateway)


@pytest.fixture()
def registry(client: SlackSearchClient) -> ToolRegistry:
    return build_registry(client)
