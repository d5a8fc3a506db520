"""MCP tool definitions and handlers for Slack search.

A handler validates the raw tool arguments, runs the search and wraps the
result set as a single text block. Validation failures come back as an
error response listing every offending field; the gateway is never called
in that case.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field

from aumai_slacksearch.core import SlackSearchClient
from aumai_slacksearch.models import FieldViolation, SearchResultSet
from aumai_slacksearch.validation import (
    SearchInChannelInput,
    SearchMessagesInput,
    input_json_schema,
    validate_search_in_channel,
    validate_search_messages,
)

__all__ = [
    "TextBlock",
    "ToolResponse",
    "ToolDefinition",
    "ToolHandler",
    "SEARCH_MESSAGES_TOOL",
    "SEARCH_IN_CHANNEL_TOOL",
    "SearchMessagesHandler",
    "SearchInChannelHandler",
]

logger = logging.getLogger(__name__)


class TextBlock(BaseModel):
    """A text content block in a tool response."""

    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Protocol-neutral tool call result."""

    content: list[TextBlock] = Field(default_factory=list)
    is_error: bool = False

    @classmethod
    def from_results(cls, result_set: SearchResultSet) -> ToolResponse:
        return cls(content=[TextBlock(text=result_set.to_json())])

    @classmethod
    def from_violations(cls, violations: list[FieldViolation]) -> ToolResponse:
        body = {
            "error": "validation_error",
            "violations": [violation.model_dump() for violation in violations],
        }
        return cls(content=[TextBlock(text=json.dumps(body, indent=2))], is_error=True)

    @classmethod
    def from_message(cls, error: str, message: str) -> ToolResponse:
        body = {"error": error, "message": message}
        return cls(content=[TextBlock(text=json.dumps(body, indent=2))], is_error=True)


class ToolDefinition(BaseModel):
    """Contract advertised to MCP clients for one tool."""

    name: str
    description: str
    input_schema: dict[str, Any]


ToolHandler = Callable[[Mapping[str, Any] | None], Awaitable[ToolResponse]]


SEARCH_MESSAGES_TOOL = ToolDefinition(
    name="search_messages",
    description=(
        "Search across all Slack messages in all channels and conversations. "
        "Supports filtering by date range, user, reactions, and threads."
    ),
    input_schema=input_json_schema(SearchMessagesInput),
)

SEARCH_IN_CHANNEL_TOOL = ToolDefinition(
    name="search_in_channel",
    description=(
        "Search within a specific Slack channel. Useful when you know the "
        "channel ID and want to search only within that channel."
    ),
    input_schema=input_json_schema(SearchInChannelInput),
)


class SearchMessagesHandler:
    """Handler for the ``search_messages`` tool."""

    definition = SEARCH_MESSAGES_TOOL

    def __init__(self, client: SlackSearchClient) -> None:
        self._client = client

    async def __call__(self, arguments: Mapping[str, Any] | None) -> ToolResponse:
        filters = validate_search_messages(arguments)
        if isinstance(filters, list):
            logger.info(
                "Rejected %s call: %d violation(s)",
                self.definition.name,
                len(filters),
                extra={"tool_name": self.definition.name},
            )
            return ToolResponse.from_violations(filters)
        return ToolResponse.from_results(await self._client.search_messages(filters))


class SearchInChannelHandler:
    """Handler for the ``search_in_channel`` tool."""

    definition = SEARCH_IN_CHANNEL_TOOL

    def __init__(self, client: SlackSearchClient) -> None:
        self._client = client

    async def __call__(self, arguments: Mapping[str, Any] | None) -> ToolResponse:
        filters = validate_search_in_channel(arguments)
        if isinstance(filters, list):
            logger.info(
                "Rejected %s call: %d violation(s)",
                self.definition.name,
                len(filters),
                extra={"tool_name": self.definition.name},
            )
            return ToolResponse.from_violations(filters)
        return ToolResponse.from_results(await self._client.search_in_channel(filters))
