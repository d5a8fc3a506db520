"""Pydantic models for aumai-slacksearch."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "SearchFilters",
    "ChannelSearchFilters",
    "MessageRecord",
    "SearchResultSet",
    "FieldViolation",
]


class SearchFilters(BaseModel):
    """Validated, immutable description of one workspace-wide search request.

    Optional filters the caller did not supply stay ``None`` and are absent
    from ``model_fields_set``; an explicit ``False`` on a boolean filter is
    kept as given.
    """

    model_config = ConfigDict(frozen=True)

    query: str = Field(..., min_length=1, description="Free-text search term")
    limit: int | None = Field(
        default=None, ge=1, le=100, description="Page size; the gateway defaults it to 20"
    )
    cursor: str | None = Field(
        default=None, description="Opaque continuation token from a previous page"
    )
    from_date: str | None = Field(default=None, description="Lower date bound, e.g. 2024-01-01")
    to_date: str | None = Field(default=None, description="Upper date bound, e.g. 2024-12-31")
    user_id: str | None = Field(default=None, description="Author identifier to filter on")
    has_reactions: bool | None = Field(
        default=None, description="Only match messages that carry reactions"
    )
    has_threads: bool | None = Field(
        default=None, description="Only match messages that started a thread"
    )


class ChannelSearchFilters(SearchFilters):
    """A :class:`SearchFilters` scoped to a single channel."""

    channel_id: str = Field(..., min_length=1, description="Channel identifier to search in")


class MessageRecord(BaseModel):
    """A single flattened search hit. No field is ever ``None``."""

    text: str = Field(default="", description="Message text")
    author: str = Field(default="", description="Author user identifier")
    channel: str = Field(default="", description="Channel identifier")
    timestamp: str = Field(default="", description="Provider message timestamp (ts)")


class SearchResultSet(BaseModel):
    """One page of normalised search results."""

    results: list[MessageRecord] = Field(default_factory=list)
    next_cursor: str | None = Field(
        default=None,
        serialization_alias="nextCursor",
        description="Continuation token; absent when there are no further pages",
    )

    def to_payload(self) -> dict[str, Any]:
        """Return the outward dict, omitting ``nextCursor`` when there is none."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Serialise :meth:`to_payload` as indented JSON."""
        return json.dumps(self.to_payload(), indent=2, ensure_ascii=False)


class FieldViolation(BaseModel):
    """One input validation failure, addressed by field path."""

    field: str = Field(..., description="Dotted path of the offending field")
    message: str = Field(..., description="Human-readable reason")
