"""Tool input schemas and their translation into search filters."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from aumai_slacksearch.models import ChannelSearchFilters, FieldViolation, SearchFilters

__all__ = [
    "MIN_LIMIT",
    "MAX_LIMIT",
    "TOOL_FIELD_MAP",
    "SearchMessagesInput",
    "SearchInChannelInput",
    "validate_search_messages",
    "validate_search_in_channel",
    "input_json_schema",
]

MIN_LIMIT = 1
MAX_LIMIT = 100

ROOT_FIELD = "<root>"

# Tool argument name -> SearchFilters field name.
TOOL_FIELD_MAP: dict[str, str] = {
    "query": "query",
    "channel_id": "channel_id",
    "limit": "limit",
    "cursor": "cursor",
    "from_date": "from_date",
    "to_date": "to_date",
    "user_id": "user_id",
    "has_reactions": "has_reactions",
    "has_threads": "has_threads",
}

# (field, pydantic error type) -> message shown to the caller.
_MESSAGES: dict[tuple[str, str], str] = {
    ("query", "string_too_short"): "Query cannot be empty",
    ("channel_id", "string_too_short"): "Channel ID is required",
    ("limit", "int_type"): "Limit must be an integer",
    ("limit", "greater_than_equal"): f"Limit must be at least {MIN_LIMIT}",
    ("limit", "less_than_equal"): f"Limit cannot exceed {MAX_LIMIT}",
}

_FiltersT = TypeVar("_FiltersT", bound=SearchFilters)


class SearchMessagesInput(BaseModel):
    """Arguments accepted by the ``search_messages`` tool."""

    model_config = ConfigDict(extra="ignore")

    query: str = Field(..., min_length=1, strict=True, description="Search query text")
    limit: int | None = Field(
        default=None,
        ge=MIN_LIMIT,
        le=MAX_LIMIT,
        strict=True,
        description="Maximum number of results to return (1-100, default 20)",
    )
    cursor: str | None = Field(
        default=None, strict=True, description="Pagination cursor from a previous response"
    )
    from_date: str | None = Field(
        default=None, strict=True, description="Only messages after this date (YYYY-MM-DD)"
    )
    to_date: str | None = Field(
        default=None, strict=True, description="Only messages before this date (YYYY-MM-DD)"
    )
    user_id: str | None = Field(
        default=None, strict=True, description="Only messages from this user ID"
    )
    has_reactions: bool | None = Field(
        default=None, strict=True, description="Only messages with reactions"
    )
    has_threads: bool | None = Field(
        default=None, strict=True, description="Only messages with thread replies"
    )

    @field_validator("limit", mode="before")
    @classmethod
    def integral_float_limit(cls, value: Any) -> Any:
        # JSON clients may send 20.0 for 20.
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value


class SearchInChannelInput(SearchMessagesInput):
    """Arguments accepted by the ``search_in_channel`` tool."""

    channel_id: str = Field(
        ..., min_length=1, strict=True, description="Channel ID to search in (e.g. C0123456)"
    )


def _violations(exc: ValidationError) -> list[FieldViolation]:
    """Flatten a pydantic error into field-addressed violations."""
    violations: list[FieldViolation] = []
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"]) or ROOT_FIELD
        message = _MESSAGES.get((path, error["type"]), error["msg"])
        violations.append(FieldViolation(field=path, message=message))
    return violations


def _validate(
    payload: Mapping[str, Any] | None,
    schema: type[SearchMessagesInput],
    target: type[_FiltersT],
) -> _FiltersT | list[FieldViolation]:
    if payload is None:
        payload = {}
    try:
        parsed = schema.model_validate(payload)
    except ValidationError as exc:
        return _violations(exc)

    # Only carry over what the caller actually sent so omitted filters stay
    # distinguishable from explicit falsy values.
    values = {
        TOOL_FIELD_MAP[name]: getattr(parsed, name)
        for name in parsed.model_fields_set
        if name in TOOL_FIELD_MAP
    }
    return target(**values)


def validate_search_messages(
    payload: Mapping[str, Any] | None,
) -> SearchFilters | list[FieldViolation]:
    """Validate ``search_messages`` arguments.

    Args:
        payload: Raw tool arguments as received from the protocol layer.
            Unknown keys are ignored.

    Returns:
        A :class:`~aumai_slacksearch.models.SearchFilters` on success, or the
        list of :class:`~aumai_slacksearch.models.FieldViolation` found.
    """
    return _validate(payload, SearchMessagesInput, SearchFilters)


def validate_search_in_channel(
    payload: Mapping[str, Any] | None,
) -> ChannelSearchFilters | list[FieldViolation]:
    """Validate ``search_in_channel`` arguments.

    Same rules as :func:`validate_search_messages` plus a required,
    non-empty ``channel_id``.
    """
    return _validate(payload, SearchInChannelInput, ChannelSearchFilters)


def input_json_schema(schema: type[BaseModel]) -> dict[str, Any]:
    """Return the JSON Schema advertised to MCP clients for *schema*."""
    return schema.model_json_schema()
