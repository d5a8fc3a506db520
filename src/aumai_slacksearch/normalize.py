"""Normalisation of raw ``search.messages`` envelopes.

Every function here is total: any combination of missing, null or
wrongly-typed upstream fields maps to empty strings instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from aumai_slacksearch.models import MessageRecord, SearchResultSet

__all__ = [
    "is_failed_envelope",
    "normalize_match",
    "extract_next_cursor",
    "normalize_search_response",
]

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _channel_id(value: Any) -> str:
    """Channel arrives either as a bare id or as ``{"id": ..., "name": ...}``."""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return _text(value.get("id"))
    return ""


def is_failed_envelope(envelope: Any) -> bool:
    """Return True when *envelope* must be reported as zero matches.

    Provider failures (``ok`` not true) and envelopes without a ``messages``
    block are deliberately indistinguishable from an empty search.
    """
    if not isinstance(envelope, Mapping):
        return True
    return envelope.get("ok") is not True or not isinstance(envelope.get("messages"), Mapping)


def normalize_match(match: Any) -> MessageRecord:
    """Flatten one raw match into a :class:`MessageRecord`."""
    if not isinstance(match, Mapping):
        return MessageRecord()
    return MessageRecord(
        text=_text(match.get("text")),
        author=_text(match.get("user")),
        channel=_channel_id(match.get("channel")),
        timestamp=_text(match.get("ts")),
    )


def extract_next_cursor(envelope: Any) -> str | None:
    """Find the continuation token, wherever this envelope version put it.

    Looks at ``response_metadata.next_cursor`` first, then at the nested
    ``messages.response_metadata.next_cursor`` and ``messages.next_cursor``.
    Empty strings count as no cursor.
    """
    if not isinstance(envelope, Mapping):
        return None

    messages = envelope.get("messages")
    if not isinstance(messages, Mapping):
        messages = {}
    nested_metadata = messages.get("response_metadata")
    top_metadata = envelope.get("response_metadata")

    candidates = (
        top_metadata.get("next_cursor") if isinstance(top_metadata, Mapping) else None,
        nested_metadata.get("next_cursor") if isinstance(nested_metadata, Mapping) else None,
        messages.get("next_cursor"),
    )
    for candidate in candidates:
        if isinstance(candidate, str) and candidate:
            return candidate
    return None


def normalize_search_response(envelope: Any) -> SearchResultSet:
    """Map a raw gateway envelope to a :class:`SearchResultSet`.

    Args:
        envelope: Whatever the gateway returned.

    Returns:
        The normalised result set. Upstream order is preserved; nothing is
        sorted, deduplicated or dropped.
    """
    if is_failed_envelope(envelope):
        error_code = envelope.get("error") if isinstance(envelope, Mapping) else None
        if error_code:
            logger.warning(
                "Slack search failed with %s; reporting no results",
                error_code,
                extra={"error_code": error_code},
            )
        return SearchResultSet()

    matches = envelope["messages"].get("matches")
    if not isinstance(matches, list):
        return SearchResultSet()

    return SearchResultSet(
        results=[normalize_match(match) for match in matches],
        next_cursor=extract_next_cursor(envelope),
    )
