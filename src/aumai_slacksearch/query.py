"""Translation of search filters into Slack's inline query syntax."""

from __future__ import annotations

from aumai_slacksearch.models import ChannelSearchFilters, SearchFilters

__all__ = ["build_search_query"]


def build_search_query(filters: SearchFilters, channel_id: str | None = None) -> str:
    """Build the ``search.messages`` query string for *filters*.

    Clauses are appended to the free-text query in a fixed order:
    ``after:``, ``before:``, ``from:``, ``has:reaction``, ``has:thread`` and
    finally ``in:``. Operand values are inserted verbatim, without quoting.

    Args:
        filters: Validated search filters.
        channel_id: Channel scope. Defaults to ``filters.channel_id`` when
            *filters* is a :class:`~aumai_slacksearch.models.ChannelSearchFilters`.

    Returns:
        The query string, e.g. ``"urgent from:U789 has:reaction in:C456"``.
    """
    if channel_id is None and isinstance(filters, ChannelSearchFilters):
        channel_id = filters.channel_id

    clauses = [filters.query]
    if filters.from_date:
        clauses.append(f"after:{filters.from_date}")
    if filters.to_date:
        clauses.append(f"before:{filters.to_date}")
    if filters.user_id:
        clauses.append(f"from:{filters.user_id}")
    # Explicit False behaves exactly like an omitted flag.
    if filters.has_reactions:
        clauses.append("has:reaction")
    if filters.has_threads:
        clauses.append("has:thread")
    if channel_id:
        clauses.append(f"in:{channel_id}")

    return " ".join(clauses)
