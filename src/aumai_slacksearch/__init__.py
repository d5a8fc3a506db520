"""AumAI Slacksearch: Slack message search exposed to AI assistants as MCP tools."""

__version__ = "0.1.0"

from aumai_slacksearch.core import SlackSearchClient
from aumai_slacksearch.gateway import SearchGateway, SlackSearchGateway
from aumai_slacksearch.models import (
    ChannelSearchFilters,
    FieldViolation,
    MessageRecord,
    SearchFilters,
    SearchResultSet,
)
from aumai_slacksearch.normalize import normalize_search_response
from aumai_slacksearch.query import build_search_query

__all__ = [
    "SlackSearchClient",
    "SearchGateway",
    "SlackSearchGateway",
    "ChannelSearchFilters",
    "FieldViolation",
    "MessageRecord",
    "SearchFilters",
    "SearchResultSet",
    "build_search_query",
    "normalize_search_response",
]
