"""Tests for the Slack query string translator."""
from __future__ import annotations

from aumai_slacksearch.models import ChannelSearchFilters, SearchFilters
from aumai_slacksearch.query import build_search_query


class TestBuildSearchQuery:
    def test_query_only(self) -> None:
        assert build_search_query(SearchFilters(query="bug fix")) == "bug fix"

    def test_all_workspace_filters(self) -> None:
        filters = SearchFilters(
            query="test",
            from_date="2024-01-01",
            to_date="2024-12-31",
            user_id="U123",
            has_reactions=True,
            has_threads=True,
        )
        assert build_search_query(filters) == (
            "test after:2024-01-01 before:2024-12-31 from:U123 has:reaction has:thread"
        )

    def test_clause_order_ignores_argument_order(self) -> None:
        filters = SearchFilters(
            has_threads=True,
            user_id="U1",
            to_date="2024-02-01",
            has_reactions=True,
            from_date="2024-01-01",
            query="q",
        )
        assert build_search_query(filters, "C9") == (
            "q after:2024-01-01 before:2024-02-01 from:U1 has:reaction has:thread in:C9"
        )

    def test_channel_clause_is_last(self) -> None:
        filters = ChannelSearchFilters(
            query="urgent", channel_id="C456", user_id="U789", has_reactions=True
        )
        assert build_search_query(filters) == "urgent from:U789 has:reaction in:C456"

    def test_explicit_channel_overrides_filters(self) -> None:
        filters = ChannelSearchFilters(query="q", channel_id="C1")
        assert build_search_query(filters, "C2") == "q in:C2"

    def test_false_booleans_emit_nothing(self) -> None:
        explicit = SearchFilters(query="q", has_reactions=False, has_threads=False)
        omitted = SearchFilters(query="q")
        assert build_search_query(explicit) == build_search_query(omitted) == "q"

    def test_only_threads(self) -> None:
        assert build_search_query(SearchFilters(query="q", has_threads=True)) == "q has:thread"

    def test_only_to_date(self) -> None:
        assert build_search_query(SearchFilters(query="q", to_date="2024-06-30")) == (
            "q before:2024-06-30"
        )

    def test_operands_are_not_escaped(self) -> None:
        filters = SearchFilters(query='"exact phrase"', user_id="<@U1>", from_date="yesterday")
        assert build_search_query(filters) == '"exact phrase" after:yesterday from:<@U1>'

    def test_limit_and_cursor_do_not_affect_query(self) -> None:
        filters = SearchFilters(query="q", limit=5, cursor="abc")
        assert build_search_query(filters) == "q"
