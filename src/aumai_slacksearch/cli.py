"""CLI entry point for aumai-slacksearch."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import click
from pydantic import ValidationError

from aumai_slacksearch.config import Settings, get_settings
from aumai_slacksearch.core import SlackSearchClient
from aumai_slacksearch.gateway import SlackSearchGateway
from aumai_slacksearch.observability import setup_logging
from aumai_slacksearch.server import build_registry, run_stdio
from aumai_slacksearch.tools import SEARCH_IN_CHANNEL_TOOL, SEARCH_MESSAGES_TOOL, ToolResponse


def _load_settings() -> Settings:
    """Load settings, turning configuration errors into a clean CLI failure."""
    try:
        return get_settings()
    except ValidationError as exc:
        messages = "; ".join(str(error["msg"]) for error in exc.errors())
        raise click.ClickException(f"Invalid configuration: {messages}") from exc


async def _call_tool(settings: Settings, name: str, arguments: dict[str, Any]) -> ToolResponse:
    async with SlackSearchGateway(
        settings.slack_bot_token,
        base_url=settings.slack_api_base_url,
        timeout=settings.slack_timeout_seconds,
    ) as gateway:
        registry = build_registry(SlackSearchClient(gateway))
        return await registry.call(name, arguments)


@click.group()
@click.version_option(package_name="aumai-slacksearch")
def main() -> None:
    """AumAI Slacksearch: Slack message search as MCP tools."""


@main.command("serve")
def serve_cmd() -> None:
    """Run the MCP server over stdio."""
    settings = _load_settings()
    setup_logging(settings.log_level, settings.log_format)
    asyncio.run(run_stdio(settings))


@main.command("tools")
@click.option(
    "--output-format",
    default="text",
    type=click.Choice(["text", "json"]),
    show_default=True,
)
def tools_cmd(output_format: str) -> None:
    """List the tool contracts advertised to MCP clients."""
    definitions = [SEARCH_MESSAGES_TOOL, SEARCH_IN_CHANNEL_TOOL]

    if output_format == "json":
        click.echo(json.dumps([d.model_dump() for d in definitions], indent=2))
        return

    for definition in definitions:
        required = ", ".join(definition.input_schema.get("required", []))
        click.echo(f"  {definition.name} (required: {required})\n      {definition.description}")


@main.command("search")
@click.option("--query", required=True, help="Free-text search query.")
@click.option("--channel-id", default=None, help="Restrict the search to this channel.")
@click.option("--limit", default=None, type=int, help="Results per page (1-100, default 20).")
@click.option("--cursor", default=None, help="Cursor returned by a previous search.")
@click.option("--from-date", default=None, help="Only messages after this date (YYYY-MM-DD).")
@click.option("--to-date", default=None, help="Only messages before this date (YYYY-MM-DD).")
@click.option("--user-id", default=None, help="Only messages from this user ID.")
@click.option("--has-reactions/--no-has-reactions", default=None, help="Only messages with reactions.")
@click.option("--has-threads/--no-has-threads", default=None, help="Only messages with threads.")
def search_cmd(
    query: str,
    channel_id: str | None,
    limit: int | None,
    cursor: str | None,
    from_date: str | None,
    to_date: str | None,
    user_id: str | None,
    has_reactions: bool | None,
    has_threads: bool | None,
) -> None:
    """Run a single search and print the tool payload."""
    settings = _load_settings()
    setup_logging(settings.log_level, settings.log_format)

    options = {
        "query": query,
        "channel_id": channel_id,
        "limit": limit,
        "cursor": cursor,
        "from_date": from_date,
        "to_date": to_date,
        "user_id": user_id,
        "has_reactions": has_reactions,
        "has_threads": has_threads,
    }
    arguments = {key: value for key, value in options.items() if value is not None}
    tool = SEARCH_IN_CHANNEL_TOOL if channel_id is not None else SEARCH_MESSAGES_TOOL

    response = asyncio.run(_call_tool(settings, tool.name, arguments))
    for block in response.content:
        click.echo(block.text, err=response.is_error)
    if response.is_error:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
