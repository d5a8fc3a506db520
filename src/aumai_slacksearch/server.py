"""Tool registry and MCP server wiring.

The registry maps tool names to handlers explicitly; the MCP server only
translates between protocol types and :class:`~aumai_slacksearch.tools.ToolResponse`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from aumai_slacksearch import __version__
from aumai_slacksearch.config import Settings
from aumai_slacksearch.core import SlackSearchClient
from aumai_slacksearch.gateway import SlackSearchGateway
from aumai_slacksearch.tools import (
    SearchInChannelHandler,
    SearchMessagesHandler,
    ToolDefinition,
    ToolHandler,
    ToolResponse,
)

__all__ = [
    "SERVER_NAME",
    "ToolCallError",
    "ToolRegistry",
    "build_registry",
    "create_server",
    "run_stdio",
]

logger = logging.getLogger(__name__)

SERVER_NAME = "slack-mcp"


class ToolCallError(Exception):
    """Carries an error :class:`ToolResponse` text to the MCP SDK.

    The SDK turns exceptions raised from a tool into a result with
    ``isError`` set and the exception message as its text.
    """


class ToolRegistry:
    """Explicit tool name -> handler routing. Unknown tools never raise."""

    def __init__(self) -> None:
        self._tools: dict[str, tuple[ToolDefinition, ToolHandler]] = {}

    def register(self, definition: ToolDefinition, handler: ToolHandler) -> None:
        """Add or replace the tool called ``definition.name``."""
        self._tools[definition.name] = (definition, handler)

    def list_tools(self) -> list[ToolDefinition]:
        """Return every registered tool contract in registration order."""
        return [definition for definition, _ in self._tools.values()]

    async def call(self, name: str, arguments: Mapping[str, Any] | None) -> ToolResponse:
        """Dispatch one invocation to the handler registered under *name*."""
        entry = self._tools.get(name)
        if entry is None:
            logger.warning("Unknown tool %s", name, extra={"tool_name": name})
            return ToolResponse.from_message("unknown_tool", f"Unknown tool: {name}")
        _, handler = entry
        logger.debug("Calling tool %s", name, extra={"tool_name": name})
        return await handler(arguments)


def build_registry(client: SlackSearchClient) -> ToolRegistry:
    """Register both search tools against *client*."""
    registry = ToolRegistry()
    for handler in (SearchMessagesHandler(client), SearchInChannelHandler(client)):
        registry.register(handler.definition, handler)
    return registry


def create_server(registry: ToolRegistry) -> Server:
    """Build a low-level MCP server exposing the tools in *registry*."""
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=definition.name,
                description=definition.description,
                inputSchema=definition.input_schema,
            )
            for definition in registry.list_tools()
        ]

    # Arguments are validated by the tool handlers, which report every
    # violating field; the SDK's schema check would stop at the first one.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        response = await registry.call(name, arguments)
        if response.is_error:
            raise ToolCallError("\n".join(block.text for block in response.content))
        return [types.TextContent(type="text", text=block.text) for block in response.content]

    return server


async def run_stdio(settings: Settings) -> None:
    """Serve the search tools over stdio until the client disconnects."""
    async with SlackSearchGateway(
        settings.slack_bot_token,
        base_url=settings.slack_api_base_url,
        timeout=settings.slack_timeout_seconds,
    ) as gateway:
        server = create_server(build_registry(SlackSearchClient(gateway)))
        logger.info("Starting %s %s on stdio", SERVER_NAME, __version__)
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
