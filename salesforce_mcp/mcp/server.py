"""MCP protocol wiring: tools/list and tools/call backed by the Dispatcher"""
import logging
from typing import List, Optional

import mcp.types as types
from anyio import to_thread
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from salesforce_mcp.config import get_config
from salesforce_mcp.mcp.dispatcher import Dispatcher, ResponseEnvelope
from salesforce_mcp.mcp.registry import ToolDescriptor

logger = logging.getLogger(__name__)


def to_mcp_tool(descriptor: ToolDescriptor) -> types.Tool:
    return types.Tool(
        name=descriptor.name,
        description=descriptor.description,
        inputSchema=descriptor.input_schema,
    )


def to_call_tool_result(envelope: ResponseEnvelope) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=block.text) for block in envelope.content],
        isError=envelope.is_error,
    )


def create_server(dispatcher: Optional[Dispatcher] = None, name: Optional[str] = None) -> Server:
    """Build the MCP server exposing every registered tool.

    Tool calls run the synchronous dispatcher in a worker thread so the
    event loop keeps serving the transport.
    """
    dispatcher = dispatcher or Dispatcher()
    mcp_server = Server(name or get_config().mcp_server_name)

    @mcp_server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return [to_mcp_tool(descriptor) for descriptor in dispatcher.registry.list_tools()]

    async def handle_call_tool(request: types.CallToolRequest) -> types.ServerResult:
        envelope = await to_thread.run_sync(
            dispatcher.invoke, request.params.name, request.params.arguments
        )
        return types.ServerResult(to_call_tool_result(envelope))

    # Registered directly rather than through @call_tool: the dispatcher does
    # its own argument validation and already produces isError results.
    mcp_server.request_handlers[types.CallToolRequest] = handle_call_tool
    return mcp_server


async def run_stdio(mcp_server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        await mcp_server.run(read_stream, write_stream, mcp_server.create_initialization_options())
