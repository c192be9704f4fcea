"""
MCP server exposing the storage tools over stdio.
"""

import asyncio
import logging
import signal
from typing import Any, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from s3_mcp import __version__
from s3_mcp.storage.tools import LLMStorageTools

logger = logging.getLogger(__name__)

SERVER_NAME = "s3-mcp-server"


class ToolCallError(Exception):
    """Raised to report an error result to the MCP client."""

    pass


class StorageMCPServer:
    """
    Registers LLMStorageTools with an MCP server.

    Tool results flagged as errors are raised as ToolCallError, which the
    MCP layer turns into a result with ``isError`` set and the error
    message as text content.

    Usage:
        mcp_server = StorageMCPServer(LLMStorageTools(resource))
        await mcp_server.run_stdio()
    """

    def __init__(self, tools: LLMStorageTools, name: str = SERVER_NAME):
        self.tools = tools
        self.server = Server(name, version=__version__)
        self.server.list_tools()(self.list_tools)
        self.server.call_tool()(self.call_tool)

    async def list_tools(self) -> list[types.Tool]:
        return [
            types.Tool(
                name=schema["name"],
                description=schema["description"],
                inputSchema=schema["inputSchema"],
            )
            for schema in self.tools.get_tool_schemas()
        ]

    async def call_tool(
        self, name: str, arguments: Optional[dict[str, Any]]
    ) -> list[types.TextContent]:
        logger.debug(f"Tool call: {name} {arguments}")
        result = await self.tools.execute_tool(name, arguments or {})
        if result.is_error:
            raise ToolCallError(result.text)
        return [
            types.TextContent(type="text", text=block["text"])
            for block in result.content
        ]

    async def run_stdio(self) -> None:
        """
        Serve over stdin/stdout until the client disconnects or a
        SIGINT/SIGTERM arrives.
        """
        shutdown_event = asyncio.Event()

        def signal_handler():
            logger.info("Shutting down server...")
            shutdown_event.set()

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, signal_handler)

        try:
            async with stdio_server() as (read_stream, write_stream):
                logger.info("S3 MCP server running on stdio transport")
                run_task = asyncio.create_task(
                    self.server.run(
                        read_stream,
                        write_stream,
                        self.server.create_initialization_options(),
                    )
                )
                stop_task = asyncio.create_task(shutdown_event.wait())

                done, pending = await asyncio.wait(
                    {run_task, stop_task}, return_when=asyncio.FIRST_COMPLETED
                )
                for task in pending:
                    task.cancel()
                await asyncio.gather(*pending, return_exceptions=True)

                if run_task in done:
                    run_task.result()
        finally:
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.remove_signal_handler(sig)
