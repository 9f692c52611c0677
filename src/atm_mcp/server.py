"""
MCP server for the ATM simulation.

Exposes a single ATM session through the Model Context Protocol.
"""

import json
import logging
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from atm_mcp.core.atm import AtmSession
from atm_mcp.core.cash_dispenser import INITIAL_BILL_COUNT, CashDispenser
from atm_mcp.tools.tools import AtmTools, create_tool_schemas

logger = logging.getLogger(__name__)


class AtmServer:
    """MCP server for an ATM session."""

    def __init__(self, session: Optional[AtmSession] = None):
        """
        Initialize the MCP server.

        Args:
            session: Optional ATM session.
                    If None, a session with the seed accounts is created.
        """
        if session is None:
            session = AtmSession()

        self.session = session
        self.tools = AtmTools(self.session)
        self.server = Server("atm-mcp")

        # Register handlers
        self._register_handlers()

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """List available tools."""
            return self.list_tools()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            """Handle tool calls."""
            return self.call_tool(name, arguments)

    def list_tools(self) -> list[Tool]:
        """Build the Tool list from the schema definitions."""
        return [
            Tool(
                name=schema["name"],
                description=schema["description"],
                inputSchema=schema["inputSchema"],
            )
            for schema in create_tool_schemas()
        ]

    def call_tool(self, name: str, arguments: Optional[dict[str, Any]]) -> list[TextContent]:
        """Route a tool call and format its result as JSON text."""
        arguments = arguments or {}
        try:
            if name == "get_screen":
                result = self.tools.get_screen()
            elif name == "submit_text":
                result = self.tools.submit_text(**arguments)
            elif name == "select_action":
                result = self.tools.select_action(**arguments)
            elif name == "tick":
                result = self.tools.tick(**arguments)
            else:
                return [
                    TextContent(
                        type="text",
                        text=f"Unknown tool: {name}",
                    )
                ]

            return [
                TextContent(
                    type="text",
                    text=json.dumps(result, indent=2),
                )
            ]

        except ValueError as e:
            # Handle adapter input errors (e.g., unknown action id)
            return [TextContent(type="text", text=f"Error: {str(e)}")]
        except Exception as e:
            logger.exception(f"Error executing tool {name}")
            return [
                TextContent(
                    type="text",
                    text=f"Error executing tool: {str(e)}",
                )
            ]

    async def run(self) -> None:  # pragma: no cover
        """Run the MCP server using stdio transport."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


async def run_server(bill_count: int = INITIAL_BILL_COUNT) -> None:  # pragma: no cover
    """
    Run the ATM MCP server.

    Args:
        bill_count: Bills loaded into the cash dispenser at startup
    """
    session = AtmSession(cash_dispenser=CashDispenser(bill_count))
    server = AtmServer(session)
    await server.run()
