"""
MCP tools for ATM MCP.
"""

from atm_mcp.tools.tools import AtmTools, create_tool_schemas

__all__ = ["AtmTools", "create_tool_schemas"]
