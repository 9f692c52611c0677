"""
Utility functions for ATM MCP.
"""

from atm_mcp.utils.currency import format_currency, parse_amount, parse_integer

__all__ = [
    "parse_amount",
    "parse_integer",
    "format_currency",
]
