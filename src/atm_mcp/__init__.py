"""
ATM MCP - an automated teller machine simulation exposed through MCP.
"""

__version__ = "0.1.0"
