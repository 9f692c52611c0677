"""
MCP tool definitions for the ATM session.

Exposes the session's input events through the Model Context Protocol.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from atm_mcp.core.atm import AtmSession
from atm_mcp.models.screen import Action


class AtmTools:
    """Collection of MCP tools driving a single ATM session."""

    def __init__(self, session: AtmSession):
        """
        Initialize tools with an ATM session.

        Args:
            session: AtmSession instance
        """
        self.session = session
        self._last_seen = datetime.now()

    def _advance_clock(self) -> None:
        """
        Convert wall-clock seconds since the last call into session ticks.

        Only whole seconds are consumed; the remainder carries over to the
        next call.
        """
        now = datetime.now()
        elapsed = int((now - self._last_seen).total_seconds())
        if elapsed > 0:
            self.session.tick(elapsed)
            self._last_seen += timedelta(seconds=elapsed)

    def get_screen(self) -> Dict[str, Any]:
        """
        Get the current screen without sending any input.

        Returns:
            Dict with the current directive
        """
        self._advance_clock()
        return self.session.directive().model_dump(mode="json")

    def submit_text(self, text: str) -> Dict[str, Any]:
        """
        Submit text from the input field.

        Args:
            text: Account number, PIN or amount, depending on the screen

        Returns:
            Dict with the resulting directive
        """
        self._advance_clock()
        return self.session.submit_text(text).model_dump(mode="json")

    def select_action(self, action: str, text: Optional[str] = None) -> Dict[str, Any]:
        """
        Press a button.

        Args:
            action: Action id (login, balance, withdraw_20, ...)
            text: Optional content of the input field

        Returns:
            Dict with the resulting directive

        Raises:
            ValueError: If action is not a known action id
        """
        self._advance_clock()
        directive = self.session.select_action(action, text or "")
        return directive.model_dump(mode="json")

    def tick(self, units: int = 1) -> Dict[str, Any]:
        """
        Advance the session clock explicitly.

        Args:
            units: Time units elapsed (default: 1)

        Returns:
            Dict with the resulting directive

        Raises:
            ValueError: If units is not positive
        """
        self._advance_clock()
        return self.session.tick(units).model_dump(mode="json")


def create_tool_schemas() -> List[Dict[str, Any]]:
    """
    Create MCP tool schemas for all tools.

    Returns:
        List of tool schema definitions
    """
    return [
        {
            "name": "get_screen",
            "description": (
                "Get the current ATM screen: state, prompt text, available "
                "actions and whether typed input should be masked."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {},
            },
        },
        {
            "name": "submit_text",
            "description": (
                "Submit text from the ATM input field. Used for the account "
                "number, the PIN, a custom withdrawal amount or a deposit amount."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "text": {
                        "type": "string",
                        "description": "Text typed into the input field",
                    },
                },
                "required": ["text"],
            },
        },
        {
            "name": "select_action",
            "description": (
                "Press an ATM button. Only the actions listed as available on "
                "the current screen have an effect."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "action": {
                        "type": "string",
                        "description": "Action id",
                        "enum": [action.value for action in Action],
                    },
                    "text": {
                        "type": "string",
                        "description": (
                            "Content of the input field when the button is "
                            "pressed (login, confirm_deposit)"
                        ),
                    },
                },
                "required": ["action"],
            },
        },
        {
            "name": "tick",
            "description": (
                "Advance the ATM clock. A completed transaction returns to the "
                "main menu after 3 units unless another action comes first."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "units": {
                        "type": "integer",
                        "description": "Time units elapsed (default: 1)",
                        "minimum": 1,
                        "default": 1,
                    },
                },
            },
        },
    ]
