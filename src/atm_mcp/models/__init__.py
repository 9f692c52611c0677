"""
Pydantic models and enumerations for the ATM session.
"""

from atm_mcp.models.account import Account
from atm_mcp.models.directive import Directive
from atm_mcp.models.screen import Action, LoginStep, ScreenState

__all__ = ["Account", "Directive", "Action", "LoginStep", "ScreenState"]
