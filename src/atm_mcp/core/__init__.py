"""
Core functionality for ATM MCP.
"""

from atm_mcp.core.atm import AUTO_RETURN_DELAY, AtmSession
from atm_mcp.core.bank_database import BankDatabase
from atm_mcp.core.cash_dispenser import BILL_DENOMINATION, CashDispenser
from atm_mcp.core.deposit_slot import DepositSlot
from atm_mcp.core.exceptions import (
    AtmError,
    AuthenticationError,
    InsufficientCashError,
    InsufficientFundsError,
    ParseError,
    SessionInvariantError,
    ValidationError,
)

__all__ = [
    "AtmSession",
    "AUTO_RETURN_DELAY",
    "BankDatabase",
    "CashDispenser",
    "BILL_DENOMINATION",
    "DepositSlot",
    "AtmError",
    "AuthenticationError",
    "InsufficientCashError",
    "InsufficientFundsError",
    "ParseError",
    "SessionInvariantError",
    "ValidationError",
]
