"""
Custom exceptions for the ATM session.

Every exception here is recovered inside the state machine: its message is
shown to the user and the session moves to a well-defined next state.
"""


class AtmError(Exception):
    """Base exception for ATM session errors."""
    pass


class ParseError(AtmError):
    """Raised when non-numeric input is given where a number is required."""
    pass


class AuthenticationError(AtmError):
    """Raised when the account number or PIN is wrong (indistinguishable)."""
    pass


class ValidationError(AtmError):
    """Raised when an amount fails the positivity or denomination rules."""
    pass


class InsufficientFundsError(AtmError):
    """Raised when the account cannot cover a withdrawal."""
    pass


class InsufficientCashError(AtmError):
    """Raised when the machine does not hold enough bills."""
    pass


class SessionInvariantError(AtmError):
    """Raised when an account operation is attempted with no bound account."""
    pass
