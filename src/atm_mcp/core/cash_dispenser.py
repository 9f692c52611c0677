"""
Cash dispenser holding the ATM's bills.
"""

import logging
from decimal import Decimal

from atm_mcp.core.exceptions import InsufficientCashError

logger = logging.getLogger(__name__)

# Value of every bill in the dispenser
BILL_DENOMINATION = 20

# Bills loaded at startup (10,000 currency units)
INITIAL_BILL_COUNT = 500


class CashDispenser:
    """Tracks the number of bills on hand."""

    def __init__(self, bill_count: int = INITIAL_BILL_COUNT):
        """
        Initialize the dispenser.

        Args:
            bill_count: Bills loaded into the machine

        Raises:
            ValueError: If bill_count is negative
        """
        if bill_count < 0:
            raise ValueError(f"Bill count must be non-negative, got {bill_count}")
        self._bill_count = bill_count

    @property
    def bill_count(self) -> int:
        return self._bill_count

    @property
    def total_cash(self) -> Decimal:
        """Value of all bills on hand."""
        return Decimal(self._bill_count * BILL_DENOMINATION)

    @staticmethod
    def bills_required(amount: Decimal) -> int:
        """
        Number of bills needed for amount.

        Fractional bill counts are truncated toward zero, so 25 needs one
        bill. Callers that require exact multiples must check separately.
        """
        return int(amount / BILL_DENOMINATION)

    def is_sufficient(self, amount: Decimal) -> bool:
        """Check whether enough bills are on hand for amount."""
        return self._bill_count >= self.bills_required(amount)

    def dispense(self, amount: Decimal) -> int:
        """
        Remove the bills for amount from the dispenser.

        Args:
            amount: Amount to dispense

        Returns:
            Number of bills dispensed

        Raises:
            InsufficientCashError: If the dispenser cannot cover amount.
                                   Nothing is removed in that case.
        """
        bills = self.bills_required(amount)
        if bills > self._bill_count:
            raise InsufficientCashError(
                "Insufficient cash available in the ATM. "
                "Please choose a smaller amount."
            )

        self._bill_count -= bills
        logger.debug(f"Dispensed {bills} bills, {self._bill_count} remaining")
        return bills
