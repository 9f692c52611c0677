"""
In-memory bank database of ATM accounts.

Provides account lookup and PIN authentication. Membership is fixed once
the database is constructed.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, Optional

from atm_mcp.models.account import Account

logger = logging.getLogger(__name__)


def default_accounts() -> list[Account]:
    """Seed accounts loaded when no explicit accounts are given."""
    return [
        Account(
            account_number=12345,
            pin=1111,
            available_balance=Decimal("1000.00"),
            total_balance=Decimal("1000.00"),
        ),
        Account(
            account_number=98765,
            pin=2222,
            available_balance=Decimal("500.00"),
            total_balance=Decimal("500.00"),
        ),
    ]


class BankDatabase:
    """
    Account store keyed by account number.
    """

    def __init__(self, accounts: Optional[Iterable[Account]] = None):
        """
        Initialize the account store.

        Args:
            accounts: Accounts to load.
                      If None, the default seed accounts are used.

        Raises:
            ValueError: If two accounts share an account number
        """
        if accounts is None:
            accounts = default_accounts()

        self._accounts: Dict[int, Account] = {}
        for account in accounts:
            if account.account_number in self._accounts:
                raise ValueError(
                    f"Duplicate account number: {account.account_number}"
                )
            self._accounts[account.account_number] = account

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, account_number: object) -> bool:
        return account_number in self._accounts

    def lookup(self, account_number: int) -> Optional[Account]:
        """Return the account for account_number, or None if unknown."""
        return self._accounts.get(account_number)

    def authenticate(self, account_number: int, pin: int) -> bool:
        """
        Check an account number and PIN pair.

        An unknown account and a wrong PIN both return False.

        Args:
            account_number: Account number entered by the user
            pin: PIN entered by the user

        Returns:
            True iff the account exists and the PIN matches
        """
        logger.debug(f"Authentication attempt for account {account_number}")
        account = self.lookup(account_number)
        if account is None:
            return False
        return account.validate_pin(pin)
