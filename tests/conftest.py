"""
Pytest configuration and fixtures for atm-mcp tests.
"""

from decimal import Decimal
from typing import List

import pytest

from atm_mcp.core.atm import AtmSession
from atm_mcp.core.bank_database import BankDatabase
from atm_mcp.core.cash_dispenser import CashDispenser
from atm_mcp.core.deposit_slot import DepositSlot
from atm_mcp.models.account import Account


class RejectingDepositSlot(DepositSlot):
    """Deposit slot that never receives an envelope."""

    def accept(self) -> bool:
        return False


def make_accounts() -> List[Account]:
    """Fresh copies of the seed accounts."""
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


def _login(session: AtmSession, account_number: str = "12345", pin: str = "1111") -> None:
    """Drive a session through both login steps."""
    session.submit_text(account_number)
    session.submit_text(pin)


@pytest.fixture
def bank_database() -> BankDatabase:
    """Account store with the seed accounts."""
    return BankDatabase(make_accounts())


@pytest.fixture
def cash_dispenser() -> CashDispenser:
    """Fully loaded cash dispenser."""
    return CashDispenser()


@pytest.fixture
def session(bank_database: BankDatabase, cash_dispenser: CashDispenser) -> AtmSession:
    """Logged-out session."""
    return AtmSession(bank_database=bank_database, cash_dispenser=cash_dispenser)


@pytest.fixture
def logged_in_session(session: AtmSession) -> AtmSession:
    """Session authenticated as account 12345."""
    _login(session)
    return session


@pytest.fixture
def account(bank_database: BankDatabase) -> Account:
    """Account 12345 from the store."""
    return bank_database.lookup(12345)


@pytest.fixture
def login():
    """Helper that logs a session in with the given credentials."""
    return _login


@pytest.fixture
def rejecting_session(bank_database: BankDatabase) -> AtmSession:
    """Authenticated session whose deposit slot never receives an envelope."""
    session = AtmSession(
        bank_database=bank_database,
        deposit_slot=RejectingDepositSlot(),
    )
    _login(session)
    return session
