"""
End-to-end tests for the MCP server.

Drives a full ATM session through the server's tool routing.
"""

import json
from decimal import Decimal

import pytest

from atm_mcp.core.atm import AtmSession
from atm_mcp.core.cash_dispenser import CashDispenser
from atm_mcp.server import AtmServer


def call(server: AtmServer, name: str, **arguments) -> dict:
    """Call a tool and decode its JSON result."""
    result = server.call_tool(name, arguments)
    assert len(result) == 1
    return json.loads(result[0].text)


@pytest.fixture
def server(session):
    """Create AtmServer around a fresh session."""
    return AtmServer(session)


@pytest.mark.e2e
def test_server_initialization(server):
    """Test that server can be initialized."""
    assert server.session is not None
    assert server.tools is not None
    assert server.server is not None


@pytest.mark.e2e
def test_full_session(server, session, cash_dispenser):
    """Test login, withdrawal, deposit, balance and exit."""
    assert call(server, "get_screen")["screen_state"] == "LOGIN"

    call(server, "submit_text", text="12345")
    result = call(server, "submit_text", text="1111")
    assert result["screen_state"] == "MAIN_MENU"

    call(server, "select_action", action="withdraw")
    result = call(server, "select_action", action="withdraw_200")
    assert "Your cash of $200.00 has been dispensed." in result["prompt_text"]
    assert session.account.available_balance == Decimal("800.00")
    assert cash_dispenser.bill_count == 490

    call(server, "select_action", action="deposit")
    call(server, "submit_text", text="50.00")
    assert session.account.total_balance == Decimal("850.00")

    result = call(server, "select_action", action="balance")
    assert result["screen_state"] == "VIEWING_BALANCE"
    assert result["prompt_text"].count("850.00") == 2

    result = call(server, "select_action", action="exit")
    assert result["screen_state"] == "LOGIN"
    assert result["prompt_text"].startswith("Thank you for using the ATM.")
    assert session.account is None


@pytest.mark.e2e
def test_failed_login_through_server(server):
    """Test that a wrong PIN returns to account number entry."""
    call(server, "submit_text", text="98765")
    result = call(server, "submit_text", text="1111")

    assert result["screen_state"] == "LOGIN"
    assert result["login_step"] == "AWAITING_ACCOUNT_NUMBER"
    assert result["prompt_text"].startswith("Invalid account number or PIN.")


@pytest.mark.e2e
def test_machine_out_of_cash(bank_database):
    """Test a withdrawal against an empty machine."""
    server = AtmServer(
        AtmSession(bank_database=bank_database, cash_dispenser=CashDispenser(0))
    )
    call(server, "select_action", action="login", text="12345")
    call(server, "select_action", action="login", text="1111")
    call(server, "select_action", action="withdraw")
    result = call(server, "select_action", action="withdraw_20")

    assert result["screen_state"] == "WITHDRAWING"
    assert result["prompt_text"].startswith("Insufficient cash available in the ATM.")
    assert server.session.account.available_balance == Decimal("1000.00")


@pytest.mark.e2e
def test_auto_return_through_tick_tool(server):
    """Test that the tick tool returns to the main menu."""
    call(server, "submit_text", text="12345")
    call(server, "submit_text", text="1111")
    call(server, "select_action", action="deposit")
    call(server, "select_action", action="confirm_deposit", text="20")

    assert call(server, "tick", units=2)["screen_state"] == "DEPOSITING"
    assert call(server, "tick")["screen_state"] == "MAIN_MENU"


@pytest.mark.e2e
@pytest.mark.asyncio
async def test_server_handlers_registered(server):
    """Test that the MCP protocol handlers are registered."""
    assert hasattr(server.server, "list_tools")
    assert hasattr(server.server, "call_tool")
