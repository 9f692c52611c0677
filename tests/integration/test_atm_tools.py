"""
Integration tests for MCP tools driving an ATM session.
"""

from datetime import timedelta

import pytest
from freezegun import freeze_time

from atm_mcp.tools.tools import AtmTools, create_tool_schemas


@pytest.fixture
def tools(session):
    """Create AtmTools around a fresh session."""
    return AtmTools(session)


@pytest.mark.integration
def test_get_screen(tools):
    """Test the initial screen returned by get_screen."""
    result = tools.get_screen()

    assert result["screen_state"] == "LOGIN"
    assert result["login_step"] == "AWAITING_ACCOUNT_NUMBER"
    assert result["available_actions"] == ["login"]
    assert result["mask_input"] is False
    assert result["auto_return_pending"] is False


@pytest.mark.integration
def test_login_through_tools(tools):
    """Test both login steps through submit_text."""
    result = tools.submit_text("12345")
    assert result["mask_input"] is True

    result = tools.submit_text("1111")
    assert result["screen_state"] == "MAIN_MENU"
    assert result["login_step"] is None
    assert sorted(result["available_actions"]) == [
        "balance",
        "deposit",
        "exit",
        "withdraw",
    ]


@pytest.mark.integration
def test_select_action_with_text(tools, session):
    """Test that select_action forwards the input field text."""
    tools.select_action("login", "12345")
    tools.select_action("login", "1111")
    tools.select_action("deposit")
    result = tools.select_action("confirm_deposit", text="75.50")

    assert "Your deposit of $75.50" in result["prompt_text"]
    assert str(session.account.available_balance) == "1075.50"


@pytest.mark.integration
def test_select_action_unknown(tools):
    """Test that unknown action ids raise ValueError."""
    with pytest.raises(ValueError):
        tools.select_action("transfer")


@pytest.mark.integration
def test_explicit_tick(tools):
    """Test that the tick tool fires the auto-return."""
    tools.submit_text("12345")
    tools.submit_text("1111")
    tools.select_action("withdraw")
    tools.select_action("withdraw_60")

    result = tools.tick(units=3)
    assert result["screen_state"] == "MAIN_MENU"


@pytest.mark.integration
def test_wall_clock_drives_auto_return(session):
    """Test that elapsed seconds between calls become ticks."""
    with freeze_time("2026-01-15 12:00:00") as frozen:
        tools = AtmTools(session)
        tools.submit_text("12345")
        tools.submit_text("1111")
        tools.select_action("withdraw")
        result = tools.select_action("withdraw_40")
        assert result["auto_return_pending"] is True

        frozen.tick(timedelta(seconds=2))
        assert tools.get_screen()["screen_state"] == "WITHDRAWING"

        frozen.tick(timedelta(seconds=1))
        result = tools.get_screen()
        assert result["screen_state"] == "MAIN_MENU"
        assert result["auto_return_pending"] is False


@pytest.mark.integration
def test_partial_seconds_carry_over(session):
    """Test that fractions of a second accumulate across calls."""
    with freeze_time("2026-01-15 12:00:00") as frozen:
        tools = AtmTools(session)
        tools.submit_text("12345")
        tools.submit_text("1111")
        tools.select_action("deposit")
        tools.submit_text("10")

        for _ in range(5):
            frozen.tick(timedelta(milliseconds=500))
            assert tools.get_screen()["screen_state"] == "DEPOSITING"

        frozen.tick(timedelta(milliseconds=500))
        assert tools.get_screen()["screen_state"] == "MAIN_MENU"


@pytest.mark.integration
def test_late_action_follows_auto_return(session):
    """Test that an action after the delay is applied on the main menu."""
    with freeze_time("2026-01-15 12:00:00") as frozen:
        tools = AtmTools(session)
        tools.submit_text("12345")
        tools.submit_text("1111")
        tools.select_action("withdraw")
        tools.select_action("withdraw_20")

        frozen.tick(timedelta(seconds=5))
        result = tools.select_action("back")

        assert result["screen_state"] == "MAIN_MENU"


@pytest.mark.integration
def test_quick_action_cancels_auto_return(session):
    """Test that acting within the delay keeps the chosen screen."""
    with freeze_time("2026-01-15 12:00:00") as frozen:
        tools = AtmTools(session)
        tools.submit_text("12345")
        tools.submit_text("1111")
        tools.select_action("withdraw")
        tools.select_action("withdraw_20")

        frozen.tick(timedelta(seconds=1))
        tools.select_action("balance")

        frozen.tick(timedelta(seconds=10))
        assert tools.get_screen()["screen_state"] == "VIEWING_BALANCE"


@pytest.mark.integration
def test_tool_schemas():
    """Test the tool schema definitions."""
    schemas = {schema["name"]: schema for schema in create_tool_schemas()}

    assert set(schemas) == {"get_screen", "submit_text", "select_action", "tick"}
    assert schemas["submit_text"]["inputSchema"]["required"] == ["text"]
    assert schemas["select_action"]["inputSchema"]["required"] == ["action"]

    action_ids = schemas["select_action"]["inputSchema"]["properties"]["action"]["enum"]
    assert "withdraw_200" in action_ids
    assert "confirm_deposit" in action_ids
    assert len(action_ids) == len(set(action_ids))
