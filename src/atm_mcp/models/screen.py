"""
Screen states, login steps and user actions of the ATM dialogue.
"""

from enum import Enum


class ScreenState(str, Enum):
    """Top-level screen the session is on."""

    LOGIN = "LOGIN"
    MAIN_MENU = "MAIN_MENU"
    VIEWING_BALANCE = "VIEWING_BALANCE"
    WITHDRAWING = "WITHDRAWING"
    DEPOSITING = "DEPOSITING"


class LoginStep(str, Enum):
    """Sub-step of the LOGIN screen."""

    AWAITING_ACCOUNT_NUMBER = "AWAITING_ACCOUNT_NUMBER"
    AWAITING_PIN = "AWAITING_PIN"


class Action(str, Enum):
    """Buttons the UI adapter can report as pressed."""

    LOGIN = "login"
    BALANCE = "balance"
    WITHDRAW = "withdraw"
    DEPOSIT = "deposit"
    EXIT = "exit"
    BACK = "back"

    WITHDRAW_20 = "withdraw_20"
    WITHDRAW_40 = "withdraw_40"
    WITHDRAW_60 = "withdraw_60"
    WITHDRAW_100 = "withdraw_100"
    WITHDRAW_200 = "withdraw_200"
    CUSTOM_AMOUNT = "custom_amount"

    CONFIRM_DEPOSIT = "confirm_deposit"
    CANCEL_DEPOSIT = "cancel_deposit"


# Actions that open a transaction screen from the main menu
NAVIGATION_ACTIONS = frozenset({Action.BALANCE, Action.WITHDRAW, Action.DEPOSIT})

# Preset withdrawal buttons and the amount each one dispenses
WITHDRAWAL_PRESETS = {
    Action.WITHDRAW_20: 20,
    Action.WITHDRAW_40: 40,
    Action.WITHDRAW_60: 60,
    Action.WITHDRAW_100: 100,
    Action.WITHDRAW_200: 200,
}
