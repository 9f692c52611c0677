"""
ATM session state machine.

Drives the login dialogue and the balance, withdrawal and deposit flows.
The UI adapter feeds it one event at a time and renders the Directive
returned for each event.
"""

import logging
from decimal import Decimal
from typing import Any, Callable, Optional, Union

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
from atm_mcp.models.account import Account
from atm_mcp.models.directive import Directive
from atm_mcp.models.screen import (
    NAVIGATION_ACTIONS,
    WITHDRAWAL_PRESETS,
    Action,
    LoginStep,
    ScreenState,
)
from atm_mcp.utils.currency import (
    MAX_AMOUNT,
    format_currency,
    is_within_limit,
    parse_amount,
    parse_integer,
)

logger = logging.getLogger(__name__)

# Time units a completed transaction stays on screen before the main menu
AUTO_RETURN_DELAY = 3

# Messages
MSG_EMPTY_INPUT = "Input cannot be empty. Please enter a value."
MSG_NUMBERS_ONLY = "Invalid input. Please enter numbers only."
MSG_INVALID_CREDENTIALS = "Invalid account number or PIN. Please try again."
MSG_AUTHENTICATED = "Authentication successful!"
MSG_NOT_LOGGED_IN = "Error: Not logged in. Please log in."
MSG_INVALID_AMOUNT = "Invalid amount. Please enter a number."
MSG_AMOUNT_TOO_LARGE = (
    f"Amounts may not exceed ${format_currency(MAX_AMOUNT)}."
)
MSG_WITHDRAWAL_MULTIPLE = (
    f"Withdrawal amounts must be positive multiples of ${BILL_DENOMINATION}."
)
MSG_INSUFFICIENT_FUNDS = (
    "Insufficient funds in your account. Please choose a smaller amount."
)
MSG_INSUFFICIENT_CASH = (
    "Insufficient cash available in the ATM. Please choose a smaller amount."
)
MSG_DEPOSIT_NOT_POSITIVE = "Deposit amount must be positive."
MSG_NO_ENVELOPE = (
    "You did not insert an envelope, so your transaction has been canceled."
)
MSG_GOODBYE = "Thank you for using the ATM. Goodbye!"

_SCREEN_ACTIONS = {
    ScreenState.LOGIN: frozenset({Action.LOGIN}),
    ScreenState.MAIN_MENU: frozenset(
        {Action.BALANCE, Action.WITHDRAW, Action.DEPOSIT, Action.EXIT}
    ),
    ScreenState.VIEWING_BALANCE: frozenset({Action.BACK, Action.EXIT}),
    ScreenState.WITHDRAWING: frozenset(
        set(WITHDRAWAL_PRESETS) | {Action.CUSTOM_AMOUNT, Action.BACK, Action.EXIT}
    ),
    ScreenState.DEPOSITING: frozenset(
        {Action.CONFIRM_DEPOSIT, Action.CANCEL_DEPOSIT, Action.BACK, Action.EXIT}
    ),
}

_NAVIGATION_TARGETS = {
    Action.BALANCE: ScreenState.VIEWING_BALANCE,
    Action.WITHDRAW: ScreenState.WITHDRAWING,
    Action.DEPOSIT: ScreenState.DEPOSITING,
}


class AutoReturn:
    """Deferred return to the main menu, counted down in time units."""

    def __init__(self, delay: int):
        self.remaining = delay
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def advance(self, units: int) -> bool:
        """Count down by units. Returns True once the task is due."""
        if self.cancelled:
            return False
        self.remaining -= units
        return self.remaining <= 0


class AtmSession:
    """
    Single-user ATM session.

    Owns the bound account, the current screen and login step, and the
    pending auto-return task. Errors raised while handling an event are
    recovered here and never reach the caller.
    """

    def __init__(
        self,
        bank_database: Optional[BankDatabase] = None,
        cash_dispenser: Optional[CashDispenser] = None,
        deposit_slot: Optional[DepositSlot] = None,
        auto_return_delay: int = AUTO_RETURN_DELAY,
    ):
        """
        Initialize the session in the logged-out state.

        Args:
            bank_database: Account store. If None, the seed accounts are used.
            cash_dispenser: Cash reserve. If None, a fully loaded one is used.
            deposit_slot: Deposit acceptor. If None, every deposit is accepted.
            auto_return_delay: Time units before a completed transaction
                               returns to the main menu
        """
        if bank_database is None:
            bank_database = BankDatabase()
        if cash_dispenser is None:
            cash_dispenser = CashDispenser()
        if deposit_slot is None:
            deposit_slot = DepositSlot()

        self.bank_database = bank_database
        self.cash_dispenser = cash_dispenser
        self.deposit_slot = deposit_slot
        self.auto_return_delay = auto_return_delay

        self.account: Optional[Account] = None
        self.screen_state = ScreenState.LOGIN
        self.login_step = LoginStep.AWAITING_ACCOUNT_NUMBER
        self.pending_account_number: Optional[int] = None
        self.notice: Optional[str] = None
        self.last_error: Optional[AtmError] = None

        self._custom_amount = False
        self._auto_return: Optional[AutoReturn] = None

    # ------------------------------------------------------------------
    # Inbound events
    # ------------------------------------------------------------------

    def submit_text(self, text: str) -> Directive:
        """Handle text submitted from the input field."""
        self._cancel_auto_return()
        self._dispatch(self._handle_text, text)
        return self.directive()

    def select_action(self, action: Union[Action, str], text: str = "") -> Directive:
        """
        Handle a button press.

        Args:
            action: Action or its string id
            text: Content of the input field when the button was pressed

        Raises:
            ValueError: If action is not a known action id
        """
        action = Action(action)
        self._cancel_auto_return()
        self._dispatch(self._handle_action, action, text)
        return self.directive()

    def tick(self, units: int = 1) -> Directive:
        """
        Notify the session that units of time have elapsed.

        Raises:
            ValueError: If units is not positive
        """
        if units < 1:
            raise ValueError(f"Tick units must be positive, got {units}")

        if self._auto_return is not None and self._auto_return.advance(units):
            self._auto_return = None
            logger.debug("Auto-return to main menu")
            self._enter(ScreenState.MAIN_MENU)

        return self.directive()

    @property
    def auto_return_pending(self) -> bool:
        return self._auto_return is not None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def directive(self) -> Directive:
        """Describe what the UI adapter should currently display."""
        state = self.screen_state
        prompt = self._screen_prompt()
        if self.notice:
            prompt = f"{self.notice}\n\n{prompt}"

        actions = set(_SCREEN_ACTIONS[state])
        if self._auto_return is not None:
            actions |= NAVIGATION_ACTIONS

        in_login = state is ScreenState.LOGIN
        return Directive(
            screen_state=state,
            prompt_text=prompt,
            available_actions=sorted(actions, key=lambda a: a.value),
            mask_input=in_login and self.login_step is LoginStep.AWAITING_PIN,
            login_step=self.login_step if in_login else None,
            auto_return_pending=self._auto_return is not None,
        )

    def _screen_prompt(self) -> str:
        state = self.screen_state
        if state is ScreenState.LOGIN:
            if self.login_step is LoginStep.AWAITING_ACCOUNT_NUMBER:
                return "Welcome!\nPlease enter your account number:"
            return f"Account: {self.pending_account_number}\nPlease enter your PIN:"
        elif state is ScreenState.MAIN_MENU:
            return (
                "ATM Main Menu:\n"
                "1 - View my balance\n"
                "2 - Withdraw cash\n"
                "3 - Deposit funds\n"
                "4 - Exit"
            )
        elif state is ScreenState.VIEWING_BALANCE:
            account = self._require_account()
            return (
                "Balance Information:\n"
                f"- Available balance: ${format_currency(account.available_balance)}\n"
                f"- Total balance:     ${format_currency(account.total_balance)}"
            )
        elif state is ScreenState.WITHDRAWING:
            if self._custom_amount:
                return (
                    "Enter custom withdrawal amount "
                    f"(multiples of {BILL_DENOMINATION}):"
                )
            return (
                "Withdrawal Menu:\n"
                f"Choose a withdrawal amount (multiples of {BILL_DENOMINATION}):"
            )
        elif state is ScreenState.DEPOSITING:
            return "Please enter the deposit amount (e.g., 100.00 for $100.00):"
        else:
            raise AssertionError(f"Unhandled screen state: {state}")

    # ------------------------------------------------------------------
    # Event handling
    # ------------------------------------------------------------------

    def _dispatch(self, handler: Callable[..., None], *args: Any) -> None:
        """Run an event handler and recover from any ATM error it raises."""
        self.last_error = None
        try:
            handler(*args)
        except (AuthenticationError, SessionInvariantError) as e:
            self.last_error = e
            logger.info(f"{type(e).__name__}: {e}")
            self._reset_login()
            self.notice = str(e)
        except ParseError as e:
            self.last_error = e
            logger.info(f"ParseError on {self.screen_state.value}: {e}")
            if self.screen_state is ScreenState.LOGIN:
                self._reset_login()
            self.notice = str(e)
        except AtmError as e:
            self.last_error = e
            logger.info(f"{type(e).__name__}: {e}")
            self.notice = str(e)

    def _handle_text(self, text: str) -> None:
        state = self.screen_state
        if state is ScreenState.LOGIN:
            self._handle_login_input(text)
        elif state is ScreenState.WITHDRAWING:
            self._withdraw(self._parse_amount(text))
        elif state is ScreenState.DEPOSITING:
            self._deposit(text)
        elif state in (ScreenState.MAIN_MENU, ScreenState.VIEWING_BALANCE):
            logger.debug(f"Ignoring text input on {state.value}")
        else:
            raise AssertionError(f"Unhandled screen state: {state}")

    def _handle_action(self, action: Action, text: str) -> None:
        state = self.screen_state

        if action is Action.EXIT:
            self._exit()
            return

        if action in NAVIGATION_ACTIONS:
            self._require_account()
            self._enter(_NAVIGATION_TARGETS[action])
            return

        if state is ScreenState.LOGIN:
            if action is Action.LOGIN:
                self._handle_login_input(text)
                return
        elif state is ScreenState.VIEWING_BALANCE:
            if action is Action.BACK:
                self._enter(ScreenState.MAIN_MENU)
                return
        elif state is ScreenState.WITHDRAWING:
            if action in WITHDRAWAL_PRESETS:
                self._withdraw(Decimal(WITHDRAWAL_PRESETS[action]))
                return
            if action is Action.CUSTOM_AMOUNT:
                self._custom_amount = True
                self.notice = None
                return
            if action is Action.BACK:
                self._enter(ScreenState.MAIN_MENU)
                return
        elif state is ScreenState.DEPOSITING:
            if action is Action.CONFIRM_DEPOSIT:
                self._deposit(text)
                return
            if action in (Action.CANCEL_DEPOSIT, Action.BACK):
                self._enter(ScreenState.MAIN_MENU)
                return

        logger.debug(f"Ignoring action {action.value} on {state.value}")

    def _handle_login_input(self, text: str) -> None:
        if not text.strip():
            self.notice = MSG_EMPTY_INPUT
            return

        try:
            value = parse_integer(text)
        except ValueError:
            raise ParseError(MSG_NUMBERS_ONLY) from None

        if self.login_step is LoginStep.AWAITING_ACCOUNT_NUMBER:
            self.pending_account_number = value
            self.login_step = LoginStep.AWAITING_PIN
            self.notice = None
        else:
            self._authenticate(value)

    def _authenticate(self, pin: int) -> None:
        account_number = self.pending_account_number
        if account_number is None or not self.bank_database.authenticate(
            account_number, pin
        ):
            raise AuthenticationError(MSG_INVALID_CREDENTIALS)

        self.account = self.bank_database.lookup(account_number)
        self.pending_account_number = None
        logger.info(f"Account {account_number} logged in")
        self._enter(ScreenState.MAIN_MENU, MSG_AUTHENTICATED)

    def _withdraw(self, amount: Decimal) -> None:
        """Validate and perform a withdrawal from the bound account."""
        account = self._require_account()

        # Remainder on the raw amount, not the truncated bill count
        if amount <= 0 or amount % BILL_DENOMINATION != 0:
            raise ValidationError(MSG_WITHDRAWAL_MULTIPLE)
        if amount > account.available_balance:
            raise InsufficientFundsError(MSG_INSUFFICIENT_FUNDS)
        if not self.cash_dispenser.is_sufficient(amount):
            raise InsufficientCashError(MSG_INSUFFICIENT_CASH)

        self.cash_dispenser.dispense(amount)
        account.debit(amount)
        logger.info(
            f"Withdrew {format_currency(amount)} from account {account.account_number}"
        )

        self._custom_amount = False
        self.notice = (
            f"Your cash of ${format_currency(amount)} has been dispensed.\n"
            "Please take your cash now."
        )
        self._schedule_auto_return()

    def _deposit(self, text: str) -> None:
        """Validate and perform a deposit to the bound account."""
        account = self._require_account()
        amount = self._parse_amount(text)
        if amount <= 0:
            raise ValidationError(MSG_DEPOSIT_NOT_POSITIVE)

        if self.deposit_slot.accept():
            account.credit(amount)
            logger.info(
                f"Deposited {format_currency(amount)} to account {account.account_number}"
            )
            self.notice = (
                f"Your deposit of ${format_currency(amount)} "
                "has been credited to your account."
            )
        else:
            logger.info(f"Deposit to account {account.account_number} canceled")
            self.notice = MSG_NO_ENVELOPE
        self._schedule_auto_return()

    def _exit(self) -> None:
        if self.account is not None:
            logger.info(f"Account {self.account.account_number} logged out")
        self._reset_login()
        self.notice = MSG_GOODBYE

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_amount(text: str) -> Decimal:
        try:
            amount = parse_amount(text)
        except ValueError:
            raise ParseError(MSG_INVALID_AMOUNT) from None

        if not is_within_limit(amount):
            raise ValidationError(MSG_AMOUNT_TOO_LARGE)
        return amount

    def _require_account(self) -> Account:
        if self.account is None:
            raise SessionInvariantError(MSG_NOT_LOGGED_IN)
        return self.account

    def _enter(self, state: ScreenState, notice: Optional[str] = None) -> None:
        logger.debug(f"Transition {self.screen_state.value} -> {state.value}")
        self.screen_state = state
        self.notice = notice
        self._custom_amount = False

    def _reset_login(self) -> None:
        self._cancel_auto_return()
        self.account = None
        self.pending_account_number = None
        self.login_step = LoginStep.AWAITING_ACCOUNT_NUMBER
        self._enter(ScreenState.LOGIN)

    def _schedule_auto_return(self) -> None:
        self._cancel_auto_return()
        self._auto_return = AutoReturn(self.auto_return_delay)

    def _cancel_auto_return(self) -> None:
        if self._auto_return is not None:
            self._auto_return.cancel()
            self._auto_return = None
