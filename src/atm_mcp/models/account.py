"""
Account model for the ATM bank database.
"""

from decimal import Decimal

from pydantic import BaseModel, Field, computed_field, model_validator


class Account(BaseModel):
    """
    Represents a bank account reachable from the ATM.

    Available and total balance are tracked separately so that a hold can
    reduce what may be withdrawn without touching the ledger balance. No
    operation creates holds yet, so both move together.
    """

    model_config = {"strict": True, "populate_by_name": True}

    # Required fields
    account_number: int
    pin: int = Field(exclude=True, repr=False)

    # Balances
    available_balance: Decimal
    total_balance: Decimal

    @model_validator(mode="after")
    def validate_balances(self) -> "Account":
        """Validate that available balance never exceeds total balance."""
        if self.available_balance > self.total_balance:
            raise ValueError(
                f"Available balance {self.available_balance} exceeds "
                f"total balance {self.total_balance}"
            )
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def held_amount(self) -> Decimal:
        """Amount held back from withdrawal."""
        return self.total_balance - self.available_balance

    def validate_pin(self, pin: int) -> bool:
        """Check a PIN by exact equality."""
        return pin == self.pin

    def credit(self, amount: Decimal) -> None:
        """Add amount to both balances."""
        self.total_balance += amount
        self.available_balance += amount

    def debit(self, amount: Decimal) -> None:
        """Subtract amount from both balances."""
        self.available_balance -= amount
        self.total_balance -= amount
