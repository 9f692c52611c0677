"""
Currency utilities for parsing and displaying amounts.
"""

from decimal import Decimal, InvalidOperation

# Largest amount accepted for a single transaction
MAX_AMOUNT = Decimal("10000000")


def parse_amount(text: str) -> Decimal:
    """
    Parse a user-entered amount.

    Accepts plain decimal notation such as "200", "50.00" or "12.5".
    Digit separators ("1_000", "1,000") are rejected.

    Args:
        text: Raw text from the input field

    Returns:
        Parsed amount as a Decimal

    Raises:
        ValueError: If text is not a finite decimal number
    """
    if "_" in text:
        raise ValueError(f"Not a number: {text!r}")

    try:
        amount = Decimal(text.strip())
    except InvalidOperation:
        raise ValueError(f"Not a number: {text!r}") from None

    if not amount.is_finite():
        raise ValueError(f"Not a finite number: {text!r}")

    return amount


def is_within_limit(amount: Decimal) -> bool:
    """
    Check that an amount is small enough for balance arithmetic.

    Amounts beyond MAX_AMOUNT (such as "1e30") would exceed the decimal
    context precision when reduced modulo the bill denomination or added
    to a balance.
    """
    return abs(amount) <= MAX_AMOUNT


def parse_integer(text: str) -> int:
    """
    Parse a whole number such as an account number or PIN.

    Raises:
        ValueError: If text is not an integer or contains digit separators
    """
    if "_" in text:
        raise ValueError(f"Not an integer: {text!r}")
    return int(text.strip())


def format_currency(amount: Decimal) -> str:
    """
    Format an amount with exactly two fraction digits.

    No thousands separator is inserted, so 1000 renders as "1000.00"
    rather than the grouped "1,000.00".

    Args:
        amount: Amount to format

    Returns:
        String such as "850.00"
    """
    return f"{amount:.2f}"
