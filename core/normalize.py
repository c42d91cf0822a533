"""
Money cell normalization and gross/fee/net reconciliation.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from core.logger import setup_logger

logger = setup_logger(__name__)

CURRENCY_MARKER = "$"
CENT = Decimal("0.01")


def is_money_cell(cell: str) -> bool:
    return cell.startswith(CURRENCY_MARKER)


def clean_amount(value: str) -> Optional[Decimal]:
    """
    Clean and normalize a money cell such as "$1,234.50".
    Removes the currency marker, spaces and thousands separators.

    Args:
        value: Raw money cell

    Returns:
        Decimal amount or None if the cell holds no valid number
    """
    if value is None:
        return None

    amount_str = value.strip()
    if amount_str.startswith(CURRENCY_MARKER):
        amount_str = amount_str[len(CURRENCY_MARKER):]

    amount_str = amount_str.replace(" ", "").replace(",", "").replace("\xa0", "")
    if not amount_str:
        return None

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        logger.debug(f"Failed to parse amount: '{value}'")
        return None

    if not amount.is_finite():
        return None
    return amount


def round_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def amounts_reconcile(gross: Decimal, fee: Decimal, net: Decimal) -> bool:
    """Check that gross minus fee, rounded to cents, equals net."""
    return round_cents(gross - fee) == net
