"""
Keyword classification of transaction descriptions.

Rules are checked top to bottom and the first match wins, since a single
description can mention several keywords ("Tip on subscription").
Keys cover English and Spanish exports.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Tuple

from core.exceptions import ClassificationError
from core.schema import Category, Classification, TransactionType

PREMIUM_MESSAGE = "message"

# (keys, type, is_ppv). Premium messages resolve their type from the gross amount.
TYPE_RULES: List[Tuple[Tuple[str, ...], str, Optional[bool]]] = [
    (("tip", "sugerencia", "propina"), "Tip", False),
    (("payment for message", "pago por mensaje"), PREMIUM_MESSAGE, None),
    (("post", "publicación", "publicacion"), "Post", True),
    (("recurring subscription", "suscripción recurrente", "suscripcion recurrente"), "Resub", True),
    (("subscription", "suscripción de", "suscripcion de"), "Sub", True),
]

CATEGORY_BY_TYPE: Dict[str, Category] = {
    "Tip": "tips",
    "Post": "posts",
    "Sub": "subs",
    "Resub": "subs",
    "PPV": "messages",
    "Bundle": "messages",
}

CENT = Decimal("0.01")


def has_cents(amount: Decimal) -> bool:
    """True when the amount, rounded to cents, is not a whole number."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP) % 1 != 0


def classify_premium_message(gross: Decimal) -> Classification:
    """
    Split paid messages into PPV and Bundle.

    Individually priced unlocks carry cents (9.99), bundles are sold at
    whole-dollar prices (10.00). Only PPV counts toward the premium total.
    """
    if has_cents(gross):
        return Classification(type="PPV", is_ppv=True)
    return Classification(type="Bundle", is_ppv=False)


def classify(description: str, gross: Decimal) -> Classification:
    """
    Map a transaction description to its revenue type.

    Args:
        description: Free-text description from the export
        gross: Gross amount, used to split premium messages

    Returns:
        Classification with type and is_ppv flag

    Raises:
        ClassificationError: If no rule matches the description
    """
    text = (description or "").casefold()
    if text:
        for keys, type_, is_ppv in TYPE_RULES:
            if any(key in text for key in keys):
                if type_ == PREMIUM_MESSAGE:
                    return classify_premium_message(gross)
                return Classification(type=type_, is_ppv=is_ppv)

    raise ClassificationError(
        "Unclassified description",
        details={"description": description}
    )


def category_from_type(type_: TransactionType) -> Category:
    """Reporting category of a transaction type (independent of is_ppv)."""
    return CATEGORY_BY_TYPE[type_]
