"""
Dashboard figures derived from parsed transactions:
category breakdown, top spenders and average transaction size.
"""
import re
from decimal import Decimal
from typing import Dict, List

from core.classifier import category_from_type
from core.schema import ZERO, CategoryShare, Spender, Transaction

BUYER_PATTERN = re.compile(r"\b(?:from|by|de)\s+(.+)", re.IGNORECASE)
BOILERPLATE_PATTERN = re.compile(r"Payment for message|Tip from|Recurring subscription", re.IGNORECASE)
UNKNOWN_BUYER = "Unknown"

# display order before sorting by value
CATEGORY_LABELS = [
    ("tips", "Tips"),
    ("messages", "Messages"),
    ("subs", "Subs"),
    ("posts", "Posts"),
]


def extract_buyer_name(description: str) -> str:
    """
    Guess the buyer from a description like "Tip from Alice".

    Args:
        description: Transaction description

    Returns:
        Buyer name, or "Unknown" if none can be found
    """
    if not description:
        return UNKNOWN_BUYER

    match = BUYER_PATTERN.search(description)
    if match and match.group(1).strip():
        return match.group(1).strip()

    name = BOILERPLATE_PATTERN.sub("", description).strip()
    return name or UNKNOWN_BUYER


def top_spenders(transactions: List[Transaction], limit: int = 3) -> List[Spender]:
    """Buyers ranked by total gross spend, highest first."""
    spenders: Dict[str, Spender] = {}
    for txn in transactions:
        name = extract_buyer_name(txn.description)
        spender = spenders.setdefault(name, Spender(name=name))
        spender.gross += txn.gross
        spender.net += txn.net

    ranked = sorted(spenders.values(), key=lambda s: s.gross, reverse=True)
    return ranked[:limit]


def category_breakdown(transactions: List[Transaction]) -> List[CategoryShare]:
    """
    Net revenue per category with its percentage of the overall net.

    Args:
        transactions: Parsed transactions

    Returns:
        One CategoryShare per category, sorted by value descending
    """
    shares = {category: CategoryShare(category=category, label=label) for category, label in CATEGORY_LABELS}
    for txn in transactions:
        share = shares[category_from_type(txn.type)]
        share.value += txn.net
        share.count += 1

    total = sum((share.value for share in shares.values()), ZERO)
    for share in shares.values():
        share.percent = float(share.value / total * 100) if total else 0.0

    return sorted(shares.values(), key=lambda s: s.value, reverse=True)


def average_gross(transactions: List[Transaction]) -> Decimal:
    if not transactions:
        return ZERO
    return sum((txn.gross for txn in transactions), ZERO) / len(transactions)
