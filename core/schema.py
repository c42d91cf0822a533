"""
Pydantic models for parsed transactions and aggregated reports.
"""
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

TransactionType = Literal["Tip", "Post", "Sub", "Resub", "PPV", "Bundle"]
Category = Literal["tips", "posts", "subs", "messages"]
FailureReason = Literal[
    "unrecognized_line",
    "invalid_date",
    "insufficient_money_columns",
    "invalid_amount",
    "amount_mismatch",
    "unclassified_description",
]

ZERO = Decimal("0")


class Classification(BaseModel):
    """Revenue type assigned to a transaction description."""
    model_config = ConfigDict(frozen=True)

    type: TransactionType
    is_ppv: bool


class Transaction(BaseModel):
    """A single parsed earnings row. Fee is validated but not retained."""
    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(..., description="Epoch milliseconds")
    gross: Decimal
    net: Decimal
    type: TransactionType
    is_ppv: bool
    description: str = ""


class RowFailure(BaseModel):
    """A logical row that could not be turned into a transaction."""
    line_number: int = Field(..., ge=1, description="First physical line of the logical row (1-based)")
    text: str
    reason: FailureReason
    message: str = ""


class ParseResult(BaseModel):
    """
    Outcome of parsing a whole paste.

    has_error taints the batch: callers must not report totals from a
    result with has_error set, even though transactions may be non-empty.
    """
    transactions: List[Transaction] = Field(default_factory=list)
    has_error: bool = False
    failures: List[RowFailure] = Field(default_factory=list)


class HourlyBucket(BaseModel):
    """Per-category net sums and counts for one clock hour."""
    timestamp: int = Field(..., description="Start of hour, epoch milliseconds")

    tips: Decimal = ZERO
    posts: Decimal = ZERO
    subs: Decimal = ZERO
    messages: Decimal = ZERO
    all: Decimal = ZERO
    messages_ppv: Decimal = ZERO
    messages_no_ppv: Decimal = ZERO

    count: int = 0
    tips_count: int = 0
    posts_count: int = 0
    subs_count: int = 0
    messages_count: int = 0
    messages_ppv_count: int = 0
    messages_no_ppv_count: int = 0


class Totals(BaseModel):
    """Net revenue split by the is_ppv flag."""
    ppv_net: Decimal = ZERO
    no_ppv_net: Decimal = ZERO

    @computed_field
    @property
    def total(self) -> Decimal:
        return self.ppv_net + self.no_ppv_net


class AggregationResult(BaseModel):
    totals: Optional[Totals] = None
    buckets: List[HourlyBucket] = Field(default_factory=list)


class CategoryShare(BaseModel):
    """Net revenue of one category and its share of the total."""
    category: Category
    label: str
    value: Decimal = ZERO
    count: int = 0
    percent: float = 0.0


class Spender(BaseModel):
    name: str
    gross: Decimal = ZERO
    net: Decimal = ZERO


class Report(BaseModel):
    """
    Everything a presentation layer needs for one paste.

    When has_error is set only failures and transaction_count are filled;
    all figures stay empty so no partial totals can be shown.
    """
    has_error: bool = False
    failures: List[RowFailure] = Field(default_factory=list)
    transaction_count: int = 0
    totals: Optional[Totals] = None
    buckets: List[HourlyBucket] = Field(default_factory=list)
    breakdown: List[CategoryShare] = Field(default_factory=list)
    top_spenders: List[Spender] = Field(default_factory=list)
    average_gross: Decimal = ZERO
