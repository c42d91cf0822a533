"""Hourly aggregation of parsed transactions."""
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo

from core.classifier import category_from_type
from core.config import get_settings
from core.logger import setup_logger
from core.schema import AggregationResult, HourlyBucket, Totals, Transaction

logger = setup_logger(__name__)


def start_of_hour(timestamp: int, tz: Optional[ZoneInfo] = None) -> int:
    """Truncate an epoch-millisecond timestamp to the start of its hour."""
    dt = datetime.fromtimestamp(timestamp / 1000, tz or get_settings().zone)
    dt = dt.replace(minute=0, second=0, microsecond=0)
    return int(dt.timestamp()) * 1000


def _add(bucket: HourlyBucket, field: str, amount: Decimal) -> None:
    setattr(bucket, field, getattr(bucket, field) + amount)
    count_field = f"{field}_count" if field != "all" else "count"
    setattr(bucket, count_field, getattr(bucket, count_field) + 1)


def aggregate(transactions: List[Transaction], tz: Optional[ZoneInfo] = None) -> AggregationResult:
    """
    Sum net revenue into totals and hourly buckets.

    Only meaningful for a ParseResult without errors; callers enforce that.

    Args:
        transactions: Parsed transactions
        tz: Timezone defining hour boundaries (defaults to configured timezone)

    Returns:
        AggregationResult with totals (None for no transactions) and buckets sorted by hour
    """
    if not transactions:
        return AggregationResult(totals=None, buckets=[])

    tz = tz or get_settings().zone
    totals = Totals()
    buckets: Dict[int, HourlyBucket] = {}

    for txn in transactions:
        if txn.is_ppv:
            totals.ppv_net += txn.net
        else:
            totals.no_ppv_net += txn.net

        hour = start_of_hour(txn.timestamp, tz)
        bucket = buckets.get(hour)
        if bucket is None:
            bucket = buckets[hour] = HourlyBucket(timestamp=hour)

        category = category_from_type(txn.type)
        if category == "messages":
            _add(bucket, "messages_ppv" if txn.is_ppv else "messages_no_ppv", txn.net)
        _add(bucket, category, txn.net)
        _add(bucket, "all", txn.net)

    logger.info(f"Aggregated {len(transactions)} transactions into {len(buckets)} hourly buckets")

    return AggregationResult(
        totals=totals,
        buckets=[buckets[hour] for hour in sorted(buckets)],
    )
