"""
Report service.
Runs parsing, aggregation and insights over one pasted export.
"""
from core.aggregation import aggregate
from core.config import get_settings
from core.exceptions import ValidationError
from core.formatting import format_usd
from core.insights import average_gross, category_breakdown, top_spenders
from core.logger import setup_logger
from core.parsing import parse_transactions
from core.schema import ParseResult, Report

logger = setup_logger(__name__)


class ReportService:
    """Service for turning pasted exports into reports."""

    def __init__(self):
        """Initialize report service."""
        self.settings = get_settings()

    def validate_input(self, raw: str) -> None:
        """
        Reject input larger than the configured limit.

        Raises:
            ValidationError: If the text exceeds max_input_chars
        """
        if raw and len(raw) > self.settings.max_input_chars:
            raise ValidationError(
                f"Input exceeds {self.settings.max_input_chars:,} characters",
                details={"length": len(raw), "limit": self.settings.max_input_chars}
            )

    def parse(self, raw: str) -> ParseResult:
        """Parse a paste without computing any figures."""
        self.validate_input(raw)
        return parse_transactions(raw)

    def build_report(self, result: ParseResult) -> Report:
        """
        Build a report from a parse result.

        A result with errors yields a report with failures only: a single bad
        line invalidates the whole batch rather than producing partial totals.

        Args:
            result: Parse result

        Returns:
            Report
        """
        if result.has_error:
            logger.warning(
                f"Could not compute statistics: {len(result.failures)} rows failed to parse"
            )
            return Report(
                has_error=True,
                failures=result.failures,
                transaction_count=len(result.transactions),
            )

        transactions = result.transactions
        if not transactions:
            return Report()

        aggregated = aggregate(transactions, self.settings.zone)
        logger.info(
            f"Report built: {len(transactions)} transactions, "
            f"net {format_usd(aggregated.totals.total)} (PPV {format_usd(aggregated.totals.ppv_net)})"
        )

        return Report(
            transaction_count=len(transactions),
            totals=aggregated.totals,
            buckets=aggregated.buckets,
            breakdown=category_breakdown(transactions),
            top_spenders=top_spenders(transactions, self.settings.top_spenders_limit),
            average_gross=average_gross(transactions),
        )

    def analyze(self, raw: str) -> Report:
        """
        Parse a paste and build its report.

        Args:
            raw: Pasted export text

        Returns:
            Report (with has_error set and no figures if any row failed)

        Raises:
            ValidationError: If the input is too large
        """
        return self.build_report(self.parse(raw))
