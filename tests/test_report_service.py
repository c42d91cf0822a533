"""
Unit tests for the report service.
"""
from decimal import Decimal

import pytest

from core.exceptions import ValidationError
from services.report_service import ReportService

VALID_PASTE = "\n".join([
    "Mar 1, 2024, 1:05 pm\t$10.00\t$2.00\t$8.00\tTip from Alice",
    "Mar 1, 2024, 1:55 pm\t$10.50\t$2.10\t$8.40\tPayment for message from Bob",
    "Mar 1, 2024, 2:01 pm\t$10.00\t$2.00\t$8.00\tPayment for message from Alice",
    "Mar 1, 2024, 3:10 pm", "$5.00", "$1.00", "$4.00", "Recurring subscription from Carol",
])


@pytest.fixture
def service():
    return ReportService()


def test_analyze_valid_paste(service):
    report = service.analyze(VALID_PASTE)

    assert report.has_error is False
    assert report.transaction_count == 4
    assert report.totals.ppv_net == Decimal("12.40")
    assert report.totals.no_ppv_net == Decimal("16.00")
    assert report.totals.total == Decimal("28.40")
    assert len(report.buckets) == 3
    assert report.top_spenders[0].name == "Alice"
    assert report.average_gross == Decimal("8.875")


def test_totals_match_sum_of_net(service):
    result = service.parse(VALID_PASTE)
    report = service.build_report(result)

    assert report.totals.ppv_net + report.totals.no_ppv_net == sum(t.net for t in result.transactions)


def test_any_failure_suppresses_figures(service):
    report = service.analyze(VALID_PASTE + "\ngarbage line")

    assert report.has_error is True
    assert report.transaction_count == 4
    assert len(report.failures) == 1
    assert report.totals is None
    assert report.buckets == []
    assert report.breakdown == []
    assert report.top_spenders == []


def test_empty_paste(service):
    report = service.analyze("")

    assert report.has_error is False
    assert report.totals is None
    assert report.buckets == []


def test_input_size_limit(monkeypatch):
    monkeypatch.setenv("MAX_INPUT_CHARS", "10")
    service = ReportService()

    with pytest.raises(ValidationError) as exc_info:
        service.analyze("x" * 11)
    assert exc_info.value.details["limit"] == 10


def test_top_spenders_limit(monkeypatch):
    monkeypatch.setenv("TOP_SPENDERS_LIMIT", "1")
    report = ReportService().analyze(VALID_PASTE)

    assert len(report.top_spenders) == 1
