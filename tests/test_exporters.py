"""
Unit tests for Excel export.
"""
from io import BytesIO

import pandas as pd
import pytest

from core.exceptions import ExportError
from core.exporters import export_report, export_report_bytes, report_to_frames
from services.report_service import ReportService

PASTE = "\n".join([
    "Mar 1, 2024, 12:05 am\t$10.00\t$2.00\t$8.00\tTip from Alice",
    "Mar 1, 2024, 1:55 pm\t$10.50\t$2.10\t$8.40\tPayment for message from Bob",
])


@pytest.fixture
def report():
    return ReportService().analyze(PASTE)


def test_report_to_frames(report):
    frames = report_to_frames(report)

    assert list(frames) == ["Summary", "Hourly", "Categories", "Top Spenders"]
    hourly = frames["Hourly"]
    assert list(hourly["Label"]) == ["Mar 1 12 AM", "1 PM"]
    assert list(hourly["Tips"]) == [8.0, 0.0]
    assert list(hourly["Messages PPV"]) == [0.0, 8.4]
    assert list(hourly["Transactions"]) == [1, 1]
    summary = frames["Summary"].set_index("Metric")["Value"]
    assert summary["Total net"] == pytest.approx(16.4)
    assert summary["PPV net"] == pytest.approx(8.4)


def test_export_report_to_path(report, tmp_path):
    output = tmp_path / "out" / "report.xlsx"

    export_report(report, output)

    sheets = pd.read_excel(output, sheet_name=None)
    assert set(sheets) == {"Summary", "Hourly", "Categories", "Top Spenders"}
    assert len(sheets["Hourly"]) == 2
    assert list(sheets["Top Spenders"]["Name"]) == ["Bob", "Alice"]


def test_export_report_bytes(report):
    content = export_report_bytes(report)

    categories = pd.read_excel(BytesIO(content), sheet_name="Categories")
    assert list(categories["Category"])[:2] == ["Messages", "Tips"]


def test_export_refuses_report_with_errors():
    report = ReportService().analyze(PASTE + "\nnot a row")

    with pytest.raises(ExportError):
        export_report_bytes(report)


def test_export_empty_report():
    report = ReportService().analyze("")

    content = export_report_bytes(report)

    hourly = pd.read_excel(BytesIO(content), sheet_name="Hourly")
    assert hourly.empty
