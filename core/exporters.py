"""
Excel export of a computed report.
Writes hourly buckets, category breakdown, top spenders and totals to separate sheets.
"""
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Dict, Optional, Union
from zoneinfo import ZoneInfo

import pandas as pd

from core.config import get_settings
from core.exceptions import ExportError
from core.formatting import format_bucket_label
from core.logger import setup_logger
from core.schema import Report

logger = setup_logger(__name__)

HOURLY_COLUMNS = {
    "tips": "Tips",
    "posts": "Posts",
    "subs": "Subs",
    "messages": "Messages",
    "messages_ppv": "Messages PPV",
    "messages_no_ppv": "Messages No PPV",
    "all": "All",
    "count": "Transactions",
    "tips_count": "Tips #",
    "posts_count": "Posts #",
    "subs_count": "Subs #",
    "messages_count": "Messages #",
    "messages_ppv_count": "Messages PPV #",
    "messages_no_ppv_count": "Messages No PPV #",
}


def report_to_frames(report: Report, tz: Optional[ZoneInfo] = None) -> Dict[str, pd.DataFrame]:
    """
    Convert a report into one DataFrame per sheet.

    Args:
        report: Report without errors
        tz: Timezone for hour labels (defaults to configured timezone)

    Returns:
        Mapping of sheet name to DataFrame
    """
    tz = tz or get_settings().zone

    hourly = pd.DataFrame(
        [bucket.model_dump() for bucket in report.buckets],
        columns=["timestamp", *HOURLY_COLUMNS],
    )
    hourly.insert(0, "Hour", [datetime.fromtimestamp(ts / 1000, tz).replace(tzinfo=None) for ts in hourly["timestamp"]])
    hourly.insert(1, "Label", [format_bucket_label(ts, tz) for ts in hourly["timestamp"]])
    hourly = hourly.drop(columns=["timestamp"]).rename(columns=HOURLY_COLUMNS)
    for column in ["Tips", "Posts", "Subs", "Messages", "Messages PPV", "Messages No PPV", "All"]:
        hourly[column] = hourly[column].astype(float)

    categories = pd.DataFrame(
        [
            {"Category": share.label, "Net": float(share.value), "Count": share.count, "Percent": round(share.percent, 2)}
            for share in report.breakdown
        ],
        columns=["Category", "Net", "Count", "Percent"],
    )

    spenders = pd.DataFrame(
        [{"Name": s.name, "Gross": float(s.gross), "Net": float(s.net)} for s in report.top_spenders],
        columns=["Name", "Gross", "Net"],
    )

    totals = report.totals
    summary = pd.DataFrame(
        [
            {"Metric": "Total net", "Value": float(totals.total) if totals else 0.0},
            {"Metric": "PPV net", "Value": float(totals.ppv_net) if totals else 0.0},
            {"Metric": "No PPV net", "Value": float(totals.no_ppv_net) if totals else 0.0},
            {"Metric": "Transactions", "Value": float(report.transaction_count)},
            {"Metric": "Average gross", "Value": round(float(report.average_gross), 2)},
        ]
    )

    return {
        "Summary": summary,
        "Hourly": hourly,
        "Categories": categories,
        "Top Spenders": spenders,
    }


def export_report(report: Report, target: Union[str, Path, BinaryIO]) -> Union[str, Path, BinaryIO]:
    """
    Export a report to an Excel workbook.

    Args:
        report: Report to export
        target: Output path or writable binary buffer

    Returns:
        The target that was written

    Raises:
        ExportError: If the report has errors or writing fails
    """
    if report.has_error:
        raise ExportError(
            "Cannot export a report built from input with errors",
            details={"failures": len(report.failures)}
        )

    if isinstance(target, (str, Path)):
        Path(target).parent.mkdir(parents=True, exist_ok=True)

    frames = report_to_frames(report)
    logger.info(f"Exporting report with {len(report.buckets)} hourly buckets")

    try:
        with pd.ExcelWriter(target, engine="xlsxwriter") as writer:
            for sheet_name, df in frames.items():
                df.to_excel(writer, sheet_name=sheet_name, index=False)

                # Auto-fit columns (approximate)
                worksheet = writer.sheets[sheet_name]
                for idx, col in enumerate(df.columns):
                    values_len = df[col].astype(str).map(len).max() if len(df) else 0
                    worksheet.set_column(idx, idx, min(max(values_len, len(str(col))) + 2, 50))

        return target

    except Exception as e:
        logger.error(f"Failed to export Excel: {e}")
        raise ExportError(
            "Failed to export to Excel",
            details={"error": str(e)}
        )


def export_report_bytes(report: Report) -> bytes:
    """Export a report to an in-memory .xlsx file."""
    buffer = BytesIO()
    export_report(report, buffer)
    return buffer.getvalue()
