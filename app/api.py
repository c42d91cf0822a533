"""
FastAPI routes for parsing and reporting pasted earnings exports.
Clean API layer following separation of concerns principle.
"""
from datetime import datetime

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel

from core.config import get_settings
from core.exceptions import ExportError, ValidationError
from core.exporters import export_report_bytes
from core.logger import setup_logger
from core.schema import ParseResult, Report
from services.report_service import ReportService

logger = setup_logger(__name__)
settings = get_settings()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
STATISTICS_ERROR = "Could not compute statistics, check input"

# Initialize FastAPI app
app = FastAPI(
    title="Earnings Paste Analyzer",
    description="Parse copy-pasted earnings exports into hourly revenue reports",
    version="1.0.0"
)

# Service instance
report_service = ReportService()


class PasteRequest(BaseModel):
    """Raw pasted export text."""
    text: str = ""


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "earnings_paste_analyzer",
        "version": "1.0.0"
    }


@app.get("/favicon.ico")
def favicon():
    """Return empty response for favicon to avoid 404 errors."""
    return Response(status_code=204)


def reject_failed_report(report: Report) -> None:
    """
    Refuse to return figures for input with bad rows.

    Raises:
        HTTPException: 422 listing the failed rows
    """
    if report.has_error:
        raise HTTPException(
            status_code=422,
            detail={
                "message": STATISTICS_ERROR,
                "failures": [failure.model_dump() for failure in report.failures],
            }
        )


def analyze_or_reject(text: str) -> Report:
    try:
        report = report_service.analyze(text)
    except ValidationError as e:
        logger.warning(f"Rejected input: {e.message}")
        raise HTTPException(status_code=413, detail=e.message)
    reject_failed_report(report)
    return report


@app.post("/api/parse", response_model=ParseResult)
def parse_paste(request: PasteRequest):
    """
    Parse a paste into transactions without computing figures.

    Returns:
        ParseResult including failed rows
    """
    try:
        return report_service.parse(request.text)
    except ValidationError as e:
        logger.warning(f"Rejected input: {e.message}")
        raise HTTPException(status_code=413, detail=e.message)


@app.post("/api/report", response_model=Report)
def report_paste(request: PasteRequest):
    """
    Compute totals, hourly buckets and insights for a paste.

    Returns:
        Report, or 422 if any row failed to parse
    """
    return analyze_or_reject(request.text)


@app.post("/api/export")
def export_paste(request: PasteRequest):
    """
    Download the report for a paste as an Excel workbook.

    Returns:
        .xlsx file, or 422 if any row failed to parse
    """
    report = analyze_or_reject(request.text)

    try:
        content = export_report_bytes(report)
    except ExportError as e:
        logger.error(f"Export failed: {e.message} {e.details}")
        raise HTTPException(status_code=500, detail=e.message)

    filename = f"earnings_report_{datetime.now().strftime('%Y-%m-%dT%H-%M-%S')}.xlsx"
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
