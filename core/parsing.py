"""
Pasted export parsing.

Handles both layouts produced by copying the earnings table:
- one row per line with tab-separated cells
- one cell per line (date, gross, fee, net, description)
"""
import re
from typing import List

from core.datetime_parser import parse_datetime
from core.logger import setup_logger
from core.normalize import is_money_cell
from core.row_parser import try_parse_row
from core.schema import ParseResult, RowFailure, Transaction

logger = setup_logger(__name__)

LINE_SPLIT = re.compile(r"\r?\n")

# date line, three money lines, optional description line
MULTILINE_ROW_SIZE = 5
MULTILINE_MONEY_LINES = 3


def split_lines(raw: str) -> List[str]:
    """Split input into trimmed, non-empty lines."""
    if not raw:
        return []
    return [line.strip() for line in LINE_SPLIT.split(raw) if line.strip()]


def starts_multiline_row(lines: List[str], i: int) -> bool:
    """True when lines[i] is a date line followed by three money lines."""
    money_lines = lines[i + 1:i + 1 + MULTILINE_MONEY_LINES]
    if len(money_lines) < MULTILINE_MONEY_LINES:
        return False
    if not all(is_money_cell(line) for line in money_lines):
        return False
    return parse_datetime(lines[i]) is not None


def join_multiline_row(lines: List[str], i: int) -> str:
    cells = lines[i:i + MULTILINE_ROW_SIZE]
    cells += [""] * (MULTILINE_ROW_SIZE - len(cells))
    return "\t".join(cells)


def parse_transactions(raw: str) -> ParseResult:
    """
    Parse a whole paste into transactions.

    Bad rows are skipped and recorded; any skipped row sets has_error.

    Args:
        raw: Pasted export text

    Returns:
        ParseResult with transactions in input order
    """
    lines = split_lines(raw)
    transactions: List[Transaction] = []
    failures: List[RowFailure] = []

    i = 0
    while i < len(lines):
        line_number = i + 1
        if "\t" in lines[i]:
            row = lines[i]
            i += 1
        elif starts_multiline_row(lines, i):
            row = join_multiline_row(lines, i)
            i += MULTILINE_ROW_SIZE
        else:
            logger.debug(f"Line {line_number} is not a transaction row")
            failures.append(
                RowFailure(
                    line_number=line_number,
                    text=lines[i],
                    reason="unrecognized_line",
                    message="Line is neither tab-delimited nor the start of a multi-line row",
                )
            )
            i += 1
            continue

        result = try_parse_row(row, line_number)
        if isinstance(result, RowFailure):
            failures.append(result)
        else:
            transactions.append(result)

    if failures:
        logger.warning(
            f"Parsed {len(transactions)} transactions from {len(lines)} lines, "
            f"{len(failures)} rows failed"
        )
    else:
        logger.info(f"Parsed {len(transactions)} transactions from {len(lines)} lines")

    return ParseResult(
        transactions=transactions,
        has_error=bool(failures),
        failures=failures,
    )
