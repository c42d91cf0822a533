"""
Conversion of one logical, tab-delimited row into a Transaction.

Row layout: date cells, then gross, fee and net money cells, then the
description. Anything after the third money cell is description text.
"""
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Union

from core.classifier import classify
from core.datetime_parser import parse_datetime, to_epoch_ms
from core.exceptions import ClassificationError, ParsingError
from core.logger import setup_logger
from core.normalize import amounts_reconcile, clean_amount, is_money_cell
from core.schema import RowFailure, Transaction

logger = setup_logger(__name__)

MIN_MONEY_COLUMNS = 3


def split_cells(line: str) -> List[str]:
    return [cell.strip() for cell in line.split("\t")]


def _parse_amount(cell: str, column: str) -> Decimal:
    amount = clean_amount(cell)
    if amount is None:
        raise ParsingError(
            f"Invalid {column} amount",
            details={"reason": "invalid_amount", "cell": cell}
        )
    return amount


def build_transaction(line: str) -> Transaction:
    """
    Parse a logical row, raising on the first problem found.

    Raises:
        ParsingError: With details["reason"] naming the failed check
        ClassificationError: If the description matches no revenue rule
    """
    cells = split_cells(line)
    money = [i for i, cell in enumerate(cells) if is_money_cell(cell)]
    if len(money) < MIN_MONEY_COLUMNS:
        raise ParsingError(
            f"Expected at least {MIN_MONEY_COLUMNS} money columns, found {len(money)}",
            details={"reason": "insufficient_money_columns"}
        )

    date_text = " ".join(cells[:money[0]])
    dt = parse_datetime(date_text)
    if dt is None:
        raise ParsingError(
            "No date/time found before the amounts",
            details={"reason": "invalid_date", "date_text": date_text}
        )

    gross = _parse_amount(cells[money[0]], "gross")
    fee = _parse_amount(cells[money[1]], "fee")
    net = _parse_amount(cells[money[2]], "net")

    try:
        reconciled = amounts_reconcile(gross, fee, net)
    except InvalidOperation:
        raise ParsingError("Amount out of range", details={"reason": "invalid_amount"})
    if not reconciled:
        raise ParsingError(
            "Gross minus fee does not equal net",
            details={"reason": "amount_mismatch", "gross": str(gross), "fee": str(fee), "net": str(net)}
        )

    description = " ".join(cells[money[2] + 1:])
    try:
        classification = classify(description, gross)
    except InvalidOperation:
        raise ParsingError("Amount out of range", details={"reason": "invalid_amount"})

    return Transaction(
        timestamp=to_epoch_ms(dt),
        gross=gross,
        net=net,
        type=classification.type,
        is_ppv=classification.is_ppv,
        description=description,
    )


def try_parse_row(line: str, line_number: int = 1) -> Union[Transaction, RowFailure]:
    """
    Parse a logical row into a Transaction or a RowFailure. Never raises.

    Args:
        line: Tab-delimited logical row
        line_number: Physical line the row starts on, for reporting

    Returns:
        Transaction on success, RowFailure describing the first failed check otherwise
    """
    try:
        return build_transaction(line)
    except ClassificationError as e:
        reason = "unclassified_description"
        message = e.message
    except ParsingError as e:
        reason = e.details.get("reason", "unrecognized_line")
        message = e.message

    logger.debug(f"Row at line {line_number} rejected ({reason}): {message}")
    return RowFailure(line_number=line_number, text=line, reason=reason, message=message)


def parse_row(line: str) -> Optional[Transaction]:
    """Parse a logical row, returning None when it is not a valid transaction."""
    result = try_parse_row(line)
    return result if isinstance(result, Transaction) else None
