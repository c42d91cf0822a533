"""
Unit tests for whole-paste parsing.
"""
from decimal import Decimal

from core.parsing import parse_transactions, split_lines

TAB_ROWS = "\n".join([
    "Mar 1, 2024, 1:05 pm\t$10.00\t$2.00\t$8.00\tTip from Alice",
    "Mar 1, 2024, 1:55 pm\t$5.00\t$1.00\t$4.00\tSubscription from Bob",
])


def test_split_lines_trims_and_drops_blank_lines():
    assert split_lines("  a \r\n\r\n b\n   \n") == ["a", "b"]
    assert split_lines("") == []


def test_tab_delimited_rows():
    result = parse_transactions(TAB_ROWS)

    assert result.has_error is False
    assert result.failures == []
    assert [t.type for t in result.transactions] == ["Tip", "Sub"]


def test_crlf_line_endings():
    result = parse_transactions(TAB_ROWS.replace("\n", "\r\n"))
    assert len(result.transactions) == 2
    assert result.has_error is False


def test_multiline_reconstruction():
    raw = "\n".join(["Mar 1, 2024, 1:00pm", "$10.00", "$1.00", "$9.00", "Tip from Alice"])

    result = parse_transactions(raw)

    assert result.has_error is False
    assert len(result.transactions) == 1
    txn = result.transactions[0]
    assert txn.type == "Tip"
    assert txn.gross == Decimal("10.00")
    assert txn.net == Decimal("9.00")


def test_multiline_consumes_five_lines():
    raw = "\n".join([
        "Mar 1, 2024, 1:00pm", "$10.00", "$1.00", "$9.00", "Tip from Alice",
        "Mar 1, 2024, 2:00pm", "$20.50", "$4.10", "$16.40", "Payment for message from Bob",
    ])

    result = parse_transactions(raw)

    assert result.has_error is False
    assert [t.type for t in result.transactions] == ["Tip", "PPV"]


def test_multiline_without_description_fails_classification():
    raw = "\n".join(["Mar 1, 2024, 1:00pm", "$10.00", "$1.00", "$9.00"])

    result = parse_transactions(raw)

    assert result.transactions == []
    assert result.has_error is True
    assert result.failures[0].reason == "unclassified_description"


def test_mixed_layouts_keep_input_order():
    raw = "\n".join([
        "Mar 1, 2024, 3:00pm\t$4.00\t$0.80\t$3.20\tPost from Eve",
        "Mar 1, 2024, 1:00pm", "$10.00", "$1.00", "$9.00", "Tip from Alice",
        "Mar 1, 2024, 2:00pm\t$5.00\t$1.00\t$4.00\tRecurring subscription from Bob",
    ])

    result = parse_transactions(raw)

    assert [t.type for t in result.transactions] == ["Post", "Tip", "Resub"]


def test_garbage_line_taints_result():
    raw = TAB_ROWS.splitlines()[0] + "\nthis is not a transaction"

    result = parse_transactions(raw)

    assert len(result.transactions) == 1
    assert result.has_error is True
    assert len(result.failures) == 1
    failure = result.failures[0]
    assert failure.reason == "unrecognized_line"
    assert failure.line_number == 2
    assert failure.text == "this is not a transaction"


def test_unclassifiable_row_is_skipped_without_raising():
    raw = TAB_ROWS + "\nMar 1, 2024, 2:00 pm\t$5.00\t$1.00\t$4.00\tUnknown event XYZ"

    result = parse_transactions(raw)

    assert len(result.transactions) == 2
    assert result.has_error is True
    assert result.failures[0].reason == "unclassified_description"
    assert result.failures[0].line_number == 3


def test_date_line_without_money_lines_is_unrecognized():
    raw = "\n".join(["Mar 1, 2024, 1:00pm", "$10.00", "Tip from Alice"])

    result = parse_transactions(raw)

    assert result.transactions == []
    assert [f.reason for f in result.failures] == ["unrecognized_line"] * 3


def test_empty_input():
    result = parse_transactions("")

    assert result.transactions == []
    assert result.has_error is False


def test_whitespace_only_input():
    result = parse_transactions("  \n\t\n  ")

    assert result.transactions == []
    assert result.has_error is False
