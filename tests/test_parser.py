from pathlib import Path

import pytest

from payment_reports.models import PaymentRecord, RejectedLine
from payment_reports.parser import ReportParser, header_context, parse_report_files

from tests.helpers.reports import detail_line, header_line, write_report


def test_header_payment_number_is_read_from_fixed_columns():
    line = header_line("000123")
    assert line[14:30].strip() == "000123"
    assert header_context(line) == "000123"


def test_valid_detail_line_becomes_payment_record():
    lines = [
        header_line("000123"),
        detail_line("ABC12345XY", name="JANE DOE", ref="R00042", amount="1,250.00"),
    ]
    result = ReportParser({"000123": "2024-01-20"}).parse_lines(lines, source="A.TXT")

    assert result.rejected == []
    assert result.records == [
        PaymentRecord(
            payment_number="000123",
            transaction_date="2024-01-20",
            account_number="ABC12345XY",
            customer_name="JANE DOE",
            reference_number="R00042",
            payment_amount="1,250.00",
            city="ABC",
            donation_number="12345",
            donation_category="XY",
            source="A.TXT",
            line_number=2,
        )
    ]


def test_surrounding_whitespace_is_trimmed_before_slicing():
    lines = ["   " + header_line("000123") + "  \r", "\t" + detail_line("ABC12345XY") + "   \r"]
    (rec,) = ReportParser({}).parse_lines(lines).records
    assert rec.payment_number == "000123"
    assert rec.account_number == "ABC12345XY"
    assert rec.payment_amount == "10.00"


def test_unknown_payment_number_leaves_transaction_date_unresolved():
    lines = [header_line("999999"), detail_line("ABC12345XY")]
    (rec,) = ReportParser({"000123": "2024-01-20"}).parse_lines(lines).records
    assert rec.transaction_date is None


def test_context_switches_at_each_header():
    lines = [
        header_line("000001"),
        detail_line("ABC12345XY", amount="1.00"),
        header_line("000002"),
        detail_line("DEF54321GEN", amount="2.00"),
        detail_line("abc11111xy", amount="3.00"),
    ]
    records = ReportParser({}).parse_lines(lines).records
    assert [(r.payment_number, r.city, r.payment_amount) for r in records] == [
        ("000001", "ABC", "1.00"),
        ("000002", "DEF", "2.00"),
        ("000002", "ABC", "3.00"),
    ]


def test_invalid_account_with_date_prefix_is_rejected():
    bad = detail_line("AB1234XYZ", prefix="24/01/15")
    result = ReportParser({}).parse_lines([header_line("000123"), bad], source="R.TXT")
    assert result.records == []
    assert result.rejected == [
        RejectedLine(payment_number="000123", raw_line=bad, source="R.TXT", line_number=2)
    ]


def test_invalid_account_without_date_prefix_is_dropped():
    lines = [
        header_line("000123"),
        detail_line("AB1234XYZ", prefix="TOTAL"),
        "",
        "END OF REPORT",
        "24/13/15 NOT A REAL DATE",
    ]
    result = ReportParser({}).parse_lines(lines)
    assert result.records == []
    assert result.rejected == []


def test_valid_account_on_date_prefixed_line_is_a_record_not_a_reject():
    result = ReportParser({}).parse_lines([detail_line("ABC12345XY", prefix="24/01/15")])
    assert len(result.records) == 1
    assert result.rejected == []


def test_every_rejected_line_appears_once_with_active_context():
    rejects_a = [detail_line(f"BAD{n}", prefix="24/01/15") for n in range(3)]
    rejects_b = [detail_line("XX", prefix="24/02/01")]
    lines = [header_line("A"), *rejects_a, detail_line("ABC12345XY"), header_line("B"), *rejects_b]

    rejected = ReportParser({}).parse_lines(lines).rejected
    assert [r.raw_line for r in rejected] == rejects_a + rejects_b
    assert [r.payment_number for r in rejected] == ["A", "A", "A", "B"]


def test_records_before_any_header_get_empty_context():
    result = ReportParser({"": "2024-01-01"}).parse_lines([detail_line("ABC12345XY")])
    (rec,) = result.records
    assert rec.payment_number == ""


def test_context_does_not_carry_across_files(tmp_path: Path):
    d = tmp_path / "reports"
    a = write_report(d, "A.TXT", [header_line("000123"), detail_line("ABC12345XY")])
    b = write_report(d, "B.TXT", [detail_line("DEF12345XY")])

    result = parse_report_files([a, b], {})
    assert result.files_parsed == 2
    assert [(r.source, r.payment_number) for r in result.records] == [
        ("A.TXT", "000123"),
        ("B.TXT", ""),
    ]


def test_non_utf8_bytes_are_replaced_without_shifting_columns(tmp_path: Path):
    d = tmp_path / "reports"
    d.mkdir()
    p = d / "LATIN1.TXT"
    lines = [header_line("000123"), detail_line("ABC12345XY", name="JOSÉ NUÑEZ", amount="10.00")]
    p.write_bytes(("\n".join(lines) + "\n").encode("latin-1"))

    result = parse_report_files([p], {})

    (rec,) = result.records
    assert rec.customer_name == "JOS\ufffd NU\ufffdEZ"
    assert rec.reference_number == "R00001"
    assert rec.payment_amount == "10.00"


def test_unreadable_report_file_is_fatal(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        parse_report_files([tmp_path / "missing.TXT"], {})


def test_deposit_date_header_style_reads_date_after_second_colon():
    lines = [
        "RUN DATE: 24/01/16     PAYMENT DATE: 24/01/15",
        detail_line("ABC12345XY"),
    ]
    (rec,) = ReportParser({}, header_style="deposit-date").parse_lines(lines).records
    assert rec.payment_number == "2024-01-15"


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("PAYMENT DATE: 24/01/15", "2024-01-15"),
        ("RUN: X PAYMENT DATE: 24/01/15 PAGE 1", "2024-01-15"),
        ("RUN: X PAYMENT DATE: 2024/01/15", "2024-01-15"),
        ("RUN: X PAYMENT DATE: JAN/15", "JAN-15"),
        ("RUN: X PAYMENT DATE:", ""),
    ],
)
def test_deposit_date_header_fallbacks(line: str, expected: str):
    assert header_context(line, "deposit-date") == expected
