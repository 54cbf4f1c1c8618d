from datetime import date
from decimal import Decimal

import pytest

from payment_reports.normalizers import (
    fmt_amount,
    is_date_prefixed,
    parse_yymmdd,
    to_decimal,
    yymmdd_to_iso,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("10.00", Decimal("10.00")),
        (" 1,234.50 ", Decimal("1234.50")),
        ("-12.5", Decimal("-12.5")),
        ("+7", Decimal("7")),
        ("1,234,567", Decimal("1234567")),
        ("999", Decimal("999")),
    ],
)
def test_to_decimal_accepts_report_amounts(raw: str, expected: Decimal):
    assert to_decimal(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "   ",
        "abc",
        "12.00CR",
        "NaN",
        "Infinity",
        "1_000",
        "1e3",
        "1,2,3",
        "1234,567.00",
        ",100",
        "10.",
        ".50",
        "--5",
    ],
)
def test_to_decimal_rejects_non_numeric(raw):
    with pytest.raises(ValueError):
        to_decimal(raw)


def test_fmt_amount_rounds_to_cents():
    assert fmt_amount(Decimal("25")) == "25.00"
    assert fmt_amount(Decimal("0.005")) == "0.01"
    assert fmt_amount(Decimal("-3.1")) == "-3.10"


def test_two_digit_years_are_twenty_first_century():
    assert parse_yymmdd("24/01/15") == date(2024, 1, 15)
    assert parse_yymmdd("99-12-31") == date(2099, 12, 31)
    assert yymmdd_to_iso("00/02/29") == "2000-02-29"


@pytest.mark.parametrize("value", [None, "", "24/13/01", "24/02/30", "2024/01/15", "24.01.15", "1/2/3"])
def test_unparseable_dates(value):
    assert parse_yymmdd(value) is None
    assert yymmdd_to_iso(value) is None


def test_is_date_prefixed_looks_at_first_eight_chars():
    assert is_date_prefixed("24/01/15 ANYTHING")
    assert is_date_prefixed("24/01/15")
    assert not is_date_prefixed("24/01/1")
    assert not is_date_prefixed("TOTAL    ABC")
    assert not is_date_prefixed("24/13/15 BAD MONTH")
