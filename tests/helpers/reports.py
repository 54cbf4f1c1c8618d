"""Builders for fixed-width report lines and input folders used across tests."""

from __future__ import annotations

import textwrap
from collections.abc import Iterable
from pathlib import Path

TRANSACTION_HEADER = (
    "Account Number,Currency,Date,Description,Withdrawals,Deposits,Balance,Backdated"
)


def dedent(s: str) -> str:
    # Keep internal newlines, but normalize indentation for readability.
    return textwrap.dedent(s).lstrip("\n").rstrip()


def detail_line(
    account: str,
    *,
    name: str = "JANE DOE",
    ref: str = "R00001",
    amount: str = "10.00",
    prefix: str = "0001",
) -> str:
    """Lay out a detail line so each field lands in its report columns.

    account [9, 27) (column 26 left blank), name [27, 52), reference [52, 58),
    amount [64, end).
    """

    return (
        prefix.ljust(9)
        + account.ljust(17)
        + " "
        + name.ljust(25)
        + ref.ljust(6)
        + " " * 6
        + amount
    )


def header_line(payment_number: str, *, payment_date: str = "24/01/15") -> str:
    """Header with the payment number in columns [14, 30)."""

    return "BATCH NUMBER: " + payment_number.ljust(16) + "PAYMENT DATE: " + payment_date


def write_report(directory: Path, name: str, lines: Iterable[str]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    p = directory / name
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return p


def write_transactions(directory: Path, name: str, rows: Iterable[tuple[str, str]]) -> Path:
    """Write a bank export from ``(date, description)`` pairs."""

    directory.mkdir(parents=True, exist_ok=True)
    body = [TRANSACTION_HEADER]
    for date, description in rows:
        body.append(f"1234567,CAD,{date},{description},,100.00,1000.00,N")
    p = directory / name
    p.write_text("\n".join(body) + "\n", encoding="utf-8")
    return p
