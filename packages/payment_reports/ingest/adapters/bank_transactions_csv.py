"""Adapter for bank transaction CSV exports.

CSV header (exact keys expected):
Account Number, Currency, Date, Description, Withdrawals, Deposits, Balance,
Backdated

Only ``Date`` and ``Description`` feed the transaction index, so those two are
required; the remaining columns are carried through as empty strings when a
bank leaves them out.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Iterator, Mapping
from os import PathLike
from pathlib import Path

from ...models import TransactionRecord

REQUIRED_COLUMNS: set[str] = {"Date", "Description"}


def _cell(row: Mapping[str, str | None], key: str) -> str:
    value = row.get(key)
    return value.strip() if value is not None else ""


def to_transaction_records(rows: Iterable[Mapping[str, str | None]]) -> Iterator[TransactionRecord]:
    """Convert CSV rows to :class:`TransactionRecord` values in input order.

    Blank rows (all cells empty) are skipped.
    """

    for row in rows:
        if all((v or "").strip() == "" for k, v in row.items() if k is not None):
            continue
        yield TransactionRecord(
            account_number=_cell(row, "Account Number"),
            currency=_cell(row, "Currency"),
            date=_cell(row, "Date"),
            description=_cell(row, "Description"),
            withdrawals=_cell(row, "Withdrawals"),
            deposits=_cell(row, "Deposits"),
            balance=_cell(row, "Balance"),
            backdated=_cell(row, "Backdated"),
        )


def load_transactions_csv(csv_path: str | PathLike[str]) -> list[TransactionRecord]:
    """Read one transaction export.

    Raises ``csv.Error`` when the header row is missing or lacks a required
    column, and lets ``OSError`` propagate when the file cannot be read.
    Invalid UTF-8 bytes decode to U+FFFD.
    """

    p = Path(csv_path)
    # utf-8-sig: bank exports frequently start with a BOM.
    with p.open(encoding="utf-8-sig", errors="replace", newline="") as f:
        reader = csv.DictReader(f)
        headers_set = {h.strip() for h in (reader.fieldnames or [])}
        if not headers_set:
            raise csv.Error(f"CSV appears to have no header row: {p}")
        missing = sorted(h for h in REQUIRED_COLUMNS if h not in headers_set)
        if missing:
            raise csv.Error(
                f"CSV header mismatch for transaction export {p.name}. Missing columns: "
                + ", ".join(missing)
            )
        reader.fieldnames = [h.strip() for h in reader.fieldnames or []]
        return list(to_transaction_records(reader))


__all__ = ["REQUIRED_COLUMNS", "load_transactions_csv", "to_transaction_records"]
