"""Data models and type aliases for ``payment_reports``.

Records are frozen dataclasses with string fields so they stay CSV-friendly;
amounts are kept as the exact text read from the report and only parsed to
``Decimal`` during aggregation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal, TypeAlias

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

TransactionIndex: TypeAlias = Mapping[str, str]
"""Payment number -> transaction date (``YYYY-MM-DD``)."""

HeaderStyle: TypeAlias = Literal["payment-number", "deposit-date"]
"""How the context value is read from a ``PAYMENT DATE`` header line.

``"payment-number"`` reads the fixed columns ``[14, 30)``; ``"deposit-date"``
reads the date after the header's second colon (older report layout).
"""


# ---------------------------------------------------------------------------
# Input-side records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """One row of a bank transaction export. Only used to build the index."""

    account_number: str
    currency: str
    date: str
    description: str
    withdrawals: str
    deposits: str
    balance: str
    backdated: str


@dataclass(frozen=True, slots=True)
class AccountParts:
    """Decomposition of a valid account code."""

    city: str
    donation_number: str
    donation_category: str

    @property
    def canonical(self) -> str:
        return f"{self.city}{self.donation_number}{self.donation_category}"


@dataclass(frozen=True, slots=True)
class PaymentRecord:
    """A detail line that passed account validation.

    ``payment_number`` is the header context active when the line was read
    (a deposit date under the ``"deposit-date"`` header style).
    ``transaction_date`` is ``None`` when the transaction index has no entry
    for that payment number.
    """

    payment_number: str
    transaction_date: str | None
    account_number: str
    customer_name: str
    reference_number: str
    payment_amount: str
    city: str
    donation_number: str
    donation_category: str
    source: str = ""
    line_number: int = 0


@dataclass(frozen=True, slots=True)
class RejectedLine:
    """A date-prefixed line whose account column did not validate."""

    payment_number: str
    raw_line: str
    source: str = ""
    line_number: int = 0


@dataclass(slots=True)
class ParseResult:
    records: list[PaymentRecord] = field(default_factory=list)
    rejected: list[RejectedLine] = field(default_factory=list)
    files_parsed: int = 0


# ---------------------------------------------------------------------------
# Aggregation outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class CityEntry:
    """One row of a ``<CITY>_donations.csv`` report."""

    donation_number: str
    payment_number: str
    payment_amount: str
    donation_category: str
    customer_name: str
    transaction_date: str | None


@dataclass(frozen=True, slots=True)
class SummaryEntry:
    payment_number: str
    total_payment_amount: Decimal


@dataclass(frozen=True, slots=True)
class AggregateResult:
    """Grouped views of the parsed records plus the cross-check totals.

    ``summary_total`` is the sum over ``summary`` and ``records_total`` the sum
    over the individual records; they differ only when grouping lost or
    duplicated a record.
    """

    by_city: Mapping[str, list[CityEntry]]
    summary: list[SummaryEntry]
    summary_total: Decimal
    records_total: Decimal

    @property
    def totals_match(self) -> bool:
        return self.summary_total == self.records_total


__all__ = [
    "AccountParts",
    "AggregateResult",
    "CityEntry",
    "HeaderStyle",
    "ParseResult",
    "PaymentRecord",
    "RejectedLine",
    "SummaryEntry",
    "TransactionIndex",
    "TransactionRecord",
]
