"""Grouping of parsed payment records into per-city and per-payment views."""

from __future__ import annotations

import locale
from collections.abc import Iterable, Sequence
from decimal import Decimal

from .errors import ReportDataError
from .logging_setup import get_logger
from .models import AggregateResult, CityEntry, PaymentRecord, SummaryEntry
from .normalizers import to_decimal

_logger = get_logger("payment_reports.aggregate")


def record_amount(record: PaymentRecord) -> Decimal:
    try:
        return to_decimal(record.payment_amount)
    except ValueError as exc:
        raise ReportDataError(
            f"invalid payment amount {record.payment_amount!r}",
            source=record.source,
            line_number=record.line_number,
        ) from exc


class SummaryAccumulator:
    """Running per-payment-number totals.

    ``add`` folds one record in; ``entries`` returns the totals sorted by
    payment number using the active locale's collation.
    """

    def __init__(self) -> None:
        self._totals: dict[str, Decimal] = {}

    def add(self, payment_number: str, amount: Decimal) -> None:
        self._totals[payment_number] = self._totals.get(payment_number, Decimal(0)) + amount

    def entries(self) -> list[SummaryEntry]:
        keys = sorted(self._totals, key=locale.strxfrm)
        return [SummaryEntry(k, self._totals[k]) for k in keys]

    def __len__(self) -> int:
        return len(self._totals)


def group_by_city(records: Iterable[PaymentRecord]) -> dict[str, list[CityEntry]]:
    """City -> entries, both in first-seen order."""

    by_city: dict[str, list[CityEntry]] = {}
    for r in records:
        by_city.setdefault(r.city, []).append(
            CityEntry(
                donation_number=r.donation_number,
                payment_number=r.payment_number,
                payment_amount=r.payment_amount,
                donation_category=r.donation_category,
                customer_name=r.customer_name,
                transaction_date=r.transaction_date,
            )
        )
    return by_city


def summarize(
    records: Iterable[PaymentRecord], accumulator: SummaryAccumulator | None = None
) -> SummaryAccumulator:
    acc = accumulator if accumulator is not None else SummaryAccumulator()
    for r in records:
        acc.add(r.payment_number, record_amount(r))
    return acc


def aggregate(records: Sequence[PaymentRecord]) -> AggregateResult:
    """Build both grouped views and the cross-check totals.

    Raises :class:`ReportDataError` for an amount that is not a number. A
    mismatch between the two totals is logged and reported through
    :attr:`AggregateResult.totals_match`.
    """

    by_city = group_by_city(records)
    summary = summarize(records).entries()

    summary_total = sum((e.total_payment_amount for e in summary), Decimal(0))
    records_total = sum((record_amount(r) for r in records), Decimal(0))

    result = AggregateResult(
        by_city=by_city,
        summary=summary,
        summary_total=summary_total,
        records_total=records_total,
    )
    if result.totals_match:
        _logger.info(
            "Aggregated %d record(s) into %d city group(s) and %d payment number(s); total %s",
            len(records),
            len(by_city),
            len(summary),
            records_total,
        )
    else:
        _logger.error(
            "Total mismatch: summary total %s != record total %s",
            summary_total,
            records_total,
        )
    return result


__all__ = [
    "SummaryAccumulator",
    "aggregate",
    "group_by_city",
    "record_amount",
    "summarize",
]
