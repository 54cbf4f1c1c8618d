"""Payment number -> transaction date index built from bank exports.

Bank lines that settle a payment batch carry an ``EDI`` or ``BPY`` token in
their description, followed by the payment number from offset 4 onwards
(``"BPY 000123"``). Every other bank line is irrelevant to the reports.
"""

from __future__ import annotations

from collections.abc import Iterable

from .logging_setup import get_logger
from .models import TransactionRecord
from .normalizers import yymmdd_to_iso

PAYMENT_TOKENS: tuple[str, ...] = ("EDI", "BPY")
PAYMENT_NUMBER_OFFSET = 4

_logger = get_logger("payment_reports.transaction_index")


def is_payment_description(description: str) -> bool:
    return any(token in description for token in PAYMENT_TOKENS)


def payment_number_from_description(description: str) -> str:
    return description[PAYMENT_NUMBER_OFFSET:].strip()


def build_transaction_index(records: Iterable[TransactionRecord]) -> dict[str, str]:
    """Map payment numbers to ISO transaction dates.

    Dates are read as ``YY/MM/DD`` (or ``YY-MM-DD``). Records with a date that
    does not parse, or with nothing after the token, are skipped. When the same
    payment number appears more than once the last record wins.
    """

    index: dict[str, str] = {}
    skipped_dates = 0
    for rec in records:
        if not is_payment_description(rec.description):
            continue
        payment_number = payment_number_from_description(rec.description)
        if not payment_number:
            _logger.debug("No payment number in description %r", rec.description)
            continue
        iso = yymmdd_to_iso(rec.date.replace("/", "-"))
        if iso is None:
            skipped_dates += 1
            _logger.debug("Unparseable date %r for payment %s", rec.date, payment_number)
            continue
        index[payment_number] = iso

    if skipped_dates:
        _logger.warning("Skipped %d payment transaction(s) with unparseable dates", skipped_dates)
    _logger.info("Indexed %d payment number(s)", len(index))
    return index


__all__ = [
    "PAYMENT_TOKENS",
    "build_transaction_index",
    "is_payment_description",
    "payment_number_from_description",
]
