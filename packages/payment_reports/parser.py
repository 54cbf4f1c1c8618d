"""Fixed-width payment report parsing.

Report files are a sequence of blocks. A header line containing
``PAYMENT DATE`` opens a block and supplies the context value (the payment
number) for the detail lines that follow it. Column positions are 0-based,
half-open and counted on the trimmed line:

==================  =========
field               columns
==================  =========
payment number      [14, 30)  (header line)
account number      [9, 27)
customer name       [26, 52)
reference number    [52, 58)
payment amount      [64, end)
==================  =========

A detail line whose account column does not validate is reported as rejected
when it starts with a ``YY/MM/DD`` date and silently skipped otherwise (blank
lines, page furniture, trailers).
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence
from os import PathLike
from pathlib import Path

from .accounts import classify
from .ingest.utils import read_report_lines
from .logging_setup import get_logger
from .models import HeaderStyle, ParseResult, PaymentRecord, RejectedLine, TransactionIndex
from .normalizers import is_date_prefixed, yymmdd_to_iso

HEADER_MARKER = "PAYMENT DATE"

PAYMENT_NUMBER_COLS = slice(14, 30)
ACCOUNT_COLS = slice(9, 27)
CUSTOMER_NAME_COLS = slice(26, 52)
REFERENCE_COLS = slice(52, 58)
AMOUNT_COLS = slice(64, None)

_logger = get_logger("payment_reports.parser")


class ParserState(enum.Enum):
    SEEKING_HEADER = "seeking_header"
    IN_BLOCK = "in_block"


def _deposit_date_from_header(line: str) -> str:
    # Older layout: "...: ... PAYMENT DATE: 24/01/15". The date is the third
    # colon-separated field, or the last one when the header has fewer.
    parts = line.split(":")
    field = parts[2] if len(parts) > 2 else parts[-1]
    tokens = field.split()
    raw = tokens[0] if tokens else ""
    return yymmdd_to_iso(raw) or raw.replace("/", "-")


def header_context(line: str, header_style: HeaderStyle = "payment-number") -> str:
    """Return the context value carried by a (trimmed) header line."""

    if header_style == "deposit-date":
        return _deposit_date_from_header(line)
    return line[PAYMENT_NUMBER_COLS].strip()


class ReportParser:
    """Walk report lines and collect payment records and rejected lines.

    One instance can parse many files; the header context never carries over
    from one file to the next. Records that precede any header get an empty
    payment number.
    """

    def __init__(
        self,
        index: TransactionIndex,
        *,
        header_style: HeaderStyle = "payment-number",
    ) -> None:
        self._index = index
        self._header_style = header_style

    def parse_lines(
        self,
        lines: Iterable[str],
        *,
        source: str = "",
        result: ParseResult | None = None,
    ) -> ParseResult:
        out = result if result is not None else ParseResult()
        state = ParserState.SEEKING_HEADER
        context = ""

        for line_number, raw in enumerate(lines, start=1):
            line = raw.strip()

            if HEADER_MARKER in line:
                context = header_context(line, self._header_style)
                state = ParserState.IN_BLOCK
                _logger.debug("%s:%d: header context %r", source, line_number, context)
                continue

            account_number = line[ACCOUNT_COLS].strip()
            parts = classify(account_number)
            if parts is not None:
                out.records.append(
                    PaymentRecord(
                        payment_number=context,
                        transaction_date=self._index.get(context),
                        account_number=account_number,
                        customer_name=line[CUSTOMER_NAME_COLS].strip(),
                        reference_number=line[REFERENCE_COLS].strip(),
                        payment_amount=line[AMOUNT_COLS].strip(),
                        city=parts.city,
                        donation_number=parts.donation_number,
                        donation_category=parts.donation_category,
                        source=source,
                        line_number=line_number,
                    )
                )
                if state is ParserState.SEEKING_HEADER:
                    _logger.debug("%s:%d: detail line before any header", source, line_number)
                continue

            if is_date_prefixed(line):
                out.rejected.append(
                    RejectedLine(
                        payment_number=context,
                        raw_line=raw.rstrip("\r\n"),
                        source=source,
                        line_number=line_number,
                    )
                )
                _logger.debug("%s:%d: rejected %r", source, line_number, line)

        return out

    def parse_file(
        self, path: str | PathLike[str], *, result: ParseResult | None = None
    ) -> ParseResult:
        p = Path(path)
        out = self.parse_lines(read_report_lines(p), source=p.name, result=result)
        out.files_parsed += 1
        return out


def parse_report_files(
    paths: Sequence[str | PathLike[str]],
    index: TransactionIndex,
    *,
    header_style: HeaderStyle = "payment-number",
) -> ParseResult:
    """Parse ``paths`` in order into a single :class:`ParseResult`.

    Any ``OSError`` while reading a file propagates: a listed file that cannot
    be read fails the run.
    """

    parser = ReportParser(index, header_style=header_style)
    result = ParseResult()
    total = len(paths)
    _logger.info("Parsing %d report file(s)", total)
    for n, path in enumerate(paths, start=1):
        records_before = len(result.records)
        rejected_before = len(result.rejected)
        parser.parse_file(path, result=result)
        _logger.info(
            "[%d/%d] %s: %d record(s), %d rejected line(s)",
            n,
            total,
            Path(path).name,
            len(result.records) - records_before,
            len(result.rejected) - rejected_before,
        )
    return result


__all__ = [
    "HEADER_MARKER",
    "ParserState",
    "ReportParser",
    "header_context",
    "parse_report_files",
]
