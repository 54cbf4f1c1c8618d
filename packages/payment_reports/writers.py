"""CSV serialization of the aggregated reports.

Outputs written to the output directory:

- ``<CITY>_donations.csv``: one per city, rows in encounter order.
- ``summary.csv``: total payment amount per payment number, sorted.
- ``rejectedinput.csv``: raw lines that looked like detail lines but carried
  an invalid account code.

Each file is written to ``<name>.tmp`` and moved into place with
``os.replace``, so a failed write never leaves a truncated report behind.
Files are independent: one failure is logged and recorded, the rest are still
written.
"""

from __future__ import annotations

import contextlib
import csv
import os
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from .logging_setup import get_logger
from .models import AggregateResult, HeaderStyle, RejectedLine
from .normalizers import fmt_amount

SUMMARY_FILENAME = "summary.csv"
REJECTED_FILENAME = "rejectedinput.csv"
CITY_FILENAME_TEMPLATE = "{city}_donations.csv"

_logger = get_logger("payment_reports.writers")


@dataclass(frozen=True, slots=True)
class OutputFile:
    name: str
    header: tuple[str, ...]
    rows: list[tuple[str, ...]]


@dataclass(frozen=True, slots=True)
class WriteOutcome:
    name: str
    path: Path
    rows: int
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _key_column(header_style: HeaderStyle) -> str:
    return "DepositDate" if header_style == "deposit-date" else "PaymentNumber"


def build_outputs(
    aggregate: AggregateResult,
    rejected: Sequence[RejectedLine],
    *,
    header_style: HeaderStyle = "payment-number",
) -> list[OutputFile]:
    """Lay out every report as header + rows, without touching the disk."""

    deposit_style = header_style == "deposit-date"
    date_column = "DepositDate" if deposit_style else "TransactionDate"
    key_column = _key_column(header_style)

    outputs: list[OutputFile] = []
    for city, entries in aggregate.by_city.items():
        outputs.append(
            OutputFile(
                name=CITY_FILENAME_TEMPLATE.format(city=city),
                header=(
                    "DonationNumber",
                    date_column,
                    "PaymentAmount",
                    "DonationCategory",
                    "CustomerName",
                ),
                rows=[
                    (
                        e.donation_number,
                        e.payment_number if deposit_style else (e.transaction_date or ""),
                        e.payment_amount,
                        e.donation_category,
                        e.customer_name,
                    )
                    for e in entries
                ],
            )
        )

    outputs.append(
        OutputFile(
            name=SUMMARY_FILENAME,
            header=(key_column, "TotalPaymentAmount"),
            rows=[
                (e.payment_number, fmt_amount(e.total_payment_amount)) for e in aggregate.summary
            ],
        )
    )
    outputs.append(
        OutputFile(
            name=REJECTED_FILENAME,
            header=(key_column, "Line"),
            rows=[(r.payment_number, r.raw_line) for r in rejected],
        )
    )
    return outputs


def write_csv(path: Path, header: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp.open("w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(header)
            writer.writerows(rows)
        os.replace(tmp, path)
    except Exception:
        with contextlib.suppress(FileNotFoundError):
            tmp.unlink()
        raise


def _write_one(output_dir: Path, out: OutputFile) -> WriteOutcome:
    path = output_dir / out.name
    write_csv(path, out.header, out.rows)
    return WriteOutcome(name=out.name, path=path, rows=len(out.rows))


def write_reports(
    output_dir: str | PathLike[str],
    outputs: Sequence[OutputFile],
    *,
    max_workers: int = 4,
) -> list[WriteOutcome]:
    """Write ``outputs`` into ``output_dir`` and report one outcome per file.

    Creating ``output_dir`` is the only fatal step (its ``OSError``
    propagates). Individual file failures are logged and returned as outcomes
    with ``error`` set. Outcomes follow the order of ``outputs``.
    """

    d = Path(output_dir)
    d.mkdir(parents=True, exist_ok=True)

    if not outputs:
        return []

    workers = max(1, min(max_workers, len(outputs)))
    outcomes: dict[int, WriteOutcome] = {}
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pr-write") as ex:
        fut_to_idx = {ex.submit(_write_one, d, out): i for i, out in enumerate(outputs)}
        for fut in as_completed(fut_to_idx):
            i = fut_to_idx[fut]
            out = outputs[i]
            try:
                outcome = fut.result()
            except Exception as e:  # noqa: BLE001
                _logger.error("Failed to write %s: %s", d / out.name, e)
                outcome = WriteOutcome(name=out.name, path=d / out.name, rows=0, error=str(e))
            outcomes[i] = outcome

    return [outcomes[i] for i in range(len(outputs))]


__all__ = [
    "CITY_FILENAME_TEMPLATE",
    "OutputFile",
    "REJECTED_FILENAME",
    "SUMMARY_FILENAME",
    "WriteOutcome",
    "build_outputs",
    "write_csv",
    "write_reports",
]
