"""End-to-end reconciliation run.

``run_reports`` composes the ingest, index, parse, aggregate and write steps
behind one call. Nothing here runs at import time; the CLI (or any other
caller) builds a :class:`~payment_reports.config.ReportSettings` and invokes
it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..aggregate import aggregate
from ..config import ReportSettings
from ..ingest.utils import REPORT_SUFFIX, list_files, load_transaction_dir
from ..logging_setup import get_logger
from ..models import AggregateResult, ParseResult
from ..parser import parse_report_files
from ..transaction_index import build_transaction_index
from ..writers import WriteOutcome, build_outputs, write_reports

_logger = get_logger("payment_reports.workflows.report_flow")


@dataclass(frozen=True, slots=True)
class RunResult:
    """What a run produced, for callers that decide on exit status."""

    parse: ParseResult
    aggregate: AggregateResult
    index_size: int
    outcomes: list[WriteOutcome]

    @property
    def failed_writes(self) -> list[WriteOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.failed_writes and self.aggregate.totals_match


def run_reports(
    settings: ReportSettings,
    *,
    on_progress: Callable[[str], None] | None = None,
) -> RunResult:
    """Read transactions and reports, then write every output report.

    Raises ``OSError`` when an input directory or file cannot be read or the
    output directory cannot be created, ``csv.Error`` for a transaction export
    without the required columns, and
    :class:`~payment_reports.errors.ReportDataError` for a non-numeric payment
    amount. Failures writing individual output files do not raise; they are
    listed in :attr:`RunResult.failed_writes`.
    """

    def progress(msg: str) -> None:
        _logger.info(msg)
        if on_progress:
            on_progress(msg)

    transactions = load_transaction_dir(settings.transaction_dir)
    index = build_transaction_index(transactions)
    progress(f"Indexed {len(index)} payment number(s) from {len(transactions)} transaction(s)")

    report_files = list_files(settings.input_dir, REPORT_SUFFIX)
    progress(f"Found {len(report_files)} report file(s) in {settings.input_dir}")
    parsed = parse_report_files(report_files, index, header_style=settings.header_style)
    progress(f"Parsed {len(parsed.records)} record(s), {len(parsed.rejected)} rejected line(s)")

    summary = aggregate(parsed.records)
    outputs = build_outputs(summary, parsed.rejected, header_style=settings.header_style)
    outcomes = write_reports(settings.output_dir, outputs, max_workers=settings.max_workers)

    # Failures are already logged by write_reports.
    for o in outcomes:
        if o.ok:
            progress(f"Generated {o.name} at {o.path}")
        elif on_progress:
            on_progress(f"Failed to write {o.name}: {o.error}")

    result = RunResult(
        parse=parsed,
        aggregate=summary,
        index_size=len(index),
        outcomes=outcomes,
    )
    _logger.info("Data processing complete.")
    return result


__all__ = ["RunResult", "run_reports"]
