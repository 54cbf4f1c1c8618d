"""Folder scanning and file loading shared by the workflow and CLI commands."""

from __future__ import annotations

from os import PathLike
from pathlib import Path

from ..logging_setup import get_logger
from ..models import TransactionRecord

REPORT_SUFFIX = ".TXT"
TRANSACTION_SUFFIX = ".csv"

_logger = get_logger("payment_reports.ingest")


def list_files(directory: str | PathLike[str], suffix: str) -> list[Path]:
    """Return regular files in ``directory`` whose suffix equals ``suffix``.

    The comparison is case-sensitive and the result is sorted by file name so
    repeated runs see the inputs in the same order. A missing or unreadable
    directory raises ``OSError``.
    """

    d = Path(directory)
    return sorted(
        (p for p in d.iterdir() if p.suffix == suffix and p.is_file()),
        key=lambda p: p.name,
    )


def read_report_lines(path: str | PathLike[str]) -> list[str]:
    """Read a report file and split it on ``\\n``; lines are not trimmed here.

    Bytes that are not valid UTF-8 decode to U+FFFD, one character per bad
    byte, so single-byte legacy text keeps its column positions.
    """

    return Path(path).read_text(encoding="utf-8", errors="replace").split("\n")


def load_transaction_dir(directory: str | PathLike[str]) -> list[TransactionRecord]:
    """Concatenate the records of every ``.csv`` export in ``directory``."""

    from .adapters.bank_transactions_csv import load_transactions_csv

    files = list_files(directory, TRANSACTION_SUFFIX)
    _logger.info("Found %d transaction file(s) in %s", len(files), directory)
    records: list[TransactionRecord] = []
    for p in files:
        loaded = load_transactions_csv(p)
        _logger.info("Read %d transaction row(s) from %s", len(loaded), p.name)
        records.extend(loaded)
    return records


__all__ = [
    "REPORT_SUFFIX",
    "TRANSACTION_SUFFIX",
    "list_files",
    "load_transaction_dir",
    "read_report_lines",
]
