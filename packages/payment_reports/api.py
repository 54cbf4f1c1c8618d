"""Public API for the ``payment_reports`` package.

A stable import surface over the pipeline modules; the implementations live
in ``accounts``, ``transaction_index``, ``parser``, ``aggregate``, ``writers``
and ``workflows.report_flow``.
"""

from __future__ import annotations

from .accounts import classify, is_valid_account_number  # noqa: F401  (re-export)
from .aggregate import SummaryAccumulator, aggregate  # noqa: F401  (re-export)
from .config import ReportSettings, load_settings  # noqa: F401  (re-export)
from .parser import ReportParser, parse_report_files  # noqa: F401  (re-export)
from .transaction_index import build_transaction_index  # noqa: F401  (re-export)
from .workflows.report_flow import RunResult, run_reports  # noqa: F401  (re-export)
from .writers import build_outputs, write_reports  # noqa: F401  (re-export)

__all__ = [
    "ReportParser",
    "ReportSettings",
    "RunResult",
    "SummaryAccumulator",
    "aggregate",
    "build_outputs",
    "build_transaction_index",
    "classify",
    "is_valid_account_number",
    "load_settings",
    "parse_report_files",
    "run_reports",
    "write_reports",
]
