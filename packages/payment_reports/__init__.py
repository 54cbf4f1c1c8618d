"""Public interface for the ``payment_reports`` package.

Re-exports the pipeline entry points and the record types. There is no runtime
logic here, only symbol re-exports.
"""

from .api import (
    ReportParser,
    ReportSettings,
    RunResult,
    SummaryAccumulator,
    aggregate,
    build_outputs,
    build_transaction_index,
    classify,
    is_valid_account_number,
    load_settings,
    parse_report_files,
    run_reports,
    write_reports,
)
from .errors import ReportDataError
from .models import (
    AccountParts,
    AggregateResult,
    CityEntry,
    ParseResult,
    PaymentRecord,
    RejectedLine,
    SummaryEntry,
    TransactionRecord,
)

__all__ = [
    # API
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
    # Models / errors
    "AccountParts",
    "AggregateResult",
    "CityEntry",
    "ParseResult",
    "PaymentRecord",
    "RejectedLine",
    "ReportDataError",
    "SummaryEntry",
    "TransactionRecord",
]
