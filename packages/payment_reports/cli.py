# ruff: noqa: I001
"""CLI for the ``payment_reports`` package.

A Typer-based console interface over :mod:`payment_reports.api`. Environment
variables are loaded from a local ``.env`` with ``python-dotenv`` before any
command runs, and logging is configured once in the root callback.

Exit status of ``run``: ``0`` on success, ``1`` when the run aborted (unreadable
input, malformed transaction export, invalid amount, invalid settings), ``2``
when the run finished but at least one output file could not be written or
the cross-check totals disagree.
"""

from __future__ import annotations

import csv
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from pydantic import ValidationError

from .logging_setup import configure_logging

EXIT_FATAL = 1
EXIT_PARTIAL = 2


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Reconcile fixed-width payment reports against bank transaction exports "
        "and write per-city, summary and rejection CSV reports."
    ),
)


def _fail(msg: str) -> typer.Exit:
    print(f"Error: {msg}", file=sys.stderr)
    return typer.Exit(EXIT_FATAL)


@app.command("run")
def run_cmd(
    *,
    input_dir: Path | None = typer.Option(
        None, help="Folder of .TXT payment reports (env PAYMENT_REPORTS_INPUT_DIR)."
    ),
    output_dir: Path | None = typer.Option(
        None, help="Folder for generated CSVs (env PAYMENT_REPORTS_OUTPUT_DIR)."
    ),
    transaction_dir: Path | None = typer.Option(
        None, help="Folder of .csv bank exports (env PAYMENT_REPORTS_TRANSACTION_DIR)."
    ),
    header_style: str | None = typer.Option(
        None,
        help="How to read report headers: 'payment-number' (default) or 'deposit-date'.",
    ),
    max_workers: int | None = typer.Option(
        None, help="Parallel output writers (env PAYMENT_REPORTS_MAX_WORKERS)."
    ),
) -> None:
    """Run the full pipeline and write every report."""

    from .config import load_settings
    from .errors import ReportDataError
    from .workflows.report_flow import run_reports

    try:
        settings = load_settings(
            input_dir=input_dir,
            output_dir=output_dir,
            transaction_dir=transaction_dir,
            header_style=header_style,
            max_workers=max_workers,
        )
    except ValidationError as e:
        raise _fail(f"invalid settings: {e}") from e

    try:
        result = run_reports(settings, on_progress=typer.echo)
    except FileNotFoundError as e:
        raise _fail(f"not found: {e.filename}") from e
    except PermissionError as e:
        raise _fail(f"permission denied: {e.filename}") from e
    except csv.Error as e:
        raise _fail(f"failed to parse transaction CSV: {e}") from e
    except ReportDataError as e:
        raise _fail(str(e)) from e
    except OSError as e:
        raise _fail(f"I/O failure: {e}") from e

    if not result.aggregate.totals_match:
        print(
            "Error: summary total "
            f"{result.aggregate.summary_total} != record total {result.aggregate.records_total}",
            file=sys.stderr,
        )
    for o in result.failed_writes:
        print(f"Error: failed to write {o.path}: {o.error}", file=sys.stderr)
    if not result.ok:
        raise typer.Exit(EXIT_PARTIAL)
    typer.echo("Data processing complete.")


@app.command("index-transactions")
def index_transactions_cmd(
    *,
    transaction_dir: Path | None = typer.Option(
        None, help="Folder of .csv bank exports (env PAYMENT_REPORTS_TRANSACTION_DIR)."
    ),
) -> None:
    """Print the payment number -> transaction date index, one tab-separated pair per line."""

    from .config import load_settings
    from .ingest.utils import load_transaction_dir
    from .transaction_index import build_transaction_index

    try:
        settings = load_settings(transaction_dir=transaction_dir)
        index = build_transaction_index(load_transaction_dir(settings.transaction_dir))
    except ValidationError as e:
        raise _fail(f"invalid settings: {e}") from e
    except csv.Error as e:
        raise _fail(f"failed to parse transaction CSV: {e}") from e
    except OSError as e:
        raise _fail(f"I/O failure: {e}") from e

    for payment_number in sorted(index):
        typer.echo(f"{payment_number}\t{index[payment_number]}")


@app.command("classify-account")
def classify_account_cmd(account_number: str) -> None:
    """Show how an account code splits into city, donation number and category."""

    from .accounts import classify

    parts = classify(account_number.strip())
    if parts is None:
        raise _fail(f"invalid account number: {account_number!r}")
    typer.echo(f"city\t{parts.city}")
    typer.echo(f"donation_number\t{parts.donation_number}")
    typer.echo(f"donation_category\t{parts.donation_category}")


@app.callback()
def _root(
    *,
    log_level: str | None = typer.Option(
        None, help="Log level (falls back to PAYMENT_REPORTS_LOG_LEVEL, then INFO)."
    ),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding
    variables already set) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
