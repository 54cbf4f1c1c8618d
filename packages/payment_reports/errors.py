"""Exceptions raised by the reconciliation pipeline.

Filesystem failures surface as the builtin ``OSError`` family and malformed
transaction CSV headers as ``csv.Error``; only data the run cannot account for
gets a dedicated type.
"""

from __future__ import annotations


class ReportDataError(ValueError):
    """A parsed record carries a value the run cannot reconcile.

    ``source`` and ``line_number`` point at the offending report line so the
    problem can be fixed without re-running under a debugger.
    """

    def __init__(self, message: str, *, source: str, line_number: int) -> None:
        super().__init__(f"{source}:{line_number}: {message}")
        self.source = source
        self.line_number = line_number


__all__ = ["ReportDataError"]
