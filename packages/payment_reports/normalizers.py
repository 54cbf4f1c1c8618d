"""Amount and date normalization shared by the parser, index and writers.

Dates in both the report files and the bank exports use a two-digit year
followed by month and day (``YY/MM/DD``, or ``YY-MM-DD`` once separators have
been rewritten). Years are always read as ``20YY``.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

_YYMMDD_RE = re.compile(r"([0-9]{2})[/-]([0-9]{2})[/-]([0-9]{2})")
# Digits with optional well-formed thousands groups and an optional fraction.
_AMOUNT_RE = re.compile(r"(?:[0-9]{1,3}(?:,[0-9]{3})+|[0-9]+)(?:\.[0-9]+)?")
_CENTURY = 2000


def to_decimal(raw: str | None) -> Decimal:
    """Parse a report amount such as ``"1,234.50"`` or ``"-12.00"``.

    Only plain digits, comma thousands groups and a decimal fraction are
    accepted; exponents, underscores and misplaced commas raise ``ValueError``,
    as does empty text.
    """

    if raw is None:
        raise ValueError("amount is required")
    s = raw.strip()
    if not s:
        raise ValueError("amount is empty")

    negative = False
    if s.startswith("+"):
        s = s[1:].lstrip()
    elif s.startswith("-"):
        negative = True
        s = s[1:].lstrip()

    if _AMOUNT_RE.fullmatch(s) is None:
        raise ValueError(f"invalid amount: {raw!r}")

    try:
        d = Decimal(s.replace(",", ""))
    except InvalidOperation as exc:
        raise ValueError(f"invalid amount: {raw!r}") from exc
    return -d if negative else d


def fmt_amount(d: Decimal) -> str:
    # Exactly two decimals, no scientific notation.
    q = d.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{q:.2f}"


def parse_yymmdd(value: str | None) -> date | None:
    """Return the calendar date for ``YY/MM/DD`` text, or ``None``.

    Out-of-range months/days (``24/13/01``) count as unparseable.
    """

    if value is None:
        return None
    m = _YYMMDD_RE.fullmatch(value.strip())
    if m is None:
        return None
    yy, mm, dd = (int(g) for g in m.groups())
    try:
        return date(_CENTURY + yy, mm, dd)
    except ValueError:
        return None


def yymmdd_to_iso(value: str | None) -> str | None:
    d = parse_yymmdd(value)
    return d.isoformat() if d is not None else None


def is_date_prefixed(line: str) -> bool:
    """True when the first eight characters of ``line`` are a ``YY/MM/DD`` date."""

    return len(line) >= 8 and parse_yymmdd(line[:8]) is not None


__all__ = [
    "fmt_amount",
    "is_date_prefixed",
    "parse_yymmdd",
    "to_decimal",
    "yymmdd_to_iso",
]
