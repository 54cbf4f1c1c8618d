"""Account code validation and decomposition.

An account code is three letters (the city), five digits (the donation
number) and one or more letters (the donation category), e.g.
``ABC12345XY``. City and category are normalized to upper case so that
``abc12345xy`` and ``ABC12345XY`` land in the same output group.
"""

from __future__ import annotations

import re

from .models import AccountParts

_CITY_RE = re.compile(r"[A-Za-z]{3}")
_NUMBER_RE = re.compile(r"[0-9]{5}")
_CATEGORY_RE = re.compile(r"[A-Za-z]+")

CITY_LEN = 3
NUMBER_END = 8


def is_valid_account_number(account_number: str) -> bool:
    if len(account_number) <= NUMBER_END:
        return False
    return (
        _CITY_RE.fullmatch(account_number[:CITY_LEN]) is not None
        and _NUMBER_RE.fullmatch(account_number[CITY_LEN:NUMBER_END]) is not None
        and _CATEGORY_RE.fullmatch(account_number[NUMBER_END:]) is not None
    )


def classify(account_number: str) -> AccountParts | None:
    """Split ``account_number`` into its parts, or return ``None`` when invalid.

    ``None`` is a routing signal for the caller, not an error.
    """

    if not is_valid_account_number(account_number):
        return None
    return AccountParts(
        city=account_number[:CITY_LEN].upper(),
        donation_number=account_number[CITY_LEN:NUMBER_END],
        donation_category=account_number[NUMBER_END:].upper(),
    )


__all__ = ["classify", "is_valid_account_number"]
