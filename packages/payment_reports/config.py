"""Run configuration.

Settings come from three layers, later ones winning:

1. defaults (``./reports``, ``./output``, ``./transactions``);
2. environment variables, after loading a local ``.env`` with
   ``python-dotenv`` (existing variables are never overridden);
3. explicit keyword overrides, typically CLI options.

Environment variables
---------------------
``PAYMENT_REPORTS_INPUT_DIR``, ``PAYMENT_REPORTS_OUTPUT_DIR``,
``PAYMENT_REPORTS_TRANSACTION_DIR``, ``PAYMENT_REPORTS_HEADER_STYLE``,
``PAYMENT_REPORTS_MAX_WORKERS``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from .models import HeaderStyle

_ENV_PREFIX = "PAYMENT_REPORTS_"
_MAX_WORKERS_CAP = 32


class ReportSettings(BaseModel):
    """Directories and knobs for a single reconciliation run."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    input_dir: Path = Path("reports")
    output_dir: Path = Path("output")
    transaction_dir: Path = Path("transactions")
    header_style: HeaderStyle = "payment-number"
    max_workers: int = 4

    @field_validator("max_workers")
    @classmethod
    def _cap_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_workers must be a positive integer")
        return min(v, _MAX_WORKERS_CAP)


_FIELDS: tuple[str, ...] = (
    "input_dir",
    "output_dir",
    "transaction_dir",
    "header_style",
    "max_workers",
)


def _from_env() -> dict[str, Any]:
    values: dict[str, Any] = {}
    for name in _FIELDS:
        raw = os.getenv(_ENV_PREFIX + name.upper())
        if raw is not None and raw.strip():
            values[name] = raw.strip()
    return values


def load_settings(*, dotenv: bool = True, **overrides: Any) -> ReportSettings:
    """Resolve :class:`ReportSettings` from ``.env``, the environment and ``overrides``.

    ``None`` overrides are ignored so optional CLI flags can be passed through
    unchanged. Invalid values raise ``pydantic.ValidationError``.
    """

    if dotenv:
        load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    values = _from_env()
    values.update({k: v for k, v in overrides.items() if v is not None})
    return ReportSettings.model_validate(values)


__all__ = ["ReportSettings", "load_settings"]
