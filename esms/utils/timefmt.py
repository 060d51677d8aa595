"""Date and time helpers for the wire formats used by every register.

Dates travel as ``yyyy-MM-dd`` strings and times of day as ``HH:mm``.
"""
from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Any, Optional

HHMM_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def now_utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def today_iso() -> str:
    return date.today().isoformat()


def coerce_date(value: Any) -> Optional[date]:
    """Best-effort conversion of ``value`` to a ``date``.

    Accepts ``date``/``datetime`` objects and ISO strings; a full timestamp
    such as ``2024-05-01T00:00:00.000Z`` keeps only its date part.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def normalize_hhmm(value: Any) -> Optional[str]:
    """Return ``value`` as ``HH:mm`` or raise ``ValueError``."""

    if value is None:
        return None
    text = str(value).strip()
    if len(text) == 8 and text[5] == ":":
        # "14:30:00" from a time picker
        text = text[:5]
    if not HHMM_PATTERN.match(text):
        raise ValueError("Time must use the HH:mm format")
    return text


__all__ = [
    "now_utc_iso",
    "today_iso",
    "coerce_date",
    "normalize_hhmm",
]
