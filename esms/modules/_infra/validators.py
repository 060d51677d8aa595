"""Reusable pydantic field types for register payloads."""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, BeforeValidator

from esms.utils.timefmt import coerce_date, normalize_hhmm


def _not_blank(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("Field is required")
    return value.strip()


def _iso_date(value):
    if value is None or value == "":
        return None
    parsed = coerce_date(value)
    if parsed is None:
        raise ValueError("Date must use the yyyy-MM-dd format")
    return parsed.isoformat()


def _required_date(value):
    parsed = _iso_date(value)
    if parsed is None:
        raise ValueError("Field is required")
    return parsed


def _hhmm(value):
    if value is None or value == "":
        raise ValueError("Field is required")
    return normalize_hhmm(value)


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


def min_text(length: int):
    """Required text of at least ``length`` characters once stripped."""

    def check(value: str) -> str:
        value = _not_blank(value)
        if len(value) < length:
            raise ValueError(f"Must be at least {length} characters")
        return value

    return Annotated[str, AfterValidator(check)]


RequiredText = Annotated[str, AfterValidator(_not_blank)]
OptionalText = Annotated[str | None, BeforeValidator(_blank_to_none)]
IsoDate = Annotated[str, BeforeValidator(_required_date)]
OptionalIsoDate = Annotated[str | None, BeforeValidator(_iso_date)]
TimeOfDay = Annotated[str, BeforeValidator(_hhmm)]


def error_fields(errors, skip=("body", "query", "path")) -> dict:
    """Flatten pydantic error dicts into ``{field: message}``, first error wins."""
    fields: dict = {}
    for error in errors:
        name = ".".join(str(part) for part in error.get("loc", ()) if part not in skip) or "__all__"
        message = str(error.get("msg", "Invalid value"))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        fields.setdefault(name, message)
    return fields


__all__ = [
    "RequiredText",
    "OptionalText",
    "IsoDate",
    "OptionalIsoDate",
    "TimeOfDay",
    "min_text",
    "error_fields",
]
