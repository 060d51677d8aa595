"""Conditional-visibility rules shared by the REST schemas and the form controllers.

A rule says that ``field`` is only shown while the enum ``governed_by`` holds
one of ``shown_when``. Hidden values are cleared rather than kept around.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping


def _raw(value: Any) -> Any:
    return getattr(value, "value", value)


@dataclass(frozen=True)
class VisibilityRule:
    field: str
    governed_by: str
    shown_when: frozenset

    @classmethod
    def when(cls, field: str, governed_by: str, *values: str) -> "VisibilityRule":
        return cls(field=field, governed_by=governed_by, shown_when=frozenset(values))

    def is_visible(self, values: Mapping[str, Any]) -> bool:
        return _raw(values.get(self.governed_by)) in self.shown_when


def hidden_fields(rules: Iterable[VisibilityRule], values: Mapping[str, Any]) -> list[str]:
    return [rule.field for rule in rules if not rule.is_visible(values)]


def blank_hidden(model, rules: Iterable[VisibilityRule]):
    """Set hidden fields of a pydantic model instance to ``None`` and return it."""
    values = {name: getattr(model, name, None) for name in type(model).model_fields}
    for name in hidden_fields(rules, values):
        if getattr(model, name, None) is not None:
            setattr(model, name, None)
    return model


__all__ = ["VisibilityRule", "hidden_fields", "blank_hidden"]
