"""Significance rating of an environmental or social impact.

The rating is looked up from the intensity of the impact and the probability
of it happening. One cell of the matrix (LOW intensity, DEFINITE probability)
has never been assigned a rating; it is reported as ``UNCLASSIFIED`` so it
cannot be mistaken for an assessment that is still missing an input.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class _AliasedEnum(str, Enum):
    """String enum that also accepts the Portuguese codes of older records."""

    @classmethod
    def _missing_(cls, value: Any):
        if isinstance(value, str):
            key = value.strip().upper()
            alias = cls._aliases().get(key)
            if alias is not None:
                return cls(alias)
            if key in cls.__members__:
                return cls.__members__[key]
        return None

    @classmethod
    def _aliases(cls) -> dict:
        return {}


class Intensity(_AliasedEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @classmethod
    def _aliases(cls) -> dict:
        return {"BAIXA": "LOW", "MEDIA": "MEDIUM", "MÉDIA": "MEDIUM", "ALTA": "HIGH"}


class Probability(_AliasedEnum):
    UNLIKELY = "UNLIKELY"
    LIKELY = "LIKELY"
    HIGHLY_LIKELY = "HIGHLY_LIKELY"
    DEFINITE = "DEFINITE"

    @classmethod
    def _aliases(cls) -> dict:
        return {
            "IMPROVAVEL": "UNLIKELY",
            "PROVAVEL": "LIKELY",
            "ALTAMENTE_PROVAVEL": "HIGHLY_LIKELY",
            "DEFINITIVA": "DEFINITE",
        }


class Significance(str, Enum):
    NONE = "NONE"
    LOW_SIGNIFICANCE = "LOW_SIGNIFICANCE"
    SIGNIFICANT = "SIGNIFICANT"
    VERY_SIGNIFICANT = "VERY_SIGNIFICANT"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


class ClassificationState(str, Enum):
    PENDING = "PENDING"
    UNCLASSIFIED = "UNCLASSIFIED"
    CLASSIFIED = "CLASSIFIED"


_LABELS = {
    Significance.NONE: "",
    Significance.LOW_SIGNIFICANCE: "Pouco Significativo",
    Significance.SIGNIFICANT: "Significativo",
    Significance.VERY_SIGNIFICANT: "Muito Significativo",
}

_SEVERITY = {
    Significance.NONE: 0,
    Significance.LOW_SIGNIFICANCE: 1,
    Significance.SIGNIFICANT: 2,
    Significance.VERY_SIGNIFICANT: 3,
}

# (LOW, DEFINITE) is intentionally absent.
SIGNIFICANCE_MATRIX = {
    (Intensity.LOW, Probability.UNLIKELY): Significance.LOW_SIGNIFICANCE,
    (Intensity.LOW, Probability.LIKELY): Significance.LOW_SIGNIFICANCE,
    (Intensity.LOW, Probability.HIGHLY_LIKELY): Significance.SIGNIFICANT,
    (Intensity.MEDIUM, Probability.UNLIKELY): Significance.LOW_SIGNIFICANCE,
    (Intensity.MEDIUM, Probability.LIKELY): Significance.SIGNIFICANT,
    (Intensity.MEDIUM, Probability.HIGHLY_LIKELY): Significance.SIGNIFICANT,
    (Intensity.MEDIUM, Probability.DEFINITE): Significance.VERY_SIGNIFICANT,
    (Intensity.HIGH, Probability.UNLIKELY): Significance.SIGNIFICANT,
    (Intensity.HIGH, Probability.LIKELY): Significance.SIGNIFICANT,
    (Intensity.HIGH, Probability.HIGHLY_LIKELY): Significance.VERY_SIGNIFICANT,
    (Intensity.HIGH, Probability.DEFINITE): Significance.VERY_SIGNIFICANT,
}


def _coerce(enum_cls, value: Any):
    if value is None:
        return None
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        return None


def classify(intensity: Any, probability: Any) -> Significance:
    """Return the significance for the pair, or ``NONE`` when it has none.

    Never raises: missing or unknown ratings yield ``NONE``.
    """
    i = _coerce(Intensity, intensity)
    p = _coerce(Probability, probability)
    if i is None or p is None:
        return Significance.NONE
    return SIGNIFICANCE_MATRIX.get((i, p), Significance.NONE)


def classification_state(intensity: Any, probability: Any) -> ClassificationState:
    i = _coerce(Intensity, intensity)
    p = _coerce(Probability, probability)
    if i is None or p is None:
        return ClassificationState.PENDING
    if (i, p) not in SIGNIFICANCE_MATRIX:
        return ClassificationState.UNCLASSIFIED
    return ClassificationState.CLASSIFIED


__all__ = [
    "Intensity",
    "Probability",
    "Significance",
    "ClassificationState",
    "SIGNIFICANCE_MATRIX",
    "classify",
    "classification_state",
]
