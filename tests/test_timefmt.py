from __future__ import annotations

from datetime import date, datetime

import pytest

from esms.utils.timefmt import coerce_date, normalize_hhmm


def test_coerce_date_accepts_common_shapes():
    assert coerce_date("2024-05-01") == date(2024, 5, 1)
    assert coerce_date("2024-05-01T00:00:00.000Z") == date(2024, 5, 1)
    assert coerce_date(datetime(2024, 5, 1, 13, 0)) == date(2024, 5, 1)
    assert coerce_date("") is None
    assert coerce_date("01/05/2024") is None


@pytest.mark.parametrize("raw,expected", [("08:05", "08:05"), ("23:59", "23:59"), ("14:30:00", "14:30")])
def test_normalize_hhmm(raw, expected):
    assert normalize_hhmm(raw) == expected


@pytest.mark.parametrize("raw", ["24:00", "8:05", "12h30", "12:60"])
def test_normalize_hhmm_rejects_bad_times(raw):
    with pytest.raises(ValueError):
        normalize_hhmm(raw)
