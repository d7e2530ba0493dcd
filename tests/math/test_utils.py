"""Unit tests for the math utilities."""

from datetime import datetime

import numpy as np
import pytest

from fund_variation.math.utils import parse_iso_datetime, percent_change, to_numpy, variation_of


def test_to_numpy():
    assert isinstance(to_numpy([1, 2, 3]), np.ndarray)
    assert isinstance(to_numpy(x for x in (1, 2, 3)), np.ndarray)
    assert to_numpy(np.array([1, 2])).dtype == np.float64
    assert to_numpy([]).size == 0


def test_percent_change():
    assert percent_change(1000, 1050) == 5.0
    assert percent_change(1050, 1029) == -2.0
    assert percent_change(3, 3) == 0.0
    assert str(percent_change(1e9, 1e9 - 1)) == "0.0"
    with pytest.raises(ValueError, match="non-zero"):
        percent_change(0, 10)


def test_variation_of():
    assert variation_of({"variation": 2.5}) == 2.5
    assert variation_of({"variation": None}) == 0.0
    assert variation_of({}) == 0.0
    assert variation_of(object()) == 0.0


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2023-01-05", datetime(2023, 1, 5)),
        ("2023-01-05T10:30:00", datetime(2023, 1, 5, 10, 30)),
        ("2023-01-05T03:00:00Z", datetime(2023, 1, 5, 3, 0)),
        ("2023-01-05T03:00:00-03:00", datetime(2023, 1, 5, 6, 0)),
        ("2023-13-01", None),
        ("undefined", None),
    ],
)
def test_parse_iso_datetime(value, expected):
    assert parse_iso_datetime(value) == expected
