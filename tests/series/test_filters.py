"""Unit tests for the date-range filter and presets."""

from datetime import date

import pytest

from fund_variation.data.models import MonthlyVariation
from fund_variation.math import calculate_monthly_variation
from fund_variation.series.filters import (
    DateRange,
    filter_data_by_date_range,
    get_default_date_range,
    get_preset,
    get_preset_date_ranges,
    is_date_in_range,
)


def _month(year, month_number, variation=1.0):
    return MonthlyVariation(
        year=year,
        month="x",
        variation=variation,
        first_day_price=100,
        last_day_price=101,
        month_number=month_number,
    )


@pytest.fixture
def year_2023():
    return [_month(2023, number) for number in range(1, 13)]


def test_inclusive_window(year_2023):
    result = filter_data_by_date_range(year_2023, "2023-03-01", "2023-05-01")
    assert [v.month_number for v in result] == [3, 4, 5]


def test_window_compares_first_day_of_month(year_2023):
    # 2023-03-01 is before 2023-03-15, so March is out.
    result = filter_data_by_date_range(year_2023, "2023-03-15", "2023-05-31")
    assert [v.month_number for v in result] == [4, 5]


@pytest.mark.parametrize(
    "start, end",
    [
        (None, "2023-05-01"),
        ("2023-03-01", None),
        ("", "2023-05-01"),
        ("2023-03-01", ""),
        ("undefined", "2023-05-01"),
        ("2023-03-01", "undefined"),
    ],
)
def test_unset_bounds_disable_filter(year_2023, start, end):
    assert filter_data_by_date_range(year_2023, start, end) == year_2023


def test_window_excluding_everything_falls_back_to_full_list(year_2023):
    result = filter_data_by_date_range(year_2023, "2030-01-01", "2030-12-31")
    assert result == year_2023
    assert result is not year_2023


def test_reversed_or_invalid_bounds_fall_back(year_2023):
    assert filter_data_by_date_range(year_2023, "2023-12-31", "2023-01-01") == year_2023
    assert filter_data_by_date_range(year_2023, "not-a-date", "2023-05-01") == year_2023


@pytest.mark.parametrize("date_text", ["10000-01-05", "0000-01-05"])
def test_out_of_calendar_year_is_out_of_window(date_text):
    variations = calculate_monthly_variation(
        [
            {"date": date_text, "price": 10},
            {"date": date_text, "price": 11},
            {"date": "2023-03-01", "price": 10},
            {"date": "2023-03-31", "price": 12},
        ]
    )
    assert len(variations) == 2

    result = filter_data_by_date_range(variations, "2023-01-01", "2023-12-31")
    assert [(v.year, v.month_number) for v in result] == [(2023, 3)]

    # With nothing else in the window the full series comes back.
    assert filter_data_by_date_range(variations[:1], "2023-01-01", "2023-12-31") == variations[:1]


def test_empty_input_stays_empty():
    assert filter_data_by_date_range([], "2023-01-01", "2023-12-31") == []


def test_is_date_in_range():
    assert is_date_in_range("2023-01-01", "2023-01-01", "2023-01-31")
    assert is_date_in_range("2023-01-31", "2023-01-01", "2023-01-31")
    assert not is_date_in_range("2023-02-01", "2023-01-01", "2023-01-31")
    assert is_date_in_range("2023-02-01", "", "2023-01-31")
    assert not is_date_in_range("garbage", "2023-01-01", "2023-01-31")


def test_default_date_range():
    assert get_default_date_range(date(2025, 6, 15)) == DateRange("2020-06-15", "2025-06-15")
    assert get_default_date_range(date(2024, 2, 29)) == DateRange("2019-03-01", "2024-02-29")


def test_preset_date_ranges():
    presets = get_preset_date_ranges(date(2025, 6, 15))
    assert [p.key for p in presets] == ["1y", "2y", "5y", "all", "2023", "2024"]
    assert presets[0].start_date == "2024-06-15"
    assert presets[3].to_range() == DateRange("2020-01-01", "2025-06-15")
    assert get_preset("2024", date(2025, 6, 15)).end_date == "2024-12-31"


def test_unknown_preset():
    with pytest.raises(ValueError, match="Unknown date preset"):
        get_preset("10y")
