"""Unit tests for the data models."""

from datetime import date

import pytest

from fund_variation.data.endpoints import get_fund
from fund_variation.data.models import (
    DailyRecord,
    DailyRecordSchema,
    FundHistory,
    MonthlyVariation,
    MonthlyVariationSchema,
    _to_price,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (1000, 1000.0),
        ("1029.5", 1029.5),
        (None, 0.0),
        (False, 0.0),
        ("", 0.0),
        ([], 0.0),
        (float("inf"), 0.0),
    ],
)
def test_to_price(value, expected):
    assert _to_price(value) == expected


def test_daily_record_is_frozen():
    record = DailyRecord(date=" 2023-01-05 ", price=10)
    assert record.date == "2023-01-05"
    assert record.date_parts() == ["2023", "01", "05"]
    with pytest.raises(AttributeError):
        record.price = 11  # type: ignore[misc]


@pytest.fixture
def january():
    return MonthlyVariation(
        year=2023,
        month="Ene",
        variation=5.0,
        first_day_price=1000,
        last_day_price=1050,
        month_number=1,
    )


def test_monthly_variation_properties(january):
    assert january.label == "Ene 2023"
    assert january.period_start == date(2023, 1, 1)
    assert january.sort_key == (2023, 1)


def test_monthly_variation_schema_uses_camel_case(january):
    dumped = MonthlyVariationSchema().dump(january)
    assert dumped == {
        "year": 2023,
        "month": "Ene",
        "variation": 5.0,
        "firstDayPrice": 1000.0,
        "lastDayPrice": 1050.0,
        "monthNumber": 1,
    }
    assert MonthlyVariationSchema().load(dumped) == january


def test_daily_record_schema_load_defaults_price():
    assert DailyRecordSchema().load({"date": "2023-01-05"}) == DailyRecord("2023-01-05", 0.0)


def test_fund_history_to_dict():
    history = FundHistory(fund=get_fund(187), records=[DailyRecord("2023-01-05", 1)], rejected=2)
    payload = history.to_dict()
    assert payload["fund"] == {"asset_id": 187, "name": "Fondo Moderado (Pit)"}
    assert payload["rejected"] == 2
    assert payload["records"] == [{"date": "2023-01-05", "price": 1.0}]
