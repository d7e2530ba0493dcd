"""Descriptive statistics over monthly variations and daily records."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from ..data.models import DailyRecord
from ..data.parser import normalize_records
from .grouping import month_key
from .utils import to_numpy, variation_of

MIN_RECORDS_FOR_ANALYSIS = 2


@dataclass(frozen=True)
class VariationStatistics:
    """Summary of a monthly variation series."""

    average: float
    max: float
    min: float
    positive_count: int
    negative_count: int
    total_months: int


@dataclass(frozen=True)
class DataSummary:
    """Coverage of a fund's daily price history."""

    total_records: int
    start_date: str
    end_date: str
    min_price: float
    max_price: float
    months_covered: int


EMPTY_STATISTICS = VariationStatistics(
    average=0.0,
    max=0.0,
    min=0.0,
    positive_count=0,
    negative_count=0,
    total_months=0,
)


def calculate_statistics(variations: Iterable[object]) -> VariationStatistics:
    """Compute average, extremes and sign counts of a variation series.

    Items may be :class:`MonthlyVariation` values, mappings with a
    ``"variation"`` key, or any object exposing ``variation``. An empty series
    yields all zeros.
    """
    values = to_numpy(variation_of(item) for item in variations)
    if values.size == 0:
        return EMPTY_STATISTICS
    return VariationStatistics(
        average=float(values.mean()),
        max=float(values.max()),
        min=float(values.min()),
        positive_count=int(np.count_nonzero(values > 0)),
        negative_count=int(np.count_nonzero(values < 0)),
        total_months=int(values.size),
    )


def has_enough_data(records: Sequence[object] | None) -> bool:
    """Return True when there are at least two daily records to analyze."""
    return bool(records) and len(records) >= MIN_RECORDS_FOR_ANALYSIS


def summarize_records(records: Iterable[object]) -> DataSummary:
    """Describe the date span, price range and month coverage of daily records."""
    normalized: list[DailyRecord] = normalize_records(records)
    if not normalized:
        return DataSummary(
            total_records=0,
            start_date="",
            end_date="",
            min_price=0.0,
            max_price=0.0,
            months_covered=0,
        )
    dates = sorted(record.date for record in normalized)
    prices = to_numpy(record.price for record in normalized)
    months = {key for key in (month_key(record.date) for record in normalized) if key}
    return DataSummary(
        total_records=len(normalized),
        start_date=dates[0],
        end_date=dates[-1],
        min_price=float(prices.min()),
        max_price=float(prices.max()),
        months_covered=len(months),
    )


__all__ = [
    "DataSummary",
    "EMPTY_STATISTICS",
    "MIN_RECORDS_FOR_ANALYSIS",
    "VariationStatistics",
    "calculate_statistics",
    "has_enough_data",
    "summarize_records",
]
