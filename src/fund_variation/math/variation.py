"""Month-over-month variation of fund prices."""

from collections.abc import Iterable

import structlog

from ..data.models import MonthlyVariation
from .grouping import group_data_by_month, sort_month_data_chronologically
from .utils import percent_change

logger = structlog.get_logger(__name__)

MONTH_NAMES: dict[int, str] = {
    1: "Ene",
    2: "Feb",
    3: "Mar",
    4: "Abr",
    5: "May",
    6: "Jun",
    7: "Jul",
    8: "Ago",
    9: "Sep",
    10: "Oct",
    11: "Nov",
    12: "Dic",
}
UNKNOWN_MONTH = "Desconocido"

_MONTH_NUMBERS = {name: number for number, name in MONTH_NAMES.items()}


def get_month_name(month_number: int) -> str:
    """Return the Spanish month abbreviation, or ``"Desconocido"`` when out of range."""
    return MONTH_NAMES.get(month_number, UNKNOWN_MONTH)


def get_month_number(month_name: str) -> int | None:
    """Return the month number for a Spanish abbreviation, or None when unknown."""
    return _MONTH_NUMBERS.get(month_name)


def _parse_month_key(key: str) -> tuple[int, int] | None:
    """Split a ``YYYY-MM`` key into integers, rejecting bad years and months."""
    year_text, _, month_text = key.partition("-")
    try:
        year = int(year_text)
        month = int(month_text)
    except ValueError:
        return None
    if not 1 <= month <= 12:
        return None
    return year, month


def calculate_monthly_variation(records: Iterable[object]) -> list[MonthlyVariation]:
    """Compute the percentage variation of every calendar month in ``records``.

    Records may be raw API days or :class:`DailyRecord` values. For each month
    the earliest and latest prices are compared:
    ``((last - first) / first) * 100``, rounded to two decimals. Months whose
    first or last price is zero, or whose key is not a valid year/month, are
    skipped. The result is ordered by month key, ascending.
    """
    monthly = group_data_by_month(records)
    variations: list[MonthlyVariation] = []
    for key in sorted(monthly):
        month_records = sort_month_data_chronologically(monthly[key])
        if not month_records:
            continue
        first_day = month_records[0]
        last_day = month_records[-1]
        if not first_day.price or not last_day.price:
            logger.debug("variation.month_skipped", month_key=key, reason="missing price")
            continue
        parsed = _parse_month_key(key)
        if parsed is None:
            logger.debug("variation.month_skipped", month_key=key, reason="invalid month key")
            continue
        year, month = parsed
        variations.append(
            MonthlyVariation(
                year=year,
                month=get_month_name(month),
                variation=percent_change(first_day.price, last_day.price),
                first_day_price=first_day.price,
                last_day_price=last_day.price,
                month_number=month,
            )
        )
    logger.debug("variation.computed", months=len(variations), buckets=len(monthly))
    return variations


__all__ = [
    "MONTH_NAMES",
    "UNKNOWN_MONTH",
    "calculate_monthly_variation",
    "get_month_name",
    "get_month_number",
]
