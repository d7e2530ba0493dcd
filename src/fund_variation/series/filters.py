"""Date-window filtering of monthly variation series."""

from collections.abc import Sequence
from datetime import date, datetime

import structlog
from attrs import define

from ..data.models import MonthlyVariation
from ..math.utils import parse_iso_datetime

logger = structlog.get_logger(__name__)

# Placeholder sent by UI shells that stringify an unset value.
UNSET_PLACEHOLDER = "undefined"
HISTORY_START = date(2020, 1, 1)
DEFAULT_RANGE_YEARS = 5


@define(slots=True, frozen=True)
class DateRange:
    """Inclusive ``[start_date, end_date]`` window as ISO date strings."""

    start_date: str
    end_date: str


@define(slots=True, frozen=True)
class DatePreset:
    """Named date window offered to users."""

    key: str
    label: str
    start_date: str
    end_date: str

    def to_range(self) -> DateRange:
        return DateRange(start_date=self.start_date, end_date=self.end_date)


def _is_unset(bound: str | None) -> bool:
    return not bound or bound == UNSET_PLACEHOLDER


def _month_start(item: MonthlyVariation) -> datetime | None:
    """Return midnight of the month's first day, or None outside years 1..9999."""
    try:
        return datetime.combine(item.period_start, datetime.min.time())
    except ValueError:
        return None


def _in_window(item: MonthlyVariation, start: datetime, end: datetime) -> bool:
    month_start = _month_start(item)
    return month_start is not None and start <= month_start <= end


def is_date_in_range(value: str, start_date: str | None, end_date: str | None) -> bool:
    """Return True when ``value`` lies in ``[start_date, end_date]``.

    A missing bound means every date is in range. Unparseable dates are never
    in range.
    """
    if not start_date or not end_date:
        return True
    target = parse_iso_datetime(value)
    start = parse_iso_datetime(start_date)
    end = parse_iso_datetime(end_date)
    if target is None or start is None or end is None:
        return False
    return start <= target <= end


def filter_data_by_date_range(
    variations: Sequence[MonthlyVariation],
    start_date: str | None,
    end_date: str | None,
) -> list[MonthlyVariation]:
    """Keep the months whose first day falls inside the window, inclusive.

    Unset bounds (``None``, ``""`` or ``"undefined"``) disable the filter. When
    the window would drop every month of a non-empty series, the full series
    is returned instead of an empty one.
    """
    if _is_unset(start_date) or _is_unset(end_date):
        return list(variations)
    start = parse_iso_datetime(start_date)  # type: ignore[arg-type]
    end = parse_iso_datetime(end_date)  # type: ignore[arg-type]
    log = logger.bind(start_date=start_date, end_date=end_date)
    if start is None or end is None:
        log.warning("filter.invalid_bounds")
        filtered: list[MonthlyVariation] = []
    else:
        filtered = [item for item in variations if _in_window(item, start, end)]
    if not filtered and variations:
        log.warning("filter.fallback_full", months=len(variations))
        return list(variations)
    log.debug("filter.applied", kept=len(filtered), total=len(variations))
    return filtered


def _years_before(today: date, years: int) -> date:
    """Shift ``today`` back by whole years; Feb 29 rolls over to Mar 1."""
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        return date(today.year - years, 3, 1)


def get_default_date_range(today: date | None = None) -> DateRange:
    """Return the last five years, ending today."""
    today = today or date.today()
    start = _years_before(today, DEFAULT_RANGE_YEARS)
    return DateRange(start_date=start.isoformat(), end_date=today.isoformat())


def get_preset_date_ranges(today: date | None = None) -> list[DatePreset]:
    """Return the predefined windows offered next to the custom range picker."""
    today = today or date.today()
    end = today.isoformat()
    return [
        DatePreset("1y", "Último año", _years_before(today, 1).isoformat(), end),
        DatePreset("2y", "Últimos 2 años", _years_before(today, 2).isoformat(), end),
        DatePreset("5y", "Últimos 5 años", _years_before(today, 5).isoformat(), end),
        DatePreset("all", "Todo el historial", HISTORY_START.isoformat(), end),
        DatePreset("2023", "2023", "2023-01-01", "2023-12-31"),
        DatePreset("2024", "2024", "2024-01-01", "2024-12-31"),
    ]


def get_preset(key: str, today: date | None = None) -> DatePreset:
    """Look up a preset by key, raising ValueError for unknown keys."""
    presets = {preset.key: preset for preset in get_preset_date_ranges(today)}
    try:
        return presets[key]
    except KeyError:
        valid = ", ".join(presets)
        raise ValueError(f"Unknown date preset {key!r}. Choose one of: {valid}.") from None


__all__ = [
    "DatePreset",
    "DateRange",
    "filter_data_by_date_range",
    "get_default_date_range",
    "get_preset",
    "get_preset_date_ranges",
    "is_date_in_range",
]
