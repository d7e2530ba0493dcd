"""Partition daily records into calendar-month buckets."""

import re
from collections.abc import Iterable

import structlog

from ..data.models import DailyRecord
from ..data.parser import normalize_record
from .utils import parse_iso_datetime

logger = structlog.get_logger(__name__)


def month_key(record_date: str) -> str | None:
    """Return the ``YYYY-MM`` key made of the first two dash-separated parts."""
    parts = record_date.split("-")
    if len(parts) < 2:
        return None
    return f"{parts[0]}-{parts[1]}"


def group_data_by_month(records: Iterable[object]) -> dict[str, list[DailyRecord]]:
    """Group records by month key, keeping input order inside each bucket.

    Raw payloads are normalized on the way in; rejected ones are skipped.
    No calendar validation happens here, so ``"2023-13-01"`` gets its own
    ``"2023-13"`` bucket.
    """
    monthly: dict[str, list[DailyRecord]] = {}
    skipped = 0
    for raw in records:
        record = normalize_record(raw)
        key = month_key(record.date) if record is not None else None
        if record is None or key is None:
            skipped += 1
            continue
        monthly.setdefault(key, []).append(record)
    logger.debug("grouping.months_found", months=len(monthly), skipped=skipped)
    return monthly


_DAY_PREFIX = re.compile(r"(\d+)(.*)$", re.DOTALL)


def _date_components(value: str) -> tuple[int, ...] | None:
    """Return ``(year, month, day, hour, minute, second, microsecond)`` for ``value``.

    ISO dates parse directly. Otherwise the year, month and leading digits of
    the day are read as integers, so ``"2023-01-5"`` sorts as the 5th. Returns
    None when even those parts are not numbers.
    """
    parsed = parse_iso_datetime(value)
    if parsed is None:
        parts = value.split("-", 2)
        try:
            year = int(parts[0])
            month = int(parts[1])
        except (IndexError, ValueError):
            return None
        if len(parts) < 3:
            return (year, month, 1, 0, 0, 0, 0)
        match = _DAY_PREFIX.match(parts[2])
        if match is None:
            return None
        day, rest = int(match.group(1)), match.group(2)
        parsed = parse_iso_datetime(f"{year:04d}-{month:02d}-{day:02d}{rest}")
        if parsed is None:
            return (year, month, day, 0, 0, 0, 0)
    return (
        parsed.year,
        parsed.month,
        parsed.day,
        parsed.hour,
        parsed.minute,
        parsed.second,
        parsed.microsecond,
    )


def _chronological_key(record: DailyRecord) -> tuple[int, tuple[int, ...], str]:
    """Sort by date components, then dates without numeric parts by raw text."""
    components = _date_components(record.date)
    if components is None:
        return (1, (), record.date)
    return (0, components, "")


def sort_month_data_chronologically(records: Iterable[DailyRecord]) -> list[DailyRecord]:
    """Return a new list sorted by date; ties keep their original order."""
    return sorted(records, key=_chronological_key)


__all__ = ["group_data_by_month", "month_key", "sort_month_data_chronologically"]
