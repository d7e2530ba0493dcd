"""Normalization of raw Fintual day payloads into :class:`DailyRecord` values.

The API nests the useful fields inside an ``attributes`` envelope, while
cached or hand-built payloads are usually flat. Both shapes are reduced to a
single canonical record here so nothing downstream inspects raw shapes.
"""

from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from .models import DailyRecord

logger = structlog.get_logger(__name__)


def _attributes(raw: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return the ``attributes`` envelope, or an empty mapping."""
    attributes = raw.get("attributes")
    if isinstance(attributes, Mapping):
        return attributes
    return {}


def _extract_date(raw: Mapping[str, Any]) -> object:
    """Prefer a truthy flat ``date`` and fall back to ``attributes.date``."""
    return raw.get("date") or _attributes(raw).get("date")


def _extract_price(raw: Mapping[str, Any]) -> object:
    """Prefer a non-null flat ``price`` and fall back to ``attributes.price``."""
    price = raw.get("price")
    if price is None:
        price = _attributes(raw).get("price")
    return price


def normalize_record(raw: object) -> DailyRecord | None:
    """Map one raw day (flat or nested) to a :class:`DailyRecord`.

    Returns ``None`` when no usable date string is present. The date only has
    to split into at least two dash-separated parts; calendar validity is
    checked later, when monthly variations are emitted.
    """
    if isinstance(raw, DailyRecord):
        return raw
    if not isinstance(raw, Mapping):
        return None
    raw_date = _extract_date(raw)
    if not raw_date or not isinstance(raw_date, str):
        return None
    if len(raw_date.split("-")) < 2:
        return None
    return DailyRecord(date=raw_date, price=_extract_price(raw))


def normalize_records(raw_records: Iterable[object]) -> list[DailyRecord]:
    """Normalize a sequence of raw days, dropping the unusable ones."""
    records: list[DailyRecord] = []
    rejected = 0
    for raw in raw_records:
        record = normalize_record(raw)
        if record is None:
            rejected += 1
            continue
        records.append(record)
    logger.debug("parser.records_normalized", kept=len(records), rejected=rejected)
    return records


def parse_days_payload(payload: object) -> list[Any]:
    """Return the list of raw days from an API body (``{"data": [...]}``) or a bare list."""
    if isinstance(payload, Mapping):
        data = payload.get("data")
        return list(data) if isinstance(data, list) else []
    if isinstance(payload, list):
        return list(payload)
    return []


__all__ = ["normalize_record", "normalize_records", "parse_days_payload"]
