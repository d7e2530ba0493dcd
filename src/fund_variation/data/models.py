"""Domain models for Fintual daily prices and their monthly aggregates."""

import math
from datetime import date
from typing import Any

import marshmallow as ma
from attrs import asdict as attrs_asdict, define, field

from .endpoints import Fund


def _to_price(value: object) -> float:
    """Coerce a raw price into a finite float, using 0.0 for unusable values."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def _strip(value: str) -> str:
    """Trim surrounding whitespace from a field."""
    return value.strip()


@define(slots=True, frozen=True)
class DailyRecord:
    """Canonical daily observation: a date string and the fund price on that day."""

    date: str = field(converter=_strip)
    price: float = field(converter=_to_price, default=0.0)

    def date_parts(self) -> list[str]:
        """Return the dash-separated components of the date string."""
        return self.date.split("-")


class DailyRecordSchema(ma.Schema):
    """Marshmallow schema for :class:`DailyRecord`."""

    date = ma.fields.Str(required=True)
    price = ma.fields.Float(required=False, load_default=0.0)

    @ma.post_load
    def make_record(self, data: dict[str, Any], **kwargs: object) -> DailyRecord:
        """Instantiate :class:`DailyRecord` from validated payloads."""
        return DailyRecord(**data)


@define(slots=True, frozen=True, kw_only=True)
class MonthlyVariation:
    """Percentage change between the first and last price of a calendar month."""

    year: int = field(converter=int)
    month: str
    variation: float = field(converter=float)
    first_day_price: float = field(converter=float)
    last_day_price: float = field(converter=float)
    month_number: int = field(converter=int)

    @property
    def label(self) -> str:
        """Return the chart label, e.g. ``"Ene 2023"``."""
        return f"{self.month} {self.year}"

    @property
    def period_start(self) -> date:
        """Return the first calendar day of the month."""
        return date(self.year, self.month_number, 1)

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.year, self.month_number)


class MonthlyVariationSchema(ma.Schema):
    """Marshmallow schema for :class:`MonthlyVariation` using camelCase wire keys."""

    year = ma.fields.Int(required=True)
    month = ma.fields.Str(required=True)
    variation = ma.fields.Float(required=True)
    first_day_price = ma.fields.Float(required=True, data_key="firstDayPrice")
    last_day_price = ma.fields.Float(required=True, data_key="lastDayPrice")
    month_number = ma.fields.Int(required=True, data_key="monthNumber")

    @ma.post_load
    def make_variation(self, data: dict[str, Any], **kwargs: object) -> MonthlyVariation:
        """Instantiate :class:`MonthlyVariation` from validated payloads."""
        return MonthlyVariation(**data)


@define(slots=True)
class FundHistory:
    """Normalized daily history of one fund."""

    fund: Fund
    records: list[DailyRecord] = field(factory=list)
    rejected: int = 0

    @property
    def asset_id(self) -> int:
        return self.fund.asset_id

    @property
    def name(self) -> str:
        return self.fund.name

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly representation of the history."""
        return {
            "fund": attrs_asdict(self.fund),
            "rejected": self.rejected,
            "records": DailyRecordSchema(many=True).dump(self.records),
        }


__all__ = [
    "DailyRecord",
    "DailyRecordSchema",
    "FundHistory",
    "MonthlyVariation",
    "MonthlyVariationSchema",
]
