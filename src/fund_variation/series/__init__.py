"""Series-level utilities for monthly variation reporting."""

from .filters import (
    DatePreset,
    DateRange,
    filter_data_by_date_range,
    get_default_date_range,
    get_preset,
    get_preset_date_ranges,
    is_date_in_range,
)

__all__ = [
    "DatePreset",
    "DateRange",
    "filter_data_by_date_range",
    "get_default_date_range",
    "get_preset",
    "get_preset_date_ranges",
    "is_date_in_range",
]
