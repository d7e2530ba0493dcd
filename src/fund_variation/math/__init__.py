"""Monthly aggregation and statistics for fund prices."""

from .grouping import group_data_by_month, month_key, sort_month_data_chronologically  # noqa: F401
from .stats import (  # noqa: F401
    DataSummary,
    VariationStatistics,
    calculate_statistics,
    has_enough_data,
    summarize_records,
)
from .variation import (  # noqa: F401
    MONTH_NAMES,
    UNKNOWN_MONTH,
    calculate_monthly_variation,
    get_month_name,
    get_month_number,
)

__all__ = [
    "DataSummary",
    "MONTH_NAMES",
    "UNKNOWN_MONTH",
    "VariationStatistics",
    "calculate_monthly_variation",
    "calculate_statistics",
    "get_month_name",
    "get_month_number",
    "group_data_by_month",
    "has_enough_data",
    "month_key",
    "sort_month_data_chronologically",
    "summarize_records",
]
