"""Fintual API access and the canonical daily-record model."""

from .client import FintualHttpClient
from .endpoints import FUNDS, Fund, get_fund, get_fund_name, is_valid_asset_id, list_funds
from .ingest import FundHistoryBuilder
from .models import DailyRecord, FundHistory, MonthlyVariation
from .parser import normalize_record, normalize_records, parse_days_payload

__all__ = [
    "DailyRecord",
    "FUNDS",
    "FintualHttpClient",
    "Fund",
    "FundHistory",
    "FundHistoryBuilder",
    "MonthlyVariation",
    "get_fund",
    "get_fund_name",
    "is_valid_asset_id",
    "list_funds",
    "normalize_record",
    "normalize_records",
    "parse_days_payload",
]
