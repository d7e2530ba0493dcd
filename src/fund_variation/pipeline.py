"""High level orchestration: fetch a fund, aggregate it, and package the report."""

from collections.abc import Iterable

import structlog
from attrs import define

from .data.client import FintualHttpClient
from .data.ingest import FundHistoryBuilder
from .data.models import FundHistory, MonthlyVariation
from .math import (
    DataSummary,
    VariationStatistics,
    calculate_monthly_variation,
    calculate_statistics,
    has_enough_data,
    summarize_records,
)
from .output.charts import ChartData, create_chart_data
from .series.filters import DateRange, filter_data_by_date_range

logger = structlog.get_logger(__name__)


@define(slots=True, frozen=True)
class FundReport:
    """Everything the presentation layer needs for one fund and date window."""

    history: FundHistory
    summary: DataSummary
    variations: list[MonthlyVariation]
    filtered: list[MonthlyVariation]
    statistics: VariationStatistics
    chart: ChartData
    date_range: DateRange | None
    enough_data: bool


def analyze_history(
    history: FundHistory,
    *,
    start_date: str | None = None,
    end_date: str | None = None,
    index: int = 0,
) -> FundReport:
    """Run the aggregation pipeline over an already loaded history."""
    log = logger.bind(asset_id=history.asset_id, start_date=start_date, end_date=end_date)
    summary = summarize_records(history.records)
    date_range = DateRange(start_date, end_date) if start_date and end_date else None
    enough_data = has_enough_data(history.records)
    if not enough_data:
        log.warning("pipeline.insufficient_data", records=len(history.records))
        variations: list[MonthlyVariation] = []
    else:
        variations = calculate_monthly_variation(history.records)
    filtered = filter_data_by_date_range(variations, start_date, end_date)
    statistics = calculate_statistics(filtered)
    chart = create_chart_data(filtered, history.name, index)
    log.info(
        "pipeline.report_complete",
        months=len(variations),
        filtered_months=len(filtered),
        average=statistics.average,
    )
    return FundReport(
        history=history,
        summary=summary,
        variations=variations,
        filtered=filtered,
        statistics=statistics,
        chart=chart,
        date_range=date_range,
        enough_data=enough_data,
    )


def build_fund_report(
    asset_id: int,
    *,
    start_date: str | None = None,
    end_date: str | None = None,
    client: FintualHttpClient | None = None,
    index: int = 0,
) -> FundReport:
    """Fetch one fund from the API and build its variation report."""
    return build_fund_reports(
        [asset_id], start_date=start_date, end_date=end_date, client=client, first_index=index
    )[0]


def build_fund_reports(
    asset_ids: Iterable[int],
    *,
    start_date: str | None = None,
    end_date: str | None = None,
    client: FintualHttpClient | None = None,
    first_index: int = 0,
) -> list[FundReport]:
    """Fetch several funds and build one report each, colored by display position."""
    ids = list(asset_ids)
    pipe_log = logger.bind(operation="build_fund_reports", asset_ids=ids)
    pipe_log.info("pipeline.start", start_date=start_date, end_date=end_date)
    owns_client = client is None
    builder = FundHistoryBuilder() if owns_client else FundHistoryBuilder(client=client)
    try:
        histories = builder.load_all_funds(ids)
    finally:
        if owns_client:
            builder.close()
    reports = [
        analyze_history(history, start_date=start_date, end_date=end_date, index=first_index + offset)
        for offset, history in enumerate(histories)
    ]
    pipe_log.info("pipeline.complete", reports=len(reports))
    return reports


__all__ = ["FundReport", "analyze_history", "build_fund_report", "build_fund_reports"]
