"""Command line entry point for the fund-variation application."""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

import click
import structlog

from fund_variation.data import (
    FintualHttpClient,
    FundHistory,
    FundHistoryBuilder,
    is_valid_asset_id,
    list_funds,
)
from fund_variation.data.endpoints import BASE_URL, DEFAULT_FUND_ID
from fund_variation.data.models import MonthlyVariationSchema
from fund_variation.logging import configure_logging
from fund_variation.math import VariationStatistics
from fund_variation.output import generate_variation_plot
from fund_variation.output.utils import format_clp, format_variation
from fund_variation.pipeline import FundReport, build_fund_report, build_fund_reports
from fund_variation.series import get_preset, get_preset_date_ranges

BASE_URL_HELP = (
    "Base URL of the Fintual real-assets API. May also be set via FUND_VARIATION_BASE_URL."
)
FUND_HELP = "Fintual real-asset id (186, 187, 188 or 15077)."
PRESET_HELP = "Named date window (1y, 2y, 5y, all, 2023, 2024); excludes --start/--end."

LOG_FORMAT_CHOICES = ("console", "json")
LOG_LEVEL_CHOICES = ("critical", "error", "warning", "info", "debug")
PRESET_CHOICES = tuple(preset.key for preset in get_preset_date_ranges())

logger = structlog.get_logger(__name__)


def _make_client(ctx: click.Context) -> FintualHttpClient:
    """Build an HTTP client from the group-level configuration."""
    ctx.ensure_object(dict)
    return FintualHttpClient(
        base_url=ctx.obj.get("base_url") or BASE_URL,
        timeout=ctx.obj.get("timeout") or 30.0,
    )


def _check_fund(asset_id: int) -> None:
    """Warn when the id is not one of the registered funds."""
    if not is_valid_asset_id(asset_id):
        logger.warning("cli.unknown_fund", asset_id=asset_id)


def _resolve_range(
    start: str | None,
    end: str | None,
    preset: str | None,
) -> tuple[str | None, str | None]:
    """Return the effective date window from explicit bounds or a preset."""
    if preset and (start or end):
        raise click.UsageError("--preset cannot be combined with --start/--end.")
    if preset:
        chosen = get_preset(preset.lower())
        return chosen.start_date, chosen.end_date
    if bool(start) != bool(end):
        logger.warning("cli.partial_range_ignored", start=start, end=end)
    return start, end


def _load_report(
    ctx: click.Context,
    asset_id: int,
    *,
    start_date: str | None,
    end_date: str | None,
) -> FundReport:
    """Fetch and aggregate a fund, failing loudly when there is not enough data."""
    _check_fund(asset_id)
    client = _make_client(ctx)
    try:
        report = build_fund_report(
            asset_id, start_date=start_date, end_date=end_date, client=client
        )
    finally:
        client.close()
    _require_enough_data(report)
    return report


def _require_enough_data(report: FundReport) -> None:
    if not report.enough_data:
        raise click.ClickException(
            f"Not enough data to compute monthly variations for {report.history.name}: "
            "at least 2 daily records are required."
        )


def _stats_to_dict(stats: VariationStatistics) -> dict[str, object]:
    """Convert statistics into JSON-friendly primitives."""
    payload: dict[str, object] = asdict(stats)
    payload["average_percent"] = format_variation(stats.average)
    payload["max_percent"] = format_variation(stats.max)
    payload["min_percent"] = format_variation(stats.min)
    return payload


def _report_header(report: FundReport) -> dict[str, object]:
    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "asset_id": report.history.asset_id,
        "fund": report.history.name,
        "start_date": report.date_range.start_date if report.date_range else None,
        "end_date": report.date_range.end_date if report.date_range else None,
    }


def _emit(document: dict[str, object], output: Path | None) -> None:
    """Write a JSON document to ``output`` or stdout."""
    text = json.dumps(document, indent=2, ensure_ascii=False)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        click.echo(f"Wrote {output}")
        logger.debug("cli.document_written", output=str(output))
    else:
        click.echo(text)


@click.group()
@click.option(
    "--base-url",
    envvar="FUND_VARIATION_BASE_URL",
    default=BASE_URL,
    show_default=True,
    help=BASE_URL_HELP,
)
@click.option(
    "--timeout",
    envvar="FUND_VARIATION_TIMEOUT",
    type=float,
    default=30.0,
    show_default=True,
    help="HTTP timeout in seconds.",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVEL_CHOICES, case_sensitive=False),
    envvar="FUND_VARIATION_LOG_LEVEL",
    default="info",
    show_default=True,
    help="Verbosity for structured logs.",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMAT_CHOICES, case_sensitive=False),
    envvar="FUND_VARIATION_LOG_FORMAT",
    default="console",
    show_default=True,
    help="Render logs as console-friendly text or JSON.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    base_url: str,
    timeout: float,
    log_level: str,
    log_format: str,
) -> None:
    """Compute monthly price variation of Fintual funds."""
    if timeout <= 0:
        raise click.BadParameter("timeout must be positive.", param_hint="--timeout")
    configure_logging(
        level=log_level,
        json_output=log_format.lower() == "json",
        context={"base_url": base_url},
    )
    ctx.ensure_object(dict)
    ctx.obj.update({"base_url": base_url, "timeout": timeout})
    logger.bind(command_group="fund-variation").debug(
        "cli.initialized",
        base_url=base_url,
        timeout=timeout,
        log_level=log_level.lower(),
        log_format=log_format.lower(),
    )


@cli.command("funds")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the registry as JSON.")
def funds(*, as_json: bool) -> None:
    """List the known Fintual funds."""
    registry = list_funds()
    if as_json:
        click.echo(json.dumps([{"asset_id": f.asset_id, "name": f.name} for f in registry], indent=2))
        return
    for fund in registry:
        click.echo(f"{fund.asset_id}\t{fund.name}")


@cli.command("fetch")
@click.option("--fund", "asset_id", type=int, default=DEFAULT_FUND_ID, show_default=True, help=FUND_HELP)
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional path to save the normalized daily records as JSON.",
)
@click.pass_context
def fetch(ctx: click.Context, *, asset_id: int, output_path: Path | None) -> None:
    """Download a fund's daily prices and report what was kept."""
    _check_fund(asset_id)
    cmd_log = logger.bind(command="fetch", asset_id=asset_id)
    cmd_log.info("command.start")
    builder = FundHistoryBuilder(client=_make_client(ctx))
    try:
        history: FundHistory = builder.load_fund(asset_id)
    finally:
        builder.close()
    click.echo(
        f"Fetched {history.name}: {len(history.records)} daily records "
        f"({history.rejected} rejected)."
    )
    if output_path:
        _emit(history.to_dict(), output_path)
    cmd_log.info("command.completed", records=len(history.records))


@cli.command("variation")
@click.option("--fund", "asset_id", type=int, default=DEFAULT_FUND_ID, show_default=True, help=FUND_HELP)
@click.option("--start", help="Inclusive start date (YYYY-MM-DD).")
@click.option("--end", help="Inclusive end date (YYYY-MM-DD).")
@click.option("--preset", type=click.Choice(PRESET_CHOICES, case_sensitive=False), help=PRESET_HELP)
@click.option(
    "--export",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the monthly rows to a .csv or .parquet file instead of printing JSON.",
)
@click.pass_context
def variation(
    ctx: click.Context,
    *,
    asset_id: int,
    start: str | None,
    end: str | None,
    preset: str | None,
    export: Path | None,
) -> None:
    """Print the monthly variation series of a fund."""
    start_date, end_date = _resolve_range(start, end, preset)
    cmd_log = logger.bind(command="variation", asset_id=asset_id)
    cmd_log.info("command.start", start_date=start_date, end_date=end_date)
    report = _load_report(ctx, asset_id, start_date=start_date, end_date=end_date)
    rows = MonthlyVariationSchema(many=True).dump(report.filtered)
    if export:
        export.parent.mkdir(parents=True, exist_ok=True)
        if export.suffix.lower() == ".csv":
            _write_csv(rows, export)
        elif export.suffix.lower() in {".parquet", ".pq"}:
            _write_parquet(rows, export)
        else:
            raise click.BadParameter("Export path must end with .csv or .parquet", param_hint="--export")
        click.echo(f"Variations written to {export}")
    else:
        _emit({**_report_header(report), "months": len(rows), "variations": rows}, None)
    cmd_log.info("command.completed", months=len(rows))


@cli.command("stats")
@click.option("--fund", "asset_id", type=int, default=DEFAULT_FUND_ID, show_default=True, help=FUND_HELP)
@click.option("--start", help="Inclusive start date (YYYY-MM-DD).")
@click.option("--end", help="Inclusive end date (YYYY-MM-DD).")
@click.option("--preset", type=click.Choice(PRESET_CHOICES, case_sensitive=False), help=PRESET_HELP)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional path to write the JSON summary.",
)
@click.pass_context
def stats(
    ctx: click.Context,
    *,
    asset_id: int,
    start: str | None,
    end: str | None,
    preset: str | None,
    output: Path | None,
) -> None:
    """Summarize a fund's history and its monthly variation statistics."""
    start_date, end_date = _resolve_range(start, end, preset)
    report = _load_report(ctx, asset_id, start_date=start_date, end_date=end_date)
    summary = asdict(report.summary)
    summary["min_price_clp"] = format_clp(report.summary.min_price)
    summary["max_price_clp"] = format_clp(report.summary.max_price)
    _emit(
        {
            **_report_header(report),
            "summary": summary,
            "statistics": _stats_to_dict(report.statistics),
        },
        output,
    )


@cli.command("chart")
@click.option(
    "--fund",
    "asset_ids",
    type=int,
    multiple=True,
    help=f"{FUND_HELP} Repeat to compare several funds.",
)
@click.option("--start", help="Inclusive start date (YYYY-MM-DD).")
@click.option("--end", help="Inclusive end date (YYYY-MM-DD).")
@click.option("--preset", type=click.Choice(PRESET_CHOICES, case_sensitive=False), help=PRESET_HELP)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("out"),
    show_default=True,
    help="Directory for the PNG and chart JSON.",
)
@click.pass_context
def chart(
    ctx: click.Context,
    *,
    asset_ids: tuple[int, ...],
    start: str | None,
    end: str | None,
    preset: str | None,
    output_dir: Path,
) -> None:
    """Render monthly variations as a chart and save its series as JSON."""
    start_date, end_date = _resolve_range(start, end, preset)
    ids = list(asset_ids) or [DEFAULT_FUND_ID]
    for asset_id in ids:
        _check_fund(asset_id)
    cmd_log = logger.bind(command="chart", asset_ids=ids)
    cmd_log.info("command.start", start_date=start_date, end_date=end_date)

    client = _make_client(ctx)
    try:
        reports = build_fund_reports(ids, start_date=start_date, end_date=end_date, client=client)
    finally:
        client.close()
    for report in reports:
        _require_enough_data(report)

    charts = [report.chart for report in reports]
    plot = generate_variation_plot(charts, output_dir=output_dir, filename="variation.png")
    chart_path = output_dir / "chart.json"
    chart_path.write_text(
        json.dumps(
            {
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "plot": str(plot.path),
                "series": [c.to_dict() for c in charts],
                "statistics": {
                    label: _stats_to_dict(summary) for label, summary in plot.statistics.items()
                },
            },
            indent=2,
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )
    click.echo(f"Chart written to {plot.path}")
    cmd_log.info("command.completed", output=str(output_dir), series=len(charts))


def _write_csv(rows: list[dict[str, object]], path: Path) -> None:
    """Write variation rows to CSV via pandas."""
    import pandas as pd  # type: ignore

    df = pd.DataFrame(rows)
    df.to_csv(path, index=False)


def _write_parquet(rows: list[dict[str, object]], path: Path) -> None:
    """Write variation rows to parquet via pandas/pyarrow."""
    import pandas as pd  # type: ignore

    df = pd.DataFrame(rows)
    try:
        df.to_parquet(path, index=False)
    except (ImportError, ValueError) as exc:  # pragma: no cover - optional deps
        raise click.ClickException(
            "Writing parquet requires pandas with pyarrow or fastparquet installed."
        ) from exc


if __name__ == "__main__":
    cli()
