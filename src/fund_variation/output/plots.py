"""Plotting tools for monthly variation series."""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.ticker import PercentFormatter

from ..math import VariationStatistics, calculate_statistics
from .charts import ChartData
from .utils import ensure_directory

_CSS_COLOR = re.compile(r"rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([\d.]+)\s*)?\)")


def css_to_rgba(color: str) -> tuple[float, float, float, float] | str:
    """Convert ``rgb()``/``rgba()`` strings into Matplotlib RGBA tuples.

    Anything else (named colors, hex) is passed through untouched.
    """
    match = _CSS_COLOR.fullmatch(color.strip())
    if match is None:
        return color
    red, green, blue, alpha = match.groups()
    return (
        int(red) / 255.0,
        int(green) / 255.0,
        int(blue) / 255.0,
        float(alpha) if alpha is not None else 1.0,
    )


@dataclass(frozen=True)
class VariationPlotConfig:
    """Styling options for monthly variation charts."""

    title: str = "Variación mensual"
    xlabel: str = "Mes"
    ylabel: str = "Variación (%)"
    positive_color: str = "#16a34a"
    negative_color: str = "#dc2626"
    line_width: float = 2.0
    max_ticks: int = 24


@dataclass(frozen=True)
class PlotReport:
    """Metadata describing a saved plot and the statistics of each series."""

    path: Path
    statistics: dict[str, VariationStatistics]


def _merged_labels(charts: Sequence[ChartData]) -> list[str]:
    """Union of the series labels, in first-seen order."""
    labels: list[str] = []
    seen: set[str] = set()
    for chart in charts:
        for label in chart.labels:
            if label not in seen:
                seen.add(label)
                labels.append(label)
    return labels


def _tick_positions(count: int, max_ticks: int) -> np.ndarray:
    """Evenly thin out x ticks so long histories stay readable."""
    if count <= max_ticks:
        return np.arange(count)
    step = int(np.ceil(count / max_ticks))
    return np.arange(0, count, step)


def generate_variation_plot(
    charts: Sequence[ChartData],
    *,
    output_dir: str | Path = "out",
    filename: str = "variation.png",
    config: VariationPlotConfig | None = None,
) -> PlotReport:
    """Render one series as bars (colored by sign) or several as lines."""
    if not charts:
        raise ValueError("At least one chart series is required.")
    config = config or VariationPlotConfig()
    out_dir = ensure_directory(output_dir)

    labels = _merged_labels(charts)
    positions = {label: index for index, label in enumerate(labels)}

    fig, ax = plt.subplots(figsize=(12, 6))
    if len(charts) == 1:
        chart = charts[0]
        values = np.asarray(chart.series, dtype=float)
        colors = [config.positive_color if value >= 0 else config.negative_color for value in values]
        ax.bar(
            [positions[label] for label in chart.labels],
            values,
            color=colors,
            edgecolor="white",
            label=chart.label,
        )
    else:
        for chart in charts:
            ax.plot(
                [positions[label] for label in chart.labels],
                chart.series,
                color=css_to_rgba(chart.color.border),
                linewidth=config.line_width,
                marker="o",
                markersize=3,
                label=chart.label,
            )

    ticks = _tick_positions(len(labels), config.max_ticks)
    ax.set_xticks(ticks)
    ax.set_xticklabels([labels[int(index)] for index in ticks], rotation=45, ha="right")
    ax.yaxis.set_major_formatter(PercentFormatter(100))
    ax.axhline(0.0, color="#333333", linewidth=0.8)
    ax.set_title(config.title)
    ax.set_xlabel(config.xlabel)
    ax.set_ylabel(config.ylabel)
    ax.legend(loc="upper right")
    ax.grid(True, axis="y", linestyle="--", linewidth=0.5, alpha=0.6)
    fig.tight_layout()

    output_path = out_dir / filename
    fig.savefig(output_path, dpi=150)
    plt.close(fig)

    statistics = {
        chart.label: calculate_statistics({"variation": value} for value in chart.series)
        for chart in charts
    }
    return PlotReport(path=output_path, statistics=statistics)


__all__ = ["PlotReport", "VariationPlotConfig", "css_to_rgba", "generate_variation_plot"]
