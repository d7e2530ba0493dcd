"""Chart series and visualization utilities for monthly variations."""

from .charts import CHART_PALETTE, ChartColor, ChartData, create_chart_data, get_chart_colors
from .plots import PlotReport, VariationPlotConfig, generate_variation_plot

__all__ = [
    "CHART_PALETTE",
    "ChartColor",
    "ChartData",
    "PlotReport",
    "VariationPlotConfig",
    "create_chart_data",
    "generate_variation_plot",
    "get_chart_colors",
]
