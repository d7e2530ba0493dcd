"""Chart-ready series built from monthly variations."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..data.models import MonthlyVariation


@dataclass(frozen=True)
class ChartColor:
    """Line and fill colors of one displayed series (CSS color strings)."""

    border: str
    background: str


CHART_PALETTE: tuple[ChartColor, ...] = (
    ChartColor(border="rgb(59, 130, 246)", background="rgba(59, 130, 246, 0.2)"),
    ChartColor(border="rgb(34, 197, 94)", background="rgba(34, 197, 94, 0.2)"),
    ChartColor(border="rgb(249, 115, 22)", background="rgba(249, 115, 22, 0.2)"),
    ChartColor(border="rgb(168, 85, 247)", background="rgba(168, 85, 247, 0.2)"),
    ChartColor(border="rgb(239, 68, 68)", background="rgba(239, 68, 68, 0.2)"),
    ChartColor(border="rgb(245, 158, 11)", background="rgba(245, 158, 11, 0.2)"),
)


@dataclass(frozen=True)
class ChartData:
    """Labels and values of one variation series plus its display color."""

    label: str
    labels: list[str] = field(default_factory=list)
    series: list[float] = field(default_factory=list)
    color: ChartColor = CHART_PALETTE[0]
    fill: bool = True

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly representation."""
        return {
            "label": self.label,
            "labels": list(self.labels),
            "series": list(self.series),
            "borderColor": self.color.border,
            "backgroundColor": self.color.background,
            "fill": self.fill,
        }


def get_chart_colors(index: int) -> ChartColor:
    """Return the palette entry for the series at ``index``, cycling."""
    return CHART_PALETTE[index % len(CHART_PALETTE)]


def create_chart_data(
    variations: Sequence[MonthlyVariation],
    series_label: str,
    index: int = 0,
) -> ChartData:
    """Map variations to ``"<Month> <Year>"`` labels and values.

    ``index`` is the position of this series among those shown together; it
    picks the color, independently of which fund the series belongs to.
    """
    return ChartData(
        label=series_label,
        labels=[item.label for item in variations],
        series=[item.variation for item in variations],
        color=get_chart_colors(index),
    )


__all__ = ["CHART_PALETTE", "ChartColor", "ChartData", "create_chart_data", "get_chart_colors"]
