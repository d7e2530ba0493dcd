"""Unit tests for the plotting tools."""

import pytest

from fund_variation.output.charts import ChartData, get_chart_colors
from fund_variation.output.plots import (
    VariationPlotConfig,
    _merged_labels,
    _tick_positions,
    css_to_rgba,
    generate_variation_plot,
)


@pytest.fixture
def mock_plt(mocker):
    """Fixture for a mock matplotlib.pyplot."""
    fig_mock = mocker.MagicMock()
    ax_mock = mocker.MagicMock()
    subplots_mock = mocker.patch("matplotlib.pyplot.subplots", return_value=(fig_mock, ax_mock))
    mocker.patch("matplotlib.pyplot.close")
    return subplots_mock, fig_mock, ax_mock


@pytest.fixture
def two_charts():
    return [
        ChartData(label="A", labels=["Ene 2023", "Feb 2023"], series=[5.0, -2.0], color=get_chart_colors(0)),
        ChartData(label="B", labels=["Feb 2023", "Mar 2023"], series=[1.0, 0.5], color=get_chart_colors(1)),
    ]


def test_single_series_renders_bars(mock_plt, tmp_path, two_charts):
    _, fig_mock, ax_mock = mock_plt
    config = VariationPlotConfig(title="Fondo A")

    report = generate_variation_plot(two_charts[:1], output_dir=tmp_path, config=config)

    assert report.path == tmp_path / "variation.png"
    ax_mock.bar.assert_called_once()
    _, kwargs = ax_mock.bar.call_args
    assert kwargs["color"] == [config.positive_color, config.negative_color]
    ax_mock.set_title.assert_called_with("Fondo A")
    fig_mock.savefig.assert_called_once()
    assert report.statistics["A"].average == pytest.approx(1.5)


def test_several_series_render_lines(mock_plt, tmp_path, two_charts):
    _, fig_mock, ax_mock = mock_plt

    report = generate_variation_plot(two_charts, output_dir=tmp_path, filename="cmp.png")

    assert ax_mock.plot.call_count == 2
    second_args, second_kwargs = ax_mock.plot.call_args
    assert second_args[0] == [1, 2]
    assert second_kwargs["color"] == pytest.approx((34 / 255, 197 / 255, 94 / 255, 1.0))
    assert set(report.statistics) == {"A", "B"}
    assert report.path == tmp_path / "cmp.png"


def test_requires_a_series(tmp_path):
    with pytest.raises(ValueError, match="At least one"):
        generate_variation_plot([], output_dir=tmp_path)


def test_helpers(two_charts):
    assert _merged_labels(two_charts) == ["Ene 2023", "Feb 2023", "Mar 2023"]
    assert list(_tick_positions(3, 24)) == [0, 1, 2]
    assert list(_tick_positions(50, 24)) == list(range(0, 50, 3))
    assert css_to_rgba("rgba(255, 0, 0, 0.2)") == (1.0, 0.0, 0.0, 0.2)
    assert css_to_rgba("#126782") == "#126782"
