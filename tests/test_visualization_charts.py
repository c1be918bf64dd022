"""
Tests for the chart renderers and the post-render helpers.

Charts are rendered with the Agg backend (see conftest.py) and inspected
through matplotlib's artist API: tick labels, legend entries, text artists,
lines and panel counts. No image comparison.
"""

import matplotlib.pyplot as plt
import pytest
import seaborn as sns
from matplotlib.axes import Axes

from src.analytics.reshape import pivot_years, to_long
from src.data.io import normalize_growth_table
from src.data.schemas import MONTH_NAMES, SEASON_NAMES
from src.visualization.distribution_charts import (
    plot_density,
    plot_faceted_histogram,
    plot_growth_curves,
)
from src.visualization.styling import SEASON_PALETTE, label_chart, save_chart
from src.visualization.temperature_charts import (
    add_month_labels,
    add_reference_line,
    add_trend_line,
    plot_monthly_boxplot,
    plot_monthly_violin,
    plot_year_scatter,
)

from conftest import make_growth_df


@pytest.fixture
def long_temperatures(wide_temperatures):
    return to_long(wide_temperatures)


@pytest.fixture
def pivoted(long_temperatures):
    return pivot_years(long_temperatures, 1780, 2016)


@pytest.fixture
def growth():
    return normalize_growth_table(make_growth_df())


def month_texts(ax: Axes) -> list[str]:
    return [text.get_text() for text in ax.texts if text.get_text() in MONTH_NAMES]


# ============================================================================
# Monthly distributions
# ============================================================================

def test_monthly_boxplot_months_in_calendar_order(long_temperatures):
    ax = plot_monthly_boxplot(long_temperatures)
    ax.figure.canvas.draw()

    assert isinstance(ax, Axes)
    assert [label.get_text() for label in ax.get_xticklabels()] == list(MONTH_NAMES)
    assert ax.get_ylabel() == 'Temperature (°C)'


def test_monthly_boxplot_legend_lists_seasons(long_temperatures):
    ax = plot_monthly_boxplot(long_temperatures)

    legend = ax.get_legend()
    assert legend is not None
    assert [text.get_text() for text in legend.get_texts()] == list(SEASON_NAMES)


def test_monthly_boxplot_draws_on_given_axes(long_temperatures):
    _, ax = plt.subplots()

    assert plot_monthly_boxplot(long_temperatures, ax=ax) is ax


@pytest.mark.parametrize("filled", [False, True])
def test_monthly_violin_variants(long_temperatures, filled):
    """Bordered and filled violins both render one body per month."""
    ax = plot_monthly_violin(long_temperatures, filled=filled)

    assert isinstance(ax, Axes)
    assert len(ax.collections) >= len(MONTH_NAMES)
    assert ax.get_xlabel() == 'Month'


def test_monthly_boxplot_missing_column(long_temperatures):
    with pytest.raises(KeyError):
        plot_monthly_boxplot(long_temperatures.drop(columns=['season']))


# ============================================================================
# Year-vs-year scatter
# ============================================================================

def test_year_scatter_labels_every_month(pivoted):
    ax = plot_year_scatter(pivoted, 1780, 2016)

    assert sorted(month_texts(ax)) == sorted(MONTH_NAMES)
    assert ax.get_xlabel() == 'Temperature in 1780 (°C)'
    assert ax.get_ylabel() == 'Temperature in 2016 (°C)'


def test_year_scatter_without_labels(pivoted):
    ax = plot_year_scatter(pivoted, 1780, 2016, label_months=False)

    assert month_texts(ax) == []


def test_year_scatter_repel_variant(pivoted):
    """Repelled labels are still one per month."""
    ax = plot_year_scatter(pivoted, 1780, 2016, repel_labels=True)

    assert sorted(month_texts(ax)) == sorted(MONTH_NAMES)


def test_year_scatter_skips_incomplete_months(long_temperatures):
    """Months missing in one year get neither a point label nor an error."""
    partial = pivot_years(long_temperatures, 1780, 2017)

    ax = plot_year_scatter(partial, 1780, 2017)

    assert sorted(month_texts(ax)) == sorted(MONTH_NAMES[:8])


def test_year_scatter_overlays(pivoted):
    """Trend line annotation and the y = x diagonal are added on request."""
    plain = plot_year_scatter(pivoted, 1780, 2016)
    overlaid = plot_year_scatter(pivoted, 1780, 2016, trend_line=True, reference_line=True)

    assert len(overlaid.lines) >= len(plain.lines) + 2
    assert any(text.get_text().startswith("r = ") for text in overlaid.texts)
    assert overlaid.get_xlabel() == 'Temperature in 1780 (°C)'


def test_year_scatter_wrong_years(pivoted):
    """Asking for years the pivot doesn't hold fails loudly."""
    with pytest.raises(KeyError):
        plot_year_scatter(pivoted, 1781, 2016)


def test_add_reference_line_adds_line():
    _, ax = plt.subplots()

    add_reference_line(ax)

    assert len(ax.lines) == 1


def test_add_trend_line_returns_fit(pivoted):
    _, ax = plt.subplots()

    fit = add_trend_line(ax, pivoted, 'temperature_1780', 'temperature_2016')

    assert fit.n == 12
    assert any(f"{fit.r:.2f}" in text.get_text() for text in ax.texts)


def test_add_month_labels_returns_texts(pivoted):
    _, ax = plt.subplots()

    texts = add_month_labels(ax, pivoted, 'temperature_1780', 'temperature_2016')

    assert len(texts) == 12
    assert texts[0].get_text() == 'January'


# ============================================================================
# Faceted distributions
# ============================================================================

def test_faceted_histogram_one_panel_per_season(long_temperatures):
    grid = plot_faceted_histogram(
        long_temperatures, 'temperature', 'season', hue='season', palette=SEASON_PALETTE,
    )

    assert isinstance(grid, sns.FacetGrid)
    assert len(grid.axes.flat) == 4
    assert all(len(ax.patches) > 0 for ax in grid.axes.flat)


def test_faceted_histogram_by_diet(growth):
    grid = plot_faceted_histogram(growth, 'weight', 'Diet', col_wrap=2)

    assert len(grid.axes.flat) == 4


def test_density_single_panel(long_temperatures):
    grid = plot_density(long_temperatures, 'temperature', hue='season', palette=SEASON_PALETTE)

    assert len(grid.axes.flat) == 1


def test_density_faceted(growth):
    grid = plot_density(growth, 'weight', hue='Diet', facet='Diet', col_wrap=2)

    assert len(grid.axes.flat) == 4
    assert all(len(ax.collections) > 0 for ax in grid.axes.flat)


def test_density_missing_column(long_temperatures):
    with pytest.raises(KeyError):
        plot_density(long_temperatures, 'temperature', hue='Diet')


def test_growth_curves_one_panel_per_diet(growth):
    grid = plot_growth_curves(growth)

    assert len(grid.axes.flat) == 4
    # 3 chicks per diet, one line each
    for ax in grid.axes.flat:
        drawn = [line for line in ax.lines if len(line.get_xdata()) > 0]
        assert len(drawn) == 3


# ============================================================================
# label_chart / save_chart
# ============================================================================

def test_label_chart_on_axes(long_temperatures):
    ax = plot_monthly_boxplot(long_temperatures)

    result = label_chart(ax, title="Monthly", y="°C", ylim=(-10, 25))

    assert result is ax
    assert ax.get_title() == "Monthly"
    assert ax.get_ylabel() == "°C"
    assert ax.get_xlabel() == 'Month'
    assert ax.get_ylim() == (-10, 25)


def test_label_chart_on_facet_grid(long_temperatures):
    grid = plot_faceted_histogram(long_temperatures, 'temperature', 'season')

    result = label_chart(grid, title="By season", x="Temp", xlim=(-10, 25))

    assert result is grid
    assert grid.figure._suptitle.get_text() == "By season"
    assert grid.axes.flat[0].get_xlabel() == "Temp"
    assert all(ax.get_xlim() == (-10, 25) for ax in grid.axes.flat)


def test_label_chart_rejects_other_objects():
    with pytest.raises(TypeError):
        label_chart("not a chart", title="x")


def test_save_chart_writes_file_and_closes_figure(tmp_path, pivoted):
    ax = plot_year_scatter(pivoted, 1780, 2016)
    figure = ax.figure

    path = save_chart(ax, tmp_path / "nested" / "scatter.png", dpi=50)

    assert path.exists()
    assert path.stat().st_size > 0
    assert not plt.fignum_exists(figure.number)


def test_save_chart_facet_grid(tmp_path, growth):
    grid = plot_growth_curves(growth)

    path = save_chart(grid, tmp_path / "growth.png", dpi=50)

    assert path.exists()
