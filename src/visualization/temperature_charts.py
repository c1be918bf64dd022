"""
Renderers for the monthly temperature series.

**Conceptual**: Each function maps table columns to visual channels and returns
the matplotlib Axes it drew on:
  - Long table  -> monthly boxplot / violin plot (x = month, color = season).
  - Pivoted pair -> year-vs-year scatterplot (color = season, size = the
    temperature difference, a text label per month), with optional overlays:
    a least-squares trend line and the y = x reference diagonal.

Month order on the x axis comes from the ordered month categorical, so no
renderer passes an explicit `order=`.

**Teaching note**: Points above the diagonal are months that were warmer in
the later year. The trend line shows whether the warming is uniform (parallel
to the diagonal) or concentrated in cold months (flatter than the diagonal).
"""

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from adjustText import adjust_text
from matplotlib.axes import Axes
from matplotlib.text import Text

from src.analytics.reshape import temperature_column
from src.analytics.statistics import TrendFit, fit_trend
from src.visualization.styling import SEASON_PALETTE, TEMPERATURE_LABEL


def _require_columns(df: pd.DataFrame, columns: list[str]) -> None:
    missing = [column for column in columns if column not in df.columns]
    if missing:
        raise KeyError(
            f"Missing required columns for this chart: {missing}. "
            f"Found columns: {list(df.columns)}."
        )


def plot_monthly_boxplot(
    long: pd.DataFrame,
    palette: dict | str | None = None,
    ax: Axes | None = None,
) -> Axes:
    """
    Boxplot of temperatures per month, boxes colored by season.

    Args:
        long: Long temperature table (month, temperature, season).
        palette: Season colors; defaults to SEASON_PALETTE.
        ax: Axes to draw on; a new figure is created if None.

    Returns:
        The Axes holding the boxplot.

    Raises:
        KeyError: If a required column is missing.
    """
    _require_columns(long, ['month', 'temperature', 'season'])

    if ax is None:
        _, ax = plt.subplots(figsize=(12, 6))

    sns.boxplot(
        data=long,
        x='month',
        y='temperature',
        hue='season',
        palette=palette or SEASON_PALETTE,
        dodge=False,
        ax=ax,
    )
    ax.set(xlabel='Month', ylabel=TEMPERATURE_LABEL)
    ax.tick_params(axis='x', rotation=45)

    return ax


def plot_monthly_violin(
    long: pd.DataFrame,
    filled: bool = False,
    palette: dict | str | None = None,
    ax: Axes | None = None,
) -> Axes:
    """
    Violin plot of temperatures per month.

    Two variants: bordered (filled=False, the outline carries the season
    color) and filled (filled=True, the body carries the season color).

    Args:
        long: Long temperature table (month, temperature, season).
        filled: Fill the violins instead of drawing colored outlines.
        palette: Season colors; defaults to SEASON_PALETTE.
        ax: Axes to draw on; a new figure is created if None.

    Returns:
        The Axes holding the violins.
    """
    _require_columns(long, ['month', 'temperature', 'season'])

    if ax is None:
        _, ax = plt.subplots(figsize=(12, 6))

    sns.violinplot(
        data=long,
        x='month',
        y='temperature',
        hue='season',
        palette=palette or SEASON_PALETTE,
        dodge=False,
        fill=filled,
        inner='quart',
        ax=ax,
    )
    ax.set(xlabel='Month', ylabel=TEMPERATURE_LABEL)
    ax.tick_params(axis='x', rotation=45)

    return ax


def add_month_labels(
    ax: Axes,
    pivoted: pd.DataFrame,
    x: str,
    y: str,
    repel: bool = False,
) -> list[Text]:
    """
    Write each month's name next to its point.

    With repel=True, labels are moved apart with adjustText so none overlap,
    and a thin leader line joins each moved label to its point.

    Returns:
        The Text artists created (one per month with both values present).
    """
    points = pivoted.dropna(subset=[x, y])

    texts = [
        ax.text(row[x], row[y], str(row['month']), fontsize=9, ha='left', va='bottom')
        for _, row in points.iterrows()
    ]

    if repel and texts:
        adjust_text(
            texts,
            ax=ax,
            arrowprops=dict(arrowstyle='-', color='grey', lw=0.5),
        )

    return texts


def add_trend_line(
    ax: Axes,
    pivoted: pd.DataFrame,
    x: str,
    y: str,
    color: str = 'black',
) -> TrendFit:
    """
    Overlay a least-squares trend line and annotate Pearson r.

    Returns:
        The TrendFit the annotation reports.

    Raises:
        ValueError: If fewer than 3 complete (x, y) pairs are available.
    """
    fit = fit_trend(pivoted, x, y)

    sns.regplot(
        data=pivoted,
        x=x,
        y=y,
        scatter=False,
        ci=None,
        color=color,
        line_kws={'linewidth': 1.5},
        ax=ax,
    )
    ax.annotate(
        f"r = {fit.r:.2f}, slope = {fit.slope:.2f}",
        xy=(0.02, 0.96),
        xycoords='axes fraction',
        va='top',
        fontsize=10,
    )

    return fit


def add_reference_line(ax: Axes, color: str = 'grey') -> Axes:
    """Overlay the y = x diagonal (no change between the two years)."""
    ax.axline((0, 0), slope=1, linestyle='--', color=color, linewidth=1)
    return ax


def plot_year_scatter(
    pivoted: pd.DataFrame,
    year_a: int,
    year_b: int,
    palette: dict | str | None = None,
    label_months: bool = True,
    repel_labels: bool = False,
    trend_line: bool = False,
    reference_line: bool = False,
    ax: Axes | None = None,
) -> Axes:
    """
    Scatter the monthly temperatures of two years against each other.

    **Visual mapping**:
      - x = temperature in year_a, y = temperature in year_b
      - color = season, point size = difference (year_b - year_a)
      - one text label per month (repel_labels=True avoids overlaps)
      - optional trend line and y = x reference diagonal

    Args:
        pivoted: Output of pivot_years(long, year_a, year_b).
        year_a: Year on the x axis.
        year_b: Year on the y axis.
        palette: Season colors; defaults to SEASON_PALETTE.
        label_months: Draw a text label per month.
        repel_labels: Use non-overlapping label placement.
        trend_line: Overlay a least-squares trend line (see add_trend_line).
        reference_line: Overlay the y = x diagonal.
        ax: Axes to draw on; a new figure is created if None.

    Returns:
        The Axes holding the scatterplot and overlays.

    Raises:
        KeyError: If the pivoted table lacks the columns for these years.
    """
    x = temperature_column(year_a)
    y = temperature_column(year_b)
    _require_columns(pivoted, ['month', 'season', 'difference', x, y])

    if ax is None:
        _, ax = plt.subplots(figsize=(9, 8))

    sns.scatterplot(
        data=pivoted,
        x=x,
        y=y,
        hue='season',
        size='difference',
        sizes=(40, 400),
        palette=palette or SEASON_PALETTE,
        ax=ax,
    )
    if reference_line:
        add_reference_line(ax)
    if trend_line:
        add_trend_line(ax, pivoted, x, y)
    if label_months:
        add_month_labels(ax, pivoted, x, y, repel=repel_labels)

    # regplot relabels the axes with the raw column names
    ax.set(
        xlabel=f'Temperature in {year_a} (°C)',
        ylabel=f'Temperature in {year_b} (°C)',
    )

    return ax
