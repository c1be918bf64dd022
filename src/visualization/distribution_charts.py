"""
Distribution renderers: faceted histograms, density plots and growth curves.

These work on any long-form table (the temperature long table or the
ChickWeight growth table) and return seaborn FacetGrids, one panel per
category of the facet column.
"""

import pandas as pd
import seaborn as sns

from src.visualization.styling import DIET_PALETTE


def _require_columns(df: pd.DataFrame, columns: list[str | None]) -> None:
    missing = [column for column in columns if column is not None and column not in df.columns]
    if missing:
        raise KeyError(
            f"Missing required columns for this chart: {missing}. "
            f"Found columns: {list(df.columns)}."
        )


def plot_faceted_histogram(
    df: pd.DataFrame,
    value: str,
    facet: str,
    bins: int = 20,
    hue: str | None = None,
    palette: dict | str | None = None,
    col_wrap: int | None = None,
) -> sns.FacetGrid:
    """
    One histogram of `value` per category of `facet`.

    Args:
        df: Long-form table.
        value: Numeric column to bin (e.g. 'temperature', 'weight').
        facet: Categorical column; one panel per category.
        bins: Number of bins per panel.
        hue: Optional column to color bars by (often the facet column itself).
        palette: Colors for hue; ignored when hue is None.
        col_wrap: Wrap panels after this many columns.

    Returns:
        FacetGrid with one histogram panel per facet category.

    Raises:
        KeyError: If a referenced column is missing.
    """
    _require_columns(df, [value, facet, hue])

    options = {}
    if hue is not None:
        options['hue'] = hue
        if palette is not None:
            options['palette'] = palette

    return sns.displot(
        data=df,
        x=value,
        col=facet,
        col_wrap=col_wrap,
        kind='hist',
        bins=bins,
        height=3,
        aspect=1.2,
        **options,
    )


def plot_density(
    df: pd.DataFrame,
    value: str,
    hue: str | None = None,
    facet: str | None = None,
    palette: dict | str | None = None,
    fill: bool = True,
    col_wrap: int | None = None,
) -> sns.FacetGrid:
    """
    Kernel density estimate of `value`, colored by `hue` and/or faceted.

    Each hue level is normalized on its own (common_norm=False), so groups of
    different sizes are compared by shape rather than by count.

    Args:
        df: Long-form table.
        value: Numeric column.
        hue: Optional column mapped to color (overlaid curves).
        facet: Optional column mapped to panels.
        palette: Colors for hue; ignored when hue is None.
        fill: Shade the area under each curve.
        col_wrap: Wrap panels after this many columns (only with facet).

    Returns:
        FacetGrid holding the density curves (a single panel without facet).
    """
    _require_columns(df, [value, hue, facet])

    options = {}
    if hue is not None:
        options['hue'] = hue
        options['common_norm'] = False
        if palette is not None:
            options['palette'] = palette
    if facet is not None:
        options['col'] = facet
        options['col_wrap'] = col_wrap

    return sns.displot(
        data=df,
        x=value,
        kind='kde',
        fill=fill,
        height=3.5,
        aspect=1.3,
        **options,
    )


def plot_growth_curves(
    growth: pd.DataFrame,
    palette: dict | str | None = None,
    col_wrap: int = 2,
) -> sns.FacetGrid:
    """
    Weight over time, one line per chick, one panel per diet.

    Args:
        growth: GrowthTable (weight, Time, Chick, Diet).
        palette: Diet colors; defaults to DIET_PALETTE.
        col_wrap: Panels per row.

    Returns:
        FacetGrid with one panel per diet.
    """
    _require_columns(growth, ['weight', 'Time', 'Chick', 'Diet'])

    return sns.relplot(
        data=growth,
        x='Time',
        y='weight',
        hue='Diet',
        units='Chick',
        estimator=None,
        kind='line',
        col='Diet',
        col_wrap=col_wrap,
        palette=palette or DIET_PALETTE,
        linewidth=0.8,
        alpha=0.7,
        legend=False,
        height=3.5,
    )
