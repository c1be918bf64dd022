"""
Summary statistics behind the charts: trend fits and seasonal summaries.

**Conceptual**: The year-comparison scatterplot carries a trend line and a
correlation coefficient. Computing them here (with scipy) instead of reading
them off the chart lets the action scripts print the numbers and lets tests
check them without rendering anything.
"""

from dataclasses import dataclass

import numpy as np
import pandas as pd
from scipy import stats

from src.data.schemas import SEASON_NAMES

MIN_TREND_POINTS = 3


@dataclass(frozen=True)
class TrendFit:
    """
    Ordinary least-squares fit of y on x, plus Pearson correlation.

    Attributes:
        slope: Change in y per unit of x.
        intercept: y at x = 0.
        r: Pearson correlation coefficient (-1..1).
        p_value: Two-sided p-value for the null hypothesis r = 0.
        n: Number of (x, y) pairs used (rows with NaN in either are skipped).
    """
    slope: float
    intercept: float
    r: float
    p_value: float
    n: int

    def predict(self, x):
        """Evaluate the fitted line at x (scalar or array)."""
        return self.intercept + self.slope * np.asarray(x, dtype=float)


def fit_trend(df: pd.DataFrame, x: str, y: str) -> TrendFit:
    """
    Fit a straight line through the (x, y) pairs of a DataFrame.

    **Mathematically**: scipy.stats.linregress minimizes sum((y - a - b*x)^2)
    and reports r, the Pearson correlation between x and y.

    Args:
        df: Table holding both columns (e.g. a pivot_years result).
        x: Column for the horizontal axis.
        y: Column for the vertical axis.

    Returns:
        TrendFit with slope, intercept, r, p_value and n.

    Raises:
        KeyError: If x or y is not a column of df.
        ValueError: If fewer than 3 complete pairs remain, or x is constant.
    """
    for column in (x, y):
        if column not in df.columns:
            raise KeyError(f"Column '{column}' not found. Available: {list(df.columns)}")

    pairs = df[[x, y]].dropna()
    if len(pairs) < MIN_TREND_POINTS:
        raise ValueError(
            f"Need at least {MIN_TREND_POINTS} complete ({x}, {y}) pairs to fit a trend, "
            f"got {len(pairs)}."
        )
    if pairs[x].nunique() < 2:
        raise ValueError(f"Cannot fit a trend: '{x}' is constant.")

    result = stats.linregress(pairs[x].to_numpy(dtype=float), pairs[y].to_numpy(dtype=float))

    return TrendFit(
        slope=float(result.slope),
        intercept=float(result.intercept),
        r=float(result.rvalue),
        p_value=float(result.pvalue),
        n=len(pairs),
    )


def summarize_by_season(long: pd.DataFrame) -> pd.DataFrame:
    """
    Per-season temperature summary of a long table.

    Missing temperatures are counted in 'n_missing' rather than silently
    skipped, so a table built with to_long(drop_missing=False) reports its
    gaps explicitly; mean/std/min/max are computed over recorded values.

    Args:
        long: Long temperature table (from to_long).

    Returns:
        DataFrame indexed by season (Winter, Spring, Summer, Fall) with columns
        n_observations, n_missing, mean, std, min, max.

    Raises:
        KeyError: If 'season' or 'temperature' is missing.
    """
    for column in ('season', 'temperature'):
        if column not in long.columns:
            raise KeyError(f"Column '{column}' not found. Available: {list(long.columns)}")

    grouped = long.groupby('season', observed=False)['temperature']
    summary = pd.DataFrame({
        'n_observations': grouped.count(),
        'n_missing': grouped.apply(lambda values: int(values.isna().sum())),
        'mean': grouped.mean(),
        'std': grouped.std(),
        'min': grouped.min(),
        'max': grouped.max(),
    })

    summary = summary.reindex(list(SEASON_NAMES))
    summary.index.name = 'season'
    summary[['n_observations', 'n_missing']] = (
        summary[['n_observations', 'n_missing']].fillna(0).astype('int64')
    )

    return summary
