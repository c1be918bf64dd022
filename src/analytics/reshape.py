"""
Wide-to-long reshaping and two-year pivoting for the temperature series.

**Conceptual**: The temperature file is stored "wide": one row per year, one
column per month. Plotting libraries want it "long": one row per observation,
with the sub-category (month) as an explicit column they can map to an axis,
a color or a facet. This module converts between the two shapes:

  wide (year x 12 months)  --to_long-->  long (year, month, temperature, season)
  long                     --to_wide-->  wide            (inverse, for checks)
  long                     --pivot_years--> one row per month, two year columns

**Invariants**:
  - month is an ordered categorical (calendar order survives every groupby).
  - season is derived from month through the fixed SEASON_BY_MONTH lookup.
  - pivot_years never drops a month: a month missing in one of the two years
    comes back as NaN in that year's column (and in the difference).

**Teaching note**: `melt` and `pivot` are the pandas spellings of the tidyr
verbs `pivot_longer` and `pivot_wider`. Once a table is long, "color by
season" or "one panel per season" is a single argument to the plotting call
instead of a loop.
"""

from typing import Iterable

import pandas as pd

from src.data.schemas import (
    LONG_TEMPERATURE_COLUMNS,
    MONTH_DTYPE,
    MONTH_NAMES,
    season_for_months,
    validate_long_temperature_schema,
    validate_wide_temperature_schema,
)


def to_long(wide: pd.DataFrame, drop_missing: bool = True) -> pd.DataFrame:
    """
    Convert a WideTable into one record per (year, month).

    **Functionally**:
      - Melts the 12 month columns into 'month' / 'temperature'.
      - Casts 'month' to the ordered month categorical.
      - Attaches 'season' from the static month -> season lookup.
      - Sorts year-major, then in calendar order.
      - Drops records whose temperature is missing (unless drop_missing=False).

    The output has exactly len(wide) * 12 - (number of missing cells) rows
    when drop_missing is True.

    Args:
        wide: WideTable (validated: 'year' + January..December).
        drop_missing: If True (default), exclude records without a temperature.
                      Pass False to keep them as explicit NaN rows.

    Returns:
        Long DataFrame with columns year, month, temperature, season.

    Raises:
        SchemaValidationError: If wide doesn't conform to the WideTable schema.

    Example:
        >>> long = to_long(wide)
        >>> long.head(2)
           year     month  temperature  season
        0  1780   January         -5.2  Winter
        1  1780  February         -2.9  Winter
    """
    validate_wide_temperature_schema(wide, context="to_long")

    long = wide.melt(
        id_vars='year',
        value_vars=list(MONTH_NAMES),
        var_name='month',
        value_name='temperature',
    )
    long['season'] = season_for_months(long['month'])
    long['month'] = long['month'].astype(MONTH_DTYPE)

    # melt stacks month by month; re-sort so each year's months are contiguous
    long = long.sort_values(['year', 'month'], kind='stable')

    if drop_missing:
        long = long.dropna(subset=['temperature'])

    return long[LONG_TEMPERATURE_COLUMNS].reset_index(drop=True)


def to_wide(long: pd.DataFrame) -> pd.DataFrame:
    """
    Pivot a long temperature table back to the WideTable shape.

    Inverse of to_long: one row per year, January..December columns. Cells
    with no record (dropped missing temperatures) come back as NaN, so
    to_wide(to_long(wide)) reproduces wide exactly.

    Raises:
        SchemaValidationError: If long doesn't conform to the LongTable schema.
        ValueError: If a (year, month) pair appears more than once.
    """
    validate_long_temperature_schema(long, context="to_wide")

    # String month labels give plain (non-categorical) column names
    wide = (
        long.assign(month=long['month'].astype(str))
        .pivot(index='year', columns='month', values='temperature')
        .reindex(columns=list(MONTH_NAMES))
        .astype('float64')
        .reset_index()
    )
    wide.columns.name = None
    wide['year'] = wide['year'].astype('int64')

    return wide


def select_years(long: pd.DataFrame, years: Iterable[int]) -> pd.DataFrame:
    """Return the records of a long table whose year is in `years`."""
    years = list(years)
    return long[long['year'].isin(years)].reset_index(drop=True)


def temperature_column(year: int) -> str:
    """Column name used for a year's temperatures in a pivoted table."""
    return f"temperature_{year}"


def pivot_years(long: pd.DataFrame, year_a: int, year_b: int) -> pd.DataFrame:
    """
    Compare two years month by month.

    **Functionally**:
      - Filters the long table to year_a and year_b.
      - Pivots to one row per (month, season), with columns
        temperature_<year_a> and temperature_<year_b>.
      - Adds difference = temperature_<year_b> - temperature_<year_a>.
      - Always returns the 12 months in calendar order; a month missing for
        one year yields NaN in that year's column and in 'difference'.

    Args:
        long: Long temperature table (from to_long).
        year_a: Earlier (reference) year.
        year_b: Later year; difference is year_b minus year_a.

    Returns:
        DataFrame with columns month, season, temperature_<year_a>,
        temperature_<year_b>, difference.

    Raises:
        ValueError: If the two years are equal, a year has no records at all,
                    or a (year, month) pair is duplicated.
        SchemaValidationError: If long doesn't conform to the LongTable schema.

    Example:
        >>> pivoted = pivot_years(long, 1780, 2016)
        >>> pivoted.columns.tolist()
        ['month', 'season', 'temperature_1780', 'temperature_2016', 'difference']
    """
    if year_a == year_b:
        raise ValueError(f"year_a and year_b must differ, got {year_a} twice.")

    validate_long_temperature_schema(long, context="pivot_years")

    subset = select_years(long, [year_a, year_b])

    absent = [year for year in (year_a, year_b) if year not in set(subset['year'])]
    if absent:
        raise ValueError(
            f"No temperature records for year(s) {absent}. "
            f"Available years: {long['year'].min()}-{long['year'].max()}."
        )

    duplicated = subset.duplicated(subset=['year', 'month'])
    if duplicated.any():
        raise ValueError(
            f"Duplicate (year, month) records: "
            f"{subset.loc[duplicated, ['year', 'month']].values.tolist()[:5]}."
        )

    col_a = temperature_column(year_a)
    col_b = temperature_column(year_b)

    pivoted = (
        subset.assign(month=subset['month'].astype(str))
        .pivot(index='month', columns='year', values='temperature')
        .reindex(index=list(MONTH_NAMES), columns=[year_a, year_b])
        .rename_axis(index='month')
        .rename(columns={year_a: col_a, year_b: col_b})
    )
    pivoted.columns.name = None
    pivoted = pivoted.reset_index()

    pivoted['season'] = season_for_months(pivoted['month'])
    pivoted['month'] = pivoted['month'].astype(MONTH_DTYPE)
    pivoted[[col_a, col_b]] = pivoted[[col_a, col_b]].astype('float64')
    pivoted['difference'] = pivoted[col_b] - pivoted[col_a]

    return pivoted[['month', 'season', col_a, col_b, 'difference']]
