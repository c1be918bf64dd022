"""
Tests for wide/long reshaping and two-year pivoting.

This module tests:
  - to_long record counts, ordering and season assignment.
  - to_wide as the inverse of to_long.
  - pivot_years shape, difference arithmetic and NaN handling.
"""

import numpy as np
import pandas as pd
import pytest

from src.analytics.reshape import (
    pivot_years,
    select_years,
    temperature_column,
    to_long,
    to_wide,
)
from src.data.io import read_wide_temperature_table
from src.data.schemas import (
    LONG_TEMPERATURE_COLUMNS,
    MONTH_NAMES,
    SEASON_BY_MONTH,
    SchemaValidationError,
)

from conftest import TEMPERATURE_ROWS


# ============================================================================
# Tests for to_long
# ============================================================================

def test_to_long_record_count(wide_temperatures):
    """Record count is years x 12 minus the number of missing cells."""
    n_missing = int(wide_temperatures.drop(columns='year').isna().sum().sum())

    long = to_long(wide_temperatures)

    assert n_missing == 4
    assert len(long) == len(wide_temperatures) * 12 - n_missing
    assert long['temperature'].notna().all()


def test_to_long_columns_and_dtypes(wide_temperatures):
    """Long table has the fixed columns; month and season are ordered categoricals."""
    long = to_long(wide_temperatures)

    assert list(long.columns) == LONG_TEMPERATURE_COLUMNS
    assert long['month'].dtype.ordered
    assert list(long['month'].cat.categories) == list(MONTH_NAMES)
    assert long['season'].dtype.ordered
    assert list(long['season'].cat.categories) == ['Winter', 'Spring', 'Summer', 'Fall']
    assert long['year'].dtype == 'int64'


def test_to_long_season_is_function_of_month(wide_temperatures):
    """Every record's season is the fixed lookup of its month."""
    long = to_long(wide_temperatures)

    for month, season in zip(long['month'].astype(str), long['season'].astype(str)):
        assert SEASON_BY_MONTH[month] == season


def test_to_long_season_lookup_covers_calendar():
    """Dec-Feb Winter, Mar-May Spring, Jun-Aug Summer, Sep-Nov Fall."""
    assert SEASON_BY_MONTH['December'] == 'Winter'
    assert SEASON_BY_MONTH['February'] == 'Winter'
    assert SEASON_BY_MONTH['March'] == 'Spring'
    assert SEASON_BY_MONTH['August'] == 'Summer'
    assert SEASON_BY_MONTH['November'] == 'Fall'
    assert len(SEASON_BY_MONTH) == 12


def test_to_long_is_year_major_in_calendar_order(wide_temperatures):
    """Rows are sorted by year, then January..December."""
    long = to_long(wide_temperatures)

    first_year = long[long['year'] == 1780]
    assert first_year.index.tolist() == list(range(12))
    assert first_year['month'].astype(str).tolist() == list(MONTH_NAMES)
    assert long['year'].is_monotonic_increasing


def test_to_long_values_match_wide_cells(wide_temperatures):
    """Each record carries the value of its (year, month) cell."""
    long = to_long(wide_temperatures)

    record = long[(long['year'] == 2016) & (long['month'] == 'July')]
    assert len(record) == 1
    assert record['temperature'].iloc[0] == TEMPERATURE_ROWS[2016][6]


def test_to_long_drops_partial_year_months(wide_temperatures):
    """Unrecorded months of the partial final year produce no records."""
    long = to_long(wide_temperatures)
    last_year = long[long['year'] == 2017]

    assert len(last_year) == 8
    assert last_year['month'].astype(str).tolist() == list(MONTH_NAMES[:8])


def test_to_long_keep_missing(wide_temperatures):
    """drop_missing=False keeps every cell, missing ones as NaN."""
    long = to_long(wide_temperatures, drop_missing=False)

    assert len(long) == len(wide_temperatures) * 12
    assert int(long['temperature'].isna().sum()) == 4


def test_to_long_is_idempotent(temperature_file):
    """Reading and reshaping the same file twice gives identical tables."""
    first = to_long(read_wide_temperature_table(temperature_file))
    second = to_long(read_wide_temperature_table(temperature_file))

    pd.testing.assert_frame_equal(first, second)


def test_to_long_rejects_malformed_wide(wide_temperatures):
    """A wide table without all 12 months is rejected."""
    with pytest.raises(SchemaValidationError):
        to_long(wide_temperatures.drop(columns=['June']))


# ============================================================================
# Tests for to_wide
# ============================================================================

def test_to_wide_inverts_to_long(wide_temperatures):
    """to_wide(to_long(wide)) reproduces the original table, NaNs included."""
    roundtrip = to_wide(to_long(wide_temperatures))

    pd.testing.assert_frame_equal(roundtrip, wide_temperatures)


def test_to_wide_rejects_plain_string_months(wide_temperatures):
    """Long tables must carry the month categorical."""
    long = to_long(wide_temperatures)
    long['month'] = long['month'].astype(str)

    with pytest.raises(SchemaValidationError):
        to_wide(long)


# ============================================================================
# Tests for pivot_years
# ============================================================================

def test_pivot_years_shape_and_columns(wide_temperatures):
    """One row per month, in calendar order, with the two year columns."""
    pivoted = pivot_years(to_long(wide_temperatures), 1780, 2016)

    assert len(pivoted) == 12
    assert list(pivoted.columns) == [
        'month', 'season', 'temperature_1780', 'temperature_2016', 'difference',
    ]
    assert pivoted['month'].astype(str).tolist() == list(MONTH_NAMES)


def test_pivot_years_difference_is_b_minus_a(wide_temperatures):
    """difference = temperature_<year_b> - temperature_<year_a>, row by row."""
    pivoted = pivot_years(to_long(wide_temperatures), 1780, 2016)

    january = pivoted[pivoted['month'] == 'January'].iloc[0]
    assert january['temperature_1780'] == -5.2
    assert january['temperature_2016'] == -3.1
    assert january['difference'] == -3.1 - -5.2

    expected = pivoted['temperature_2016'] - pivoted['temperature_1780']
    np.testing.assert_allclose(pivoted['difference'], expected)


def test_pivot_years_season_matches_month(wide_temperatures):
    """Season column in the pivot follows the month lookup."""
    pivoted = pivot_years(to_long(wide_temperatures), 1780, 2016)

    for month, season in zip(pivoted['month'].astype(str), pivoted['season'].astype(str)):
        assert SEASON_BY_MONTH[month] == season


def test_pivot_years_keeps_months_missing_in_one_year(wide_temperatures):
    """A month absent for one year stays in the table with NaN values."""
    pivoted = pivot_years(to_long(wide_temperatures), 1780, 2017)

    assert len(pivoted) == 12
    september = pivoted[pivoted['month'] == 'September'].iloc[0]
    assert september['temperature_1780'] == 11.0
    assert np.isnan(september['temperature_2017'])
    assert np.isnan(september['difference'])
    assert int(pivoted['difference'].isna().sum()) == 4


def test_pivot_years_reversed_order_negates_difference(wide_temperatures):
    """Swapping the years flips the sign of the difference."""
    long = to_long(wide_temperatures)

    forward = pivot_years(long, 1780, 2016)
    backward = pivot_years(long, 2016, 1780)

    np.testing.assert_allclose(forward['difference'], -backward['difference'])


def test_pivot_years_equal_years_raises(wide_temperatures):
    """Comparing a year with itself is rejected."""
    with pytest.raises(ValueError) as exc_info:
        pivot_years(to_long(wide_temperatures), 1780, 1780)

    assert 'must differ' in str(exc_info.value)


def test_pivot_years_absent_year_raises(wide_temperatures):
    """A year with no records at all is rejected."""
    with pytest.raises(ValueError) as exc_info:
        pivot_years(to_long(wide_temperatures), 1780, 1900)

    assert '1900' in str(exc_info.value)


def test_pivot_years_duplicate_records_raise(wide_temperatures):
    """Duplicate (year, month) records make the pivot ambiguous."""
    long = to_long(wide_temperatures)
    duplicated = pd.concat([long, long.iloc[[0]]], ignore_index=True)

    with pytest.raises(ValueError) as exc_info:
        pivot_years(duplicated, 1780, 2016)

    assert 'Duplicate' in str(exc_info.value)


# ============================================================================
# Tests for helpers
# ============================================================================

def test_select_years(wide_temperatures):
    """select_years keeps only the requested years."""
    long = to_long(wide_temperatures)

    subset = select_years(long, [1781, 2016])

    assert set(subset['year']) == {1781, 2016}
    assert len(subset) == 24


def test_temperature_column():
    assert temperature_column(1780) == 'temperature_1780'
