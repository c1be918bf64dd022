"""
Table schemas and validation for the temperature and growth datasets.

**Conceptual**: This module defines the "data contracts" for every table the
walkthrough passes around:
  - WideTable: one row per year, one column per month (as stored on disk).
  - LongTable: one row per (year, month) with temperature and season.
  - GrowthTable: the ChickWeight growth study (weight, Time, Chick, Diet).

**Schema philosophy**:
  - Months are an ordered categorical, never free strings, so groupings and
    plot axes keep calendar order (January before February, not alphabetical).
  - Season is a pure function of month, stored in an immutable lookup.
  - Validation raises SchemaValidationError with actionable messages.

**Teaching note**: Reshaping code is full of silent failure modes: a
misspelled month turns into its own category, a duplicated year doubles a
pivot cell, a text value turns a numeric column into objects. Checking the
contract at each boundary turns those into loud, early errors.
"""

from types import MappingProxyType

import pandas as pd


class SchemaValidationError(Exception):
    """
    Raised when a DataFrame does not conform to the expected schema.

    **Conceptual**: This exception signals schema violations (missing columns,
    wrong field counts, non-numeric values, duplicate keys) and should include
    enough context (file path, column name, offending rows) for quick remediation.
    """
    pass


MONTH_NAMES = (
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
)

SEASON_NAMES = ('Winter', 'Spring', 'Summer', 'Fall')

# Meteorological seasons (northern hemisphere): December belongs to Winter
SEASON_BY_MONTH = MappingProxyType({
    'December': 'Winter', 'January': 'Winter', 'February': 'Winter',
    'March': 'Spring', 'April': 'Spring', 'May': 'Spring',
    'June': 'Summer', 'July': 'Summer', 'August': 'Summer',
    'September': 'Fall', 'October': 'Fall', 'November': 'Fall',
})

MONTH_DTYPE = pd.CategoricalDtype(categories=list(MONTH_NAMES), ordered=True)
SEASON_DTYPE = pd.CategoricalDtype(categories=list(SEASON_NAMES), ordered=True)

# Wide temperature schema: year key followed by the 12 months, in order
WIDE_TEMPERATURE_COLUMNS = ['year', *MONTH_NAMES]

LONG_TEMPERATURE_COLUMNS = ['year', 'month', 'temperature', 'season']

GROWTH_REQUIRED_COLUMNS = ['weight', 'Time', 'Chick', 'Diet']


def season_for_months(months: pd.Series) -> pd.Series:
    """Look up the season of each month label as an ordered season categorical."""
    return months.astype(str).map(dict(SEASON_BY_MONTH)).astype(SEASON_DTYPE)


def validate_wide_temperature_schema(
    df: pd.DataFrame,
    context: str | None = None,
) -> None:
    """
    Validate that a DataFrame conforms to the WideTable schema.

    **Functionally**:
      - Exactly 13 columns: 'year' then January..December, in that order.
      - 'year' is an integer column with no missing and no duplicate values.
      - Every month column is numeric (float); NaN is allowed for months that
        were never recorded (the trailing months of the final year).

    Args:
        df: DataFrame to validate.
        context: Optional string describing the source (e.g. the file path).
                 Included in error messages for clarity.

    Raises:
        SchemaValidationError: If any check fails.
    """
    ctx = f"{context}: " if context else ""

    # Check 1: exact column list and order
    if list(df.columns) != WIDE_TEMPERATURE_COLUMNS:
        raise SchemaValidationError(
            f"{ctx}Wide temperature table must have exactly these columns: "
            f"{WIDE_TEMPERATURE_COLUMNS}. Found columns: {list(df.columns)}."
        )

    # Check 2: year key is integer, present and unique
    if not pd.api.types.is_integer_dtype(df['year']):
        raise SchemaValidationError(
            f"{ctx}'year' column must be integer, got dtype {df['year'].dtype}. "
            f"Check for missing or non-numeric year values."
        )

    duplicated = df['year'][df['year'].duplicated()].unique().tolist()
    if duplicated:
        raise SchemaValidationError(
            f"{ctx}Duplicate years found: {duplicated[:5]} (showing first 5). "
            f"Each year must appear on exactly one row."
        )

    # Check 3: month columns must be numeric
    non_numeric = [
        month for month in MONTH_NAMES
        if not pd.api.types.is_numeric_dtype(df[month])
    ]
    if non_numeric:
        raise SchemaValidationError(
            f"{ctx}Non-numeric temperature columns: {non_numeric}. "
            f"Missing values must be blank or 'NA', not free text."
        )


def validate_long_temperature_schema(
    df: pd.DataFrame,
    context: str | None = None,
) -> None:
    """
    Validate that a DataFrame conforms to the LongTable schema.

    Checks the required columns, the categorical month/season dtypes, and that
    every row's season matches the fixed month -> season lookup.

    Raises:
        SchemaValidationError: If any check fails.
    """
    ctx = f"{context}: " if context else ""

    missing_cols = set(LONG_TEMPERATURE_COLUMNS) - set(df.columns)
    if missing_cols:
        raise SchemaValidationError(
            f"{ctx}Missing required columns: {sorted(missing_cols)}. "
            f"Expected columns: {LONG_TEMPERATURE_COLUMNS}. "
            f"Found columns: {list(df.columns)}."
        )

    if df['month'].dtype != MONTH_DTYPE:
        raise SchemaValidationError(
            f"{ctx}'month' must be the ordered month categorical, got {df['month'].dtype}. "
            f"Use to_long() to build long tables."
        )

    if df['season'].dtype != SEASON_DTYPE:
        raise SchemaValidationError(
            f"{ctx}'season' must be the ordered season categorical, got {df['season'].dtype}."
        )

    expected_season = season_for_months(df['month']).astype(str)
    mismatched = df.index[expected_season != df['season'].astype(str)].tolist()
    if mismatched:
        raise SchemaValidationError(
            f"{ctx}Season does not match month at row indices: {mismatched[:5]} "
            f"(showing first 5)."
        )


def validate_growth_schema(
    df: pd.DataFrame,
    context: str | None = None,
) -> None:
    """
    Validate that a DataFrame conforms to the GrowthTable schema.

    Requires 'weight', 'Time', 'Chick' and 'Diet', with numeric weight and
    Time and no missing values in any of them.

    Raises:
        SchemaValidationError: If any check fails.
    """
    ctx = f"{context}: " if context else ""

    missing_cols = set(GROWTH_REQUIRED_COLUMNS) - set(df.columns)
    if missing_cols:
        raise SchemaValidationError(
            f"{ctx}Missing required columns: {sorted(missing_cols)}. "
            f"Expected columns: {GROWTH_REQUIRED_COLUMNS}. "
            f"Found columns: {list(df.columns)}."
        )

    for column in ('weight', 'Time'):
        if not pd.api.types.is_numeric_dtype(df[column]):
            raise SchemaValidationError(
                f"{ctx}'{column}' column must be numeric, got dtype {df[column].dtype}."
            )

    null_counts = df[GROWTH_REQUIRED_COLUMNS].isna().sum()
    with_nulls = null_counts[null_counts > 0].to_dict()
    if with_nulls:
        raise SchemaValidationError(
            f"{ctx}Missing values in growth table: {with_nulls}."
        )
