"""
Readers and writers for the temperature and growth tables.

**Conceptual**: This module is the I/O boundary of the walkthrough. Every table
that enters from disk passes through a reader here and leaves with a validated
schema, so the reshaping and plotting code can trust column names and dtypes.

**Files handled**:
  - The wide monthly temperature file: tab- or space-delimited text, no header,
    one row per year, 13 fields (year + 12 months). The final year is usually
    partial: its row (and only that row) may end early, or carry blank/'NA'
    cells for unrecorded months.
  - The cached ChickWeight CSV (written after the first download).

**Teaching note**: The temperature file has no header, so the very first
reshaping step is giving columns names. Doing that here, next to the parse,
means nothing downstream ever sees the anonymous 0..12 column labels.
"""

import io
from pathlib import Path

import pandas as pd

from src.data.schemas import (
    GROWTH_REQUIRED_COLUMNS,
    MONTH_NAMES,
    WIDE_TEMPERATURE_COLUMNS,
    SchemaValidationError,
    validate_growth_schema,
    validate_wide_temperature_schema,
)

# Tokens treated as "no measurement" in the temperature file
MISSING_MARKERS = ['NA', 'NaN', '-', '']


def _split_fields(line: str, delimiter: str | None) -> list[str]:
    """Split one line the way pandas will (single tabs, or runs of whitespace)."""
    if delimiter is None:
        return line.split()
    return line.split(delimiter)


def _check_field_counts(lines: list[tuple[int, str]], delimiter: str | None, context: str) -> None:
    """
    Every row must have exactly 13 fields, except the last one, which may end
    early (the most recent year is usually recorded only up to some month).
    """
    expected = len(WIDE_TEMPERATURE_COLUMNS)
    last_line_number = lines[-1][0]

    for line_number, line in lines:
        n_fields = len(_split_fields(line, delimiter))
        if n_fields > expected:
            raise SchemaValidationError(
                f"{context}: Line {line_number} has {n_fields} fields, expected {expected} "
                f"(year + 12 months)."
            )
        if n_fields < expected and line_number != last_line_number:
            raise SchemaValidationError(
                f"{context}: Line {line_number} has {n_fields} fields, expected {expected} "
                f"(year + 12 months). Only the final row may end early."
            )


def read_wide_temperature_table(path: Path | str) -> pd.DataFrame:
    """
    Read the wide monthly temperature file with schema validation.

    **Functionally**:
      - Tab-delimited files are split on single tabs, so an empty cell stays
        in its own month column (as NaN). Files without tabs are split on
        runs of spaces.
      - Every row must carry 13 fields (year + 12 months). Only the final row
        may be shorter: its unrecorded trailing months become NaN.
      - Assigns column names: 'year' followed by January..December.
      - Casts 'year' to int64 and the month columns to float64.
      - Validates the WideTable schema (13 columns, unique integer years).

    Args:
        path: Path to the temperature text file.

    Returns:
        WideTable DataFrame (year int64, 12 float64 month columns).

    Raises:
        FileNotFoundError: If the file doesn't exist.
        SchemaValidationError: If the file is empty, a row has the wrong number
                               of fields, a year is missing/duplicated/non-integer,
                               or a temperature is not numeric.

    Example:
        >>> wide = read_wide_temperature_table("data/raw/monthly_temperatures.txt")
        >>> wide.columns[:4].tolist()
        ['year', 'January', 'February', 'March']
    """
    path = Path(path)
    context = str(path)

    if not path.exists():
        raise FileNotFoundError(
            f"Temperature file not found: {path}. "
            f"Ensure the file exists and the path is correct "
            f"(or set TEMPERATURE_DATA_PATH)."
        )

    text = path.read_text()
    lines = [
        (number, line)
        for number, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]
    if not lines:
        raise SchemaValidationError(f"{context}: File is empty.")

    delimiter = '\t' if '\t' in text else None
    _check_field_counts(lines, delimiter, context)

    if delimiter is None:
        split_options = {'sep': r'\s+'}
    else:
        split_options = {'sep': delimiter, 'skipinitialspace': True}

    try:
        raw = pd.read_csv(
            io.StringIO(text),
            header=None,
            names=WIDE_TEMPERATURE_COLUMNS,
            na_values=MISSING_MARKERS,
            **split_options,
        )
    except ValueError as e:
        raise SchemaValidationError(
            f"{context}: Failed to parse temperature file. Error: {e}"
        )

    year = raw['year']
    if year.isna().any() or not pd.api.types.is_numeric_dtype(year):
        raise SchemaValidationError(
            f"{context}: 'year' column has missing or non-numeric values. "
            f"Every row must start with a year."
        )
    if (year % 1 != 0).any():
        raise SchemaValidationError(
            f"{context}: 'year' column has non-integer values: "
            f"{year[year % 1 != 0].tolist()[:5]}."
        )
    raw['year'] = year.astype('int64')

    validate_wide_temperature_schema(raw, context=context)

    month_columns = list(MONTH_NAMES)
    raw[month_columns] = raw[month_columns].astype('float64')

    return raw


def normalize_growth_table(
    df: pd.DataFrame,
    context: str | None = None,
) -> pd.DataFrame:
    """
    Bring a raw ChickWeight frame into the GrowthTable schema.

    **Functionally**:
      - Drops the 'rownames' column that R-exported CSVs carry.
      - Validates required columns, numeric weight/Time and absence of nulls.
      - Casts weight to float64, Time to int64.
      - Casts Chick to a categorical and Diet to an ordered categorical, both
        with string labels in numeric order ("1" < "2" < ... < "10").

    Returns:
        A new DataFrame with only the GrowthTable columns.

    Raises:
        SchemaValidationError: If the frame doesn't conform to the schema.
    """
    df = df.drop(columns=['rownames'], errors='ignore').copy()

    validate_growth_schema(df, context=context)

    df = df[GROWTH_REQUIRED_COLUMNS].copy()
    df['weight'] = df['weight'].astype('float64')
    df['Time'] = df['Time'].astype('int64')
    df['Chick'] = _as_numeric_ordered_category(df['Chick'], ordered=False)
    df['Diet'] = _as_numeric_ordered_category(df['Diet'], ordered=True)

    return df.reset_index(drop=True)


def _as_numeric_ordered_category(series: pd.Series, ordered: bool) -> pd.Series:
    labels = series.astype(str)

    def sort_key(label: str):
        return (0, int(label), label) if label.isdigit() else (1, 0, label)

    categories = sorted(labels.unique(), key=sort_key)
    return labels.astype(pd.CategoricalDtype(categories=categories, ordered=ordered))


def read_growth_csv(path: Path | str) -> pd.DataFrame:
    """
    Read a cached growth-study CSV with schema validation.

    Args:
        path: Path to the CSV (e.g. "data/raw/chick_weight.csv").

    Returns:
        GrowthTable DataFrame.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        SchemaValidationError: If the CSV is malformed or violates the schema.
    """
    path = Path(path)
    context = str(path)

    if not path.exists():
        raise FileNotFoundError(
            f"Growth CSV not found: {path}. "
            f"Run: python actions/fetch_chick_weight.py"
        )

    try:
        df = pd.read_csv(path)
    except ValueError as e:
        raise SchemaValidationError(
            f"{context}: Failed to read CSV. Error: {e}"
        )

    return normalize_growth_table(df, context=context)


def write_growth_csv(
    df: pd.DataFrame,
    path: Path | str,
) -> None:
    """
    Write a growth table to CSV with schema enforcement.

    Validates before writing so a malformed download never lands in the cache.
    The parent directory is created if needed.

    Raises:
        SchemaValidationError: If the DataFrame doesn't conform to the schema.
        OSError: If the file can't be written.
    """
    path = Path(path)
    context = str(path)

    validate_growth_schema(df, context=context)

    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        df.to_csv(path, index=False, columns=GROWTH_REQUIRED_COLUMNS)
    except Exception as e:
        raise OSError(
            f"{context}: Failed to write CSV. Error: {e}"
        )
