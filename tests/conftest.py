"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import src...' works, forces the
non-interactive matplotlib backend, and provides small synthetic tables shared
across test modules.
"""
import sys
from pathlib import Path

import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from src.data.schemas import WIDE_TEMPERATURE_COLUMNS  # noqa: E402

NAN = float('nan')

# Year -> January..December. 2017 stops after August (partial final year).
TEMPERATURE_ROWS = {
    1780: [-5.2, -2.9, -0.4, 4.7, 9.8, 15.1, 17.3, 15.6, 11.0, 6.1, 1.2, -3.4],
    1781: [-4.0, -4.4, 0.8, 5.5, 10.1, 14.2, 16.8, 16.1, 10.7, 5.8, 0.9, -1.6],
    2016: [-3.1, -0.8, 1.9, 6.2, 12.5, 16.1, 18.9, 17.2, 14.6, 7.3, 2.4, 0.5],
    2017: [-1.4, -1.0, 2.3, 4.8, 10.9, 15.8, 17.1, 16.9, NAN, NAN, NAN, NAN],
}


def make_wide_temperature_df(rows: dict = TEMPERATURE_ROWS) -> pd.DataFrame:
    """Build a WideTable (year int64, 12 float64 months) from a year -> values dict."""
    return pd.DataFrame(
        [[year, *values] for year, values in rows.items()],
        columns=WIDE_TEMPERATURE_COLUMNS,
    ).astype({column: 'float64' for column in WIDE_TEMPERATURE_COLUMNS[1:]})


def write_temperature_file(path: Path, rows: dict = TEMPERATURE_ROWS) -> Path:
    """
    Write rows in the on-disk format: tab-separated, no header, trailing
    missing months left out (the row simply ends early).
    """
    lines = []
    for year, values in rows.items():
        recorded = list(values)
        while recorded and np.isnan(recorded[-1]):
            recorded.pop()
        lines.append("\t".join([str(year), *[f"{value}" for value in recorded]]))
    path.write_text("\n".join(lines) + "\n")
    return path


def make_growth_df(n_diets: int = 4, chicks_per_diet: int = 3) -> pd.DataFrame:
    """
    Synthetic ChickWeight-shaped table: every chick weighed every other day
    from day 0 to day 20, heavier diets growing faster.
    """
    records = []
    chick_id = 1
    for diet in range(1, n_diets + 1):
        for offset in range(chicks_per_diet):
            for time in range(0, 21, 2):
                records.append({
                    'weight': 40.0 + offset + time * (4.0 + diet + 0.5 * offset),
                    'Time': time,
                    'Chick': chick_id,
                    'Diet': diet,
                })
            chick_id += 1
    return pd.DataFrame(records)


@pytest.fixture
def wide_temperatures() -> pd.DataFrame:
    return make_wide_temperature_df()


@pytest.fixture
def temperature_file(tmp_path) -> Path:
    return write_temperature_file(tmp_path / "monthly_temperatures.txt")


@pytest.fixture(autouse=True)
def close_figures():
    """Close every matplotlib figure a test left open."""
    yield
    plt.close('all')
