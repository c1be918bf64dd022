#!/usr/bin/env python3
"""
Render the monthly temperature walkthrough charts.

**Purpose**: Runs the whole temperature section end to end: load the wide
year-by-month file, reshape it to long form, compare two years month by month,
and export every chart as a PNG.

**Usage**:
    python actions/render_temperature_charts.py
    python actions/render_temperature_charts.py --year-a 1800 --year-b 2000
    python actions/render_temperature_charts.py --data path/to/file.txt --output-dir out/

**Outputs** (saved to data/results/figures/ by default):
  - temperature_boxplot.png: monthly boxplots colored by season.
  - temperature_violin_bordered.png / temperature_violin_filled.png
  - temperature_scatter_labels.png: year-vs-year scatter with month labels.
  - temperature_scatter_repel.png: same, non-overlapping labels, trend line
    and y = x reference diagonal.
  - temperature_histogram_by_season.png
  - temperature_density_by_season.png / temperature_density_faceted.png

**Teaching note**: Notice that after `to_long`, every chart is a single call
that names columns: month on x, season as color. That is the payoff of the
reshape; none of the renderers loop over months.
"""

import argparse
import sys
from pathlib import Path

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt

# Ensure project root is on path for imports
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from src.config.settings import PlotSettings, TemperatureSettings
from src.data.loaders import load_temperature_history
from src.data.schemas import SchemaValidationError
from src.analytics.reshape import pivot_years, to_long
from src.analytics.statistics import MIN_TREND_POINTS, summarize_by_season
from src.visualization.styling import (
    SEASON_PALETTE,
    TEMPERATURE_LABEL,
    apply_theme,
    label_chart,
    save_chart,
)
from src.visualization.temperature_charts import (
    plot_monthly_boxplot,
    plot_monthly_violin,
    plot_year_scatter,
)
from src.visualization.distribution_charts import (
    plot_density,
    plot_faceted_histogram,
)


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments (defaults come from settings/.env)."""
    parser = argparse.ArgumentParser(
        description="Render the monthly temperature reshaping and plotting walkthrough."
    )
    parser.add_argument("--data", type=Path, default=None,
                        help="Wide temperature file (default: TEMPERATURE_DATA_PATH)")
    parser.add_argument("--year-a", type=int, default=None,
                        help="Earlier comparison year (default: TEMPERATURE_YEAR_A)")
    parser.add_argument("--year-b", type=int, default=None,
                        help="Later comparison year (default: TEMPERATURE_YEAR_B)")
    parser.add_argument("--output-dir", type=Path, default=None,
                        help="Directory for PNG files (default: PLOT_OUTPUT_DIR)")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """
    Main entrypoint for the temperature walkthrough.

    Steps:
      1. Load the wide temperature table.
      2. Reshape to long form and summarize by season.
      3. Pivot the two comparison years.
      4. Render and save every chart.
    """
    args = parse_args(argv)

    print("=" * 80)
    print("Monthly Temperature Walkthrough")
    print("=" * 80)
    print()

    # Command-line flags override .env values before validation
    try:
        temperature = TemperatureSettings.from_env(
            data_path=args.data, year_a=args.year_a, year_b=args.year_b,
        )
        plots = PlotSettings.from_env()
    except ValueError as e:
        print(f"  ✗ Invalid configuration: {e}")
        return 1

    year_a = temperature.year_a
    year_b = temperature.year_b
    output_dir = args.output_dir or plots.output_dir
    dpi = plots.dpi

    # ========================================================================
    # Step 1: Load wide table
    # ========================================================================
    print("Step 1: Loading wide temperature table...")
    try:
        wide = load_temperature_history(temperature)
    except FileNotFoundError as e:
        print(f"  ✗ {e}")
        print("    Place the year-by-month file there or pass --data PATH.")
        return 1
    except SchemaValidationError as e:
        print(f"  ✗ Malformed temperature file: {e}")
        return 1

    n_missing = int(wide.drop(columns='year').isna().sum().sum())
    print(f"  ✓ Loaded {len(wide)} years ({wide['year'].min()}-{wide['year'].max()}), "
          f"{n_missing} missing monthly values")
    print()

    # ========================================================================
    # Step 2: Reshape to long form
    # ========================================================================
    print("Step 2: Reshaping to long form (one row per year and month)...")
    long = to_long(wide)
    print(f"  ✓ {len(long)} records = {len(wide)} years x 12 months - {n_missing} missing")
    print()

    print("Seasonal summary (°C):")
    print("-" * 80)
    summary = summarize_by_season(long)
    for season, row in summary.iterrows():
        print(f"  {str(season):8s}: n={int(row['n_observations']):5d}  mean={row['mean']:6.2f}  "
              f"min={row['min']:6.2f}  max={row['max']:6.2f}")
    print("-" * 80)
    print()

    # ========================================================================
    # Step 3: Pivot the comparison years
    # ========================================================================
    print(f"Step 3: Comparing {year_a} with {year_b}...")
    try:
        pivoted = pivot_years(long, year_a, year_b)
    except ValueError as e:
        print(f"  ✗ {e}")
        return 1

    for _, row in pivoted.iterrows():
        print(f"  {str(row['month']):10s} {row['difference']:+6.2f} °C")
    incomplete = int(pivoted['difference'].isna().sum())
    if incomplete:
        print(f"  ⚠ {incomplete} month(s) missing in one of the years (kept as NaN)")

    complete = len(pivoted) - incomplete
    if complete < MIN_TREND_POINTS:
        print(f"  ✗ Only {complete} month(s) recorded in both {year_a} and {year_b}; "
              f"the trend line needs at least {MIN_TREND_POINTS}. Pick two fuller years.")
        return 1
    print()

    # ========================================================================
    # Step 4: Render charts
    # ========================================================================
    print(f"Step 4: Rendering charts to {output_dir}...")
    apply_theme(plots)

    try:
        charts = build_charts(long, pivoted, year_a, year_b)
    except ValueError as e:
        plt.close('all')
        print(f"  ✗ Could not render charts: {e}")
        return 1

    for filename, chart in charts.items():
        path = save_chart(chart, output_dir / filename, dpi=dpi)
        print(f"  ✓ Saved {path}")
    print()

    print("=" * 80)
    print(f"Done! {len(charts)} charts saved to {output_dir}")
    print("=" * 80)
    return 0


def build_charts(long, pivoted, year_a: int, year_b: int) -> dict:
    """Render every temperature chart, keyed by output file name."""
    return {
        "temperature_boxplot.png": label_chart(
            plot_monthly_boxplot(long),
            title="Monthly temperatures by season",
        ),
        "temperature_violin_bordered.png": label_chart(
            plot_monthly_violin(long, filled=False),
            title="Monthly temperature distributions",
        ),
        "temperature_violin_filled.png": label_chart(
            plot_monthly_violin(long, filled=True),
            title="Monthly temperature distributions",
        ),
        "temperature_scatter_labels.png": label_chart(
            plot_year_scatter(pivoted, year_a, year_b),
            title=f"{year_b} vs {year_a}",
        ),
        "temperature_scatter_repel.png": label_chart(
            plot_year_scatter(
                pivoted, year_a, year_b,
                repel_labels=True, trend_line=True, reference_line=True,
            ),
            title=f"{year_b} vs {year_a} with trend and y = x",
        ),
        "temperature_histogram_by_season.png": label_chart(
            plot_faceted_histogram(
                long, 'temperature', 'season', hue='season', palette=SEASON_PALETTE,
            ),
            title="Temperature histograms by season",
            x=TEMPERATURE_LABEL,
        ),
        "temperature_density_by_season.png": label_chart(
            plot_density(long, 'temperature', hue='season', palette=SEASON_PALETTE),
            title="Temperature densities by season",
            x=TEMPERATURE_LABEL,
        ),
        "temperature_density_faceted.png": label_chart(
            plot_density(
                long, 'temperature', hue='season', facet='season',
                palette=SEASON_PALETTE, col_wrap=2,
            ),
            title="Temperature densities, one panel per season",
            x=TEMPERATURE_LABEL,
        ),
    }


if __name__ == "__main__":
    sys.exit(main())
