#!/usr/bin/env python3
"""
Render the ChickWeight distribution charts.

**Purpose**: The second half of the walkthrough reuses the distribution
renderers on a dataset that is already long: every row is one weighing of one
chick. Faceting by Diet and coloring by Diet need no reshaping at all.

**Usage**:
    python actions/render_chick_weight_charts.py
    python actions/render_chick_weight_charts.py --output-dir out/

**Outputs** (saved to data/results/figures/ by default):
  - chick_weight_histogram_by_diet.png
  - chick_weight_density_by_diet.png
  - chick_weight_density_faceted.png
  - chick_weight_growth_curves.png
"""

import argparse
import sys
from pathlib import Path

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import requests

# Ensure project root is on path for imports
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from src.config.settings import PlotSettings, RdatasetsSettings
from src.data.loaders import load_chick_weight
from src.data.schemas import SchemaValidationError
from src.sources.rdatasets_client import RdatasetsClientError
from src.visualization.styling import DIET_PALETTE, apply_theme, label_chart, save_chart
from src.visualization.distribution_charts import (
    plot_density,
    plot_faceted_histogram,
    plot_growth_curves,
)


def main(argv=None) -> int:
    """Load ChickWeight, render the distribution charts and save them."""
    parser = argparse.ArgumentParser(description="Render the ChickWeight charts.")
    parser.add_argument("--output-dir", type=Path, default=None,
                        help="Directory for PNG files (default: PLOT_OUTPUT_DIR)")
    args = parser.parse_args(argv)

    print("=" * 80)
    print("ChickWeight Distributions")
    print("=" * 80)
    print()

    try:
        rdatasets = RdatasetsSettings.from_env()
        plots = PlotSettings.from_env()
    except ValueError as e:
        print(f"  ✗ Invalid configuration: {e}")
        return 1
    output_dir = args.output_dir or plots.output_dir

    print("Step 1: Loading ChickWeight...")
    try:
        growth = load_chick_weight(rdatasets)
    except (RdatasetsClientError, requests.Timeout) as e:
        print(f"  ✗ Could not download ChickWeight: {e}")
        print("    Check your connection, then run: python actions/fetch_chick_weight.py")
        return 1
    except SchemaValidationError as e:
        print(f"  ✗ Malformed ChickWeight data: {e}")
        return 1
    print(f"  ✓ Loaded {len(growth)} rows")
    print()

    print(f"Step 2: Rendering charts to {output_dir}...")
    apply_theme(plots)

    charts = {
        "chick_weight_histogram_by_diet.png": label_chart(
            plot_faceted_histogram(growth, 'weight', 'Diet', hue='Diet', palette=DIET_PALETTE),
            title="Chick weights by diet",
            x="Weight (g)",
        ),
        "chick_weight_density_by_diet.png": label_chart(
            plot_density(growth, 'weight', hue='Diet', palette=DIET_PALETTE),
            title="Weight densities by diet",
            x="Weight (g)",
        ),
        "chick_weight_density_faceted.png": label_chart(
            plot_density(growth, 'weight', hue='Diet', facet='Diet',
                         palette=DIET_PALETTE, col_wrap=2),
            title="Weight densities, one panel per diet",
            x="Weight (g)",
        ),
        "chick_weight_growth_curves.png": label_chart(
            plot_growth_curves(growth),
            title="Growth curves by diet",
            x="Days since birth",
            y="Weight (g)",
        ),
    }

    for filename, chart in charts.items():
        path = save_chart(chart, output_dir / filename, dpi=plots.dpi)
        print(f"  ✓ Saved {path}")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
