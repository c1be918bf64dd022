#!/usr/bin/env python3
"""
Download the ChickWeight growth study into the local cache.

**Purpose**: R ships ChickWeight in its `datasets` package; Python does not.
This script fetches it from the Rdatasets CSV mirror, normalizes it (drops R's
row names, makes Chick and Diet categorical) and writes
data/raw/chick_weight.csv so later runs work offline.

**Usage**:
    python actions/fetch_chick_weight.py            # use cache if present
    python actions/fetch_chick_weight.py --refresh  # force re-download
"""

import argparse
import sys
from pathlib import Path

import requests

# Ensure project root is on path for imports
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from src.config.settings import RdatasetsSettings
from src.data.loaders import load_chick_weight
from src.data.schemas import SchemaValidationError
from src.sources.rdatasets_client import RdatasetsClientError


def main(argv=None) -> int:
    """Fetch (or re-read) the ChickWeight cache and print a short summary."""
    parser = argparse.ArgumentParser(description="Cache the ChickWeight growth dataset.")
    parser.add_argument("--refresh", action="store_true",
                        help="Ignore the cache and download again")
    args = parser.parse_args(argv)

    print("=" * 80)
    print("Fetch ChickWeight")
    print("=" * 80)

    try:
        settings = RdatasetsSettings.from_env()
    except ValueError as e:
        print(f"  ✗ Invalid configuration: {e}")
        return 1
    cache_path = settings.chick_weight_cache_path
    print(f"  Mirror: {settings.base_url}")
    print(f"  Cache:  {cache_path}")
    print()

    try:
        growth = load_chick_weight(settings, refresh=args.refresh)
    except (RdatasetsClientError, requests.Timeout) as e:
        print(f"  ✗ Download failed: {e}")
        return 1
    except SchemaValidationError as e:
        print(f"  ✗ Unexpected data format: {e}")
        print("    Delete the cache file and re-run with --refresh.")
        return 1

    print(f"  ✓ {len(growth)} measurements of {growth['Chick'].nunique()} chicks "
          f"on {growth['Diet'].nunique()} diets, Time {growth['Time'].min()}-{growth['Time'].max()}")
    print()
    print("Chicks per diet:")
    for diet, count in growth.groupby('Diet', observed=False)['Chick'].nunique().items():
        print(f"  Diet {diet}: {count}")
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
