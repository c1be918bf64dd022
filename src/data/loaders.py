"""
Convenience loaders for the two walkthrough datasets.

**Conceptual**: Action scripts and tests shouldn't hardcode where data lives.
These thin wrappers resolve paths from settings and delegate to io.py:
  - load_temperature_history(): the wide year-by-month temperature table.
  - load_chick_weight(): the ChickWeight growth study, served from the local
    cache when present and downloaded from the Rdatasets mirror otherwise.

**Teaching note**: The temperature file is a local artifact; the growth
dataset is "supplied by the environment" (in R it is always loaded). Caching
the download makes the second run work offline and keeps every run on the
same bytes.
"""

import pandas as pd

from src.config.settings import RdatasetsSettings, TemperatureSettings
from src.data.io import (
    normalize_growth_table,
    read_growth_csv,
    read_wide_temperature_table,
    write_growth_csv,
)
from src.sources.rdatasets_client import RdatasetsClient

CHICK_WEIGHT_PACKAGE = "datasets"
CHICK_WEIGHT_ITEM = "ChickWeight"


def load_temperature_history(settings: TemperatureSettings) -> pd.DataFrame:
    """
    Load the wide temperature table from the configured path.

    Args:
        settings: Temperature settings (data_path is used).

    Returns:
        WideTable DataFrame.

    Raises:
        FileNotFoundError: If the configured file doesn't exist.
        SchemaValidationError: If the file doesn't conform to the WideTable schema.

    Example:
        >>> from src.config.settings import get_settings
        >>> wide = load_temperature_history(get_settings().temperature)
    """
    return read_wide_temperature_table(settings.data_path)


def load_chick_weight(
    settings: RdatasetsSettings,
    refresh: bool = False,
) -> pd.DataFrame:
    """
    Load the ChickWeight growth study.

    **Functionally**:
      - If the cache file exists and refresh is False, read it.
      - Otherwise download datasets/ChickWeight from the Rdatasets mirror,
        normalize it to the GrowthTable schema and write the cache.

    Args:
        settings: Mirror and cache configuration.
        refresh: If True, ignore the cache and download again.

    Returns:
        GrowthTable DataFrame (weight, Time, Chick, Diet).

    Raises:
        RdatasetsClientError: If the download fails.
        SchemaValidationError: If the cached or downloaded data is malformed.
    """
    cache_path = settings.chick_weight_cache_path

    if cache_path.exists() and not refresh:
        return read_growth_csv(cache_path)

    with RdatasetsClient(settings) as client:
        raw = client.get_dataset(CHICK_WEIGHT_PACKAGE, CHICK_WEIGHT_ITEM)

    growth = normalize_growth_table(
        raw, context=client.dataset_url(CHICK_WEIGHT_PACKAGE, CHICK_WEIGHT_ITEM)
    )
    write_growth_csv(growth, cache_path)

    return growth
