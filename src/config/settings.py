"""
Configuration settings for the reshaping and plotting walkthrough.

**Conceptual**: This module provides strongly-typed configuration objects that
load from environment variables (via .env files). All settings are validated
at construction, so a bad value (non-numeric DPI, identical comparison years)
fails at startup instead of halfway through rendering a batch of charts.

**Why centralized config?**
  - Single source of truth for input paths, comparison years and plot output.
  - Easy to test (inject fake settings instead of reading from environment).
  - Action scripts and library code agree on where data lives.

**Teaching note**: Notebooks usually hardcode paths and magic years in the
first cell. Pulling them into typed settings makes the same walkthrough
re-runnable on a different station file or a different pair of years without
editing code.

This module uses python-dotenv to load .env files and dataclasses for type safety.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Project root is 2 levels up from src/config/settings.py
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# Load .env from project root (no-op if the file does not exist)
load_dotenv(dotenv_path=PROJECT_ROOT / ".env")


def _resolve_path(raw: str) -> Path:
    """Interpret relative paths against the project root, not the CWD."""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got: {raw}")


@dataclass(frozen=True)
class TemperatureSettings:
    """
    Configuration for the historical monthly temperature series.

    **Conceptual**: The temperature walkthrough needs two things: where the
    wide year-by-month text file lives, and which two years to compare in the
    scatterplot section.

    Attributes:
        data_path: Path to the whitespace-delimited temperature file
                   (13 fields per row: year + 12 months, no header).
        year_a: Earlier comparison year (default 1780, first year of record).
        year_b: Later comparison year (default 2016, last complete year).
    """
    data_path: Path
    year_a: int = 1780
    year_b: int = 2016

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.year_a == self.year_b:
            raise ValueError(
                f"Comparison years must differ, got year_a == year_b == {self.year_a}. "
                f"Set TEMPERATURE_YEAR_A and TEMPERATURE_YEAR_B to two distinct years."
            )

    @classmethod
    def from_env(
        cls,
        data_path: Optional[Path] = None,
        year_a: Optional[int] = None,
        year_b: Optional[int] = None,
    ) -> "TemperatureSettings":
        """
        Load temperature settings from environment variables.

        Arguments that are not None (e.g. command-line flags) take precedence
        over the corresponding environment variable, and validation runs on
        the combined values.

        **Environment variables**:
          - TEMPERATURE_DATA_PATH (optional): Path to the wide temperature file.
            Defaults to "data/raw/monthly_temperatures.txt" (relative to the repo root).
          - TEMPERATURE_YEAR_A (optional): Earlier comparison year. Defaults to 1780.
          - TEMPERATURE_YEAR_B (optional): Later comparison year. Defaults to 2016.

        Returns:
            TemperatureSettings object with values loaded from environment.

        Raises:
            ValueError: If a year is not an integer or both years are equal.
        """
        if data_path is None:
            data_path = _resolve_path(
                os.getenv("TEMPERATURE_DATA_PATH", "data/raw/monthly_temperatures.txt")
            )
        if year_a is None:
            year_a = _parse_int("TEMPERATURE_YEAR_A", os.getenv("TEMPERATURE_YEAR_A", "1780"))
        if year_b is None:
            year_b = _parse_int("TEMPERATURE_YEAR_B", os.getenv("TEMPERATURE_YEAR_B", "2016"))

        return cls(
            data_path=Path(data_path),
            year_a=year_a,
            year_b=year_b,
        )


@dataclass(frozen=True)
class RdatasetsSettings:
    """
    Configuration for the Rdatasets CSV mirror.

    **Conceptual**: The growth-study dataset (ChickWeight) ships with R rather
    than with any Python package. The Rdatasets project mirrors every R
    dataset as a plain CSV over HTTPS, so we fetch it from there and cache a
    copy under data/raw/.

    **No API Key**: The mirror is a static site; only a base URL and a timeout
    are needed.

    Attributes:
        base_url: Base URL of the CSV mirror (no trailing slash).
        timeout_seconds: HTTP request timeout in seconds (default 30).
        chick_weight_cache_path: Where the fetched ChickWeight CSV is cached.
    """
    base_url: str = "https://vincentarelbundock.github.io/Rdatasets/csv"
    timeout_seconds: int = 30
    chick_weight_cache_path: Path = field(
        default_factory=lambda: PROJECT_ROOT / "data" / "raw" / "chick_weight.csv"
    )

    def __post_init__(self):
        """Validate settings after initialization."""
        if not self.base_url:
            raise ValueError(
                "RDATASETS_BASE_URL is empty. "
                "Unset it to use the default mirror or provide a full URL."
            )
        if self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be positive, got: {self.timeout_seconds}"
            )

    @classmethod
    def from_env(cls) -> "RdatasetsSettings":
        """
        Load Rdatasets settings from environment variables.

        **Environment variables**:
          - RDATASETS_BASE_URL (optional): Base URL of the CSV mirror.
          - RDATASETS_TIMEOUT_SECONDS (optional): HTTP timeout. Defaults to 30.
          - CHICK_WEIGHT_CACHE_PATH (optional): Cache location for ChickWeight.
            Defaults to "data/raw/chick_weight.csv".

        Returns:
            RdatasetsSettings object with values loaded from environment.

        Raises:
            ValueError: If the timeout is not a positive integer.
        """
        base_url = os.getenv(
            "RDATASETS_BASE_URL",
            "https://vincentarelbundock.github.io/Rdatasets/csv",
        ).rstrip("/")
        timeout_seconds = _parse_int(
            "RDATASETS_TIMEOUT_SECONDS", os.getenv("RDATASETS_TIMEOUT_SECONDS", "30")
        )
        cache_path = os.getenv("CHICK_WEIGHT_CACHE_PATH", "data/raw/chick_weight.csv")

        return cls(
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            chick_weight_cache_path=_resolve_path(cache_path),
        )


@dataclass(frozen=True)
class PlotSettings:
    """
    Configuration for chart rendering and export.

    Attributes:
        output_dir: Directory where action scripts save PNG files.
        dpi: Resolution of exported images (default 150).
        style: seaborn style name applied before rendering (default "whitegrid").
    """
    output_dir: Path = field(
        default_factory=lambda: PROJECT_ROOT / "data" / "results" / "figures"
    )
    dpi: int = 150
    style: str = "whitegrid"

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.dpi <= 0:
            raise ValueError(f"dpi must be positive, got: {self.dpi}")
        valid_styles = ("white", "dark", "whitegrid", "darkgrid", "ticks")
        if self.style not in valid_styles:
            raise ValueError(
                f"PLOT_STYLE must be one of {valid_styles}, got: {self.style}"
            )

    @classmethod
    def from_env(cls) -> "PlotSettings":
        """
        Load plot settings from environment variables.

        **Environment variables** (all optional):
          - PLOT_OUTPUT_DIR: Output directory. Defaults to "data/results/figures".
          - PLOT_DPI: Export resolution. Defaults to 150.
          - PLOT_STYLE: seaborn style. Defaults to "whitegrid".
        """
        output_dir = os.getenv("PLOT_OUTPUT_DIR", "data/results/figures")
        dpi = _parse_int("PLOT_DPI", os.getenv("PLOT_DPI", "150"))
        style = os.getenv("PLOT_STYLE", "whitegrid")

        return cls(
            output_dir=_resolve_path(output_dir),
            dpi=dpi,
            style=style,
        )


@dataclass(frozen=True)
class Settings:
    """
    Global settings for the walkthrough.

    **Usage pattern**:
      ```python
      from src.config.settings import get_settings

      settings = get_settings()
      wide = read_wide_temperature_table(settings.temperature.data_path)
      ```

    Attributes:
        temperature: Temperature series location and comparison years.
        rdatasets: Growth dataset mirror and cache location.
        plots: Chart export configuration.
    """
    temperature: TemperatureSettings
    rdatasets: RdatasetsSettings
    plots: PlotSettings

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Load global settings from environment variables.

        Raises:
            ValueError: If any subsystem setting is invalid.
        """
        return cls(
            temperature=TemperatureSettings.from_env(),
            rdatasets=RdatasetsSettings.from_env(),
            plots=PlotSettings.from_env(),
        )


# Lazily-initialized singleton; tests construct Settings directly or call reset_settings()
_default_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings singleton.

    Settings are loaded from environment on first call, then cached for reuse.
    Tests can bypass this by creating their own Settings objects.
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = Settings.from_env()

    return _default_settings


def reset_settings():
    """
    Reset the global settings singleton (for testing).

    Clears the cached settings so the next get_settings() call re-reads
    the environment.
    """
    global _default_settings
    _default_settings = None
