"""
HTTP client for the Rdatasets CSV mirror.

**Conceptual**: The growth-study dataset (ChickWeight) is part of R's bundled
`datasets` package, so a Python session has no local copy of it. The Rdatasets
project publishes every bundled R dataset as a CSV at a stable URL:

    {base_url}/{package}/{item}.csv

This module wraps that download: request construction, timeout, HTTP error
mapping and CSV parsing. It does NOT normalize the table (categorical dtypes,
dropping R's row names); that happens in src.data.io.normalize_growth_table.

**Why a separate client?**
  - Testability: HTTP responses can be mocked without touching schema logic.
  - Debugging: a failed download reports status code and URL, not a pandas
    traceback from half-parsed HTML.
"""

import io

import pandas as pd
import requests

from src.config.settings import RdatasetsSettings


class RdatasetsClientError(Exception):
    """
    Base exception for Rdatasets download errors.

    Callers can catch this to handle every download failure, or catch the
    subclasses below for fine-grained handling.
    """
    pass


class RdatasetsNotFoundError(RdatasetsClientError):
    """
    Raised when the requested dataset does not exist on the mirror (404).

    **Recovery**: Check the package and item names (case-sensitive, e.g.
    "datasets" / "ChickWeight").
    """
    pass


class RdatasetsServerError(RdatasetsClientError):
    """
    Raised when the mirror returns a 5xx error.

    **Recovery**: Retry later; the mirror is a static site and outages are short.
    """
    pass


class RdatasetsClient:
    """
    Thin HTTP client for the Rdatasets CSV mirror.

    **Responsibilities**:
      - Build the dataset URL
      - Make HTTP requests with timeout
      - Map HTTP errors (404, 4xx, 5xx, connection failures) to exceptions
      - Parse the CSV body into a DataFrame

    **Example usage**:
        >>> from src.config.settings import RdatasetsSettings
        >>> with RdatasetsClient(RdatasetsSettings()) as client:
        ...     chicks = client.get_dataset("datasets", "ChickWeight")
        >>> chicks.columns.tolist()
        ['rownames', 'weight', 'Time', 'Chick', 'Diet']
    """

    def __init__(self, settings: RdatasetsSettings):
        """
        Initialize the client with settings.

        Args:
            settings: Mirror configuration (base_url, timeout_seconds).
        """
        self.settings = settings
        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "text/csv",
            "User-Agent": "tidy_temps/1.0",
        })

    def dataset_url(self, package: str, item: str) -> str:
        """Return the CSV URL for an R dataset."""
        return f"{self.settings.base_url}/{package}/{item}.csv"

    def get_dataset(self, package: str, item: str) -> pd.DataFrame:
        """
        Download an R dataset as a DataFrame.

        **HTTP request details**:
          - Method: GET
          - URL: {base_url}/{package}/{item}.csv
          - Timeout: From settings (default 30 seconds)

        Args:
            package: R package name (e.g. "datasets").
            item: Dataset name within the package (e.g. "ChickWeight").

        Returns:
            DataFrame parsed from the CSV body, columns as published
            (R exports include a leading 'rownames' column).

        Raises:
            ValueError: If package or item is empty.
            RdatasetsNotFoundError: If the dataset does not exist (404).
            RdatasetsServerError: If the mirror returns a 5xx error.
            RdatasetsClientError: For other HTTP errors, connection failures,
                                  or an unparseable/empty body.
            requests.Timeout: If the request exceeds the timeout.
        """
        if not package or not package.strip():
            raise ValueError("package cannot be empty")
        if not item or not item.strip():
            raise ValueError("item cannot be empty")

        url = self.dataset_url(package.strip(), item.strip())

        try:
            response = self.session.get(url, timeout=self.settings.timeout_seconds)

            if response.status_code == 404:
                raise RdatasetsNotFoundError(
                    f"Dataset '{package}/{item}' not found at {url}."
                )

            if response.status_code >= 500:
                raise RdatasetsServerError(
                    f"Rdatasets mirror error (status {response.status_code}) for {url}. "
                    f"Response: {response.text[:200]}"
                )

            if 400 <= response.status_code < 500:
                raise RdatasetsClientError(
                    f"Client error (status {response.status_code}) for {url}. "
                    f"Response: {response.text[:200]}"
                )

            response.raise_for_status()

        except requests.Timeout as e:
            raise requests.Timeout(
                f"Request to {url} timed out after {self.settings.timeout_seconds}s. "
                f"Check network connection or increase RDATASETS_TIMEOUT_SECONDS."
            ) from e

        except requests.ConnectionError as e:
            raise RdatasetsClientError(
                f"Failed to connect to Rdatasets mirror at {self.settings.base_url}. "
                f"Check network connection and base URL."
            ) from e

        except requests.RequestException as e:
            raise RdatasetsClientError(f"HTTP request failed: {e}") from e

        try:
            df = pd.read_csv(io.StringIO(response.text))
        except ValueError as e:
            raise RdatasetsClientError(
                f"Failed to parse CSV from {url}: {e}"
            ) from e

        if df.empty:
            raise RdatasetsClientError(f"Dataset at {url} has no rows.")

        return df

    def close(self):
        """Close the HTTP session and release resources."""
        self.session.close()

    def __enter__(self):
        """Enable context manager support (with statement)."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Clean up session when exiting context manager."""
        self.close()
        return False
