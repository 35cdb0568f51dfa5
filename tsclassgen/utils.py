"""Loading class descriptions from local files and URLs.

A description source must contain a single JSON object describing one class,
or a JSON array of such objects.
"""

import json
from pathlib import Path
from typing import Any, Dict, List
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)


class JSONLoaderError(Exception):
    """Raised when a description source cannot be read or parsed."""

    pass


def _as_descriptions(data: Any, source: str) -> List[Dict[str, Any]]:
    """Normalize parsed JSON to a list of class description objects."""
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list) and all(isinstance(item, dict) for item in data):
        return data
    raise JSONLoaderError(
        f"{source} must contain a class description object or a list of them"
    )


def read_description_file(file_path: str | Path) -> tuple[str, List[Dict[str, Any]]]:
    """Read class descriptions from a local JSON file.

    Args:
        file_path: Path to the description file.

    Returns:
        Tuple of (source description, list of class descriptions).

    Raises:
        FileNotFoundError: If the file doesn't exist.
        JSONLoaderError: If the file cannot be read or holds invalid JSON.
    """
    file_path = Path(file_path)
    logger.debug("Reading class description file: %s", file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning("Description file does not have .json extension: %s", file_path)

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise JSONLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        raise JSONLoaderError(f"Error reading file {file_path}: {e}") from e

    descriptions = _as_descriptions(data, str(file_path))
    logger.info("Loaded %d class description(s) from %s", len(descriptions), file_path)
    return str(file_path), descriptions


def fetch_description(url: str, timeout: int = 30) -> tuple[str, List[Dict[str, Any]]]:
    """Download class descriptions from a URL.

    Args:
        url: URL serving the description JSON.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, list of class descriptions).

    Raises:
        JSONLoaderError: If the URL is invalid, the request fails, or the
            response isn't a valid description.
    """
    logger.debug("Fetching class description from URL: %s", url)

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        raise JSONLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise JSONLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error for URL %s: %s", url, e)
        raise JSONLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error("HTTP error %s for URL: %s", e.response.status_code, url)
        raise JSONLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except (requests.exceptions.JSONDecodeError, ValueError) as e:
        logger.error("Invalid JSON response from URL %s: %s", url, e)
        raise JSONLoaderError(f"Invalid JSON response from URL {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e, exc_info=True)
        raise JSONLoaderError(f"Request error for URL {url}: {e}") from e

    descriptions = _as_descriptions(data, url)
    logger.info("Fetched %d class description(s) from %s", len(descriptions), url)
    return url, descriptions


def load_descriptions(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, List[Dict[str, Any]]]:
    """Load class descriptions from either a file or a URL.

    Args:
        file_path: Path to a local JSON file (mutually exclusive with url).
        url: URL to fetch JSON from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, list of class descriptions).

    Raises:
        JSONLoaderError: If neither or both sources are given, or loading fails.
        FileNotFoundError: If the file doesn't exist.
    """
    if not file_path and not url:
        raise JSONLoaderError("Either file_path or url must be provided")

    if file_path and url:
        raise JSONLoaderError("Cannot specify both file_path and url")

    if file_path:
        return read_description_file(file_path)
    return fetch_description(url, timeout)
