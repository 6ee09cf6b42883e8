"""Loading of provider code specifications.

Specifications are JSON documents read from a local file or fetched over
HTTP(S). Every failure surfaces as :class:`JSONLoaderError` so callers
only handle one exception type.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .codegen.core.schema import Specification, SpecificationError, parse_specification
from .logging_config import get_logger

logger = get_logger(__name__)


class JSONLoaderError(Exception):
    """Raised when a specification document cannot be loaded."""

    pass


def load_json_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        JSONLoaderError: If the file is missing, unreadable or not valid JSON.
    """
    path = Path(file_path)
    logger.debug("Loading JSON from file: %s", path)

    if not path.is_file():
        logger.error("File not found: %s", path)
        raise JSONLoaderError(f"File not found: {path}")

    if path.suffix.lower() != ".json":
        logger.warning("File does not have .json extension: %s", path)

    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in file %s: %s", path, e)
        raise JSONLoaderError(f"Invalid JSON in file {path}: {e}") from e
    except OSError as e:
        logger.error("Error reading file %s: %s", path, e)
        raise JSONLoaderError(f"Error reading file {path}: {e}") from e

    logger.info("Loaded JSON from %s", path)
    return str(path), data


def load_json_from_url(url: str, timeout: int = 30) -> tuple[str, Any]:
    """Load JSON data from a URL.

    Args:
        url: HTTP(S) URL to fetch.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        JSONLoaderError: If the URL is invalid, the request fails or the
            response is not valid JSON.
    """
    logger.debug("Loading JSON from URL: %s", url)

    parsed_url = urlparse(url)
    if parsed_url.scheme not in ("http", "https") or not parsed_url.netloc:
        logger.error("Invalid URL: %s", url)
        raise JSONLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if "json" not in content_type and not parsed_url.path.endswith(".json"):
            logger.warning("URL %s does not have a JSON content type: %s", url, content_type)

        data = response.json()
    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise JSONLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error for URL %s: %s", url, e)
        raise JSONLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "unknown"
        logger.error("HTTP error %s for URL: %s", status, url)
        raise JSONLoaderError(f"HTTP error {status} for URL: {url}") from e
    except requests.exceptions.JSONDecodeError as e:
        logger.error("Invalid JSON response from URL %s: %s", url, e)
        raise JSONLoaderError(f"Invalid JSON response from URL {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e)
        raise JSONLoaderError(f"Request error for URL {url}: {e}") from e

    logger.info("Loaded JSON from %s", url)
    return url, data


def load_json(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, Any]:
    """Load JSON data from either a file or a URL.

    Args:
        file_path: Path to a local JSON file (mutually exclusive with url).
        url: URL to fetch JSON from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        JSONLoaderError: If neither or both sources are given, or loading fails.
    """
    if not file_path and not url:
        raise JSONLoaderError("Either file_path or url must be provided")

    if file_path and url:
        raise JSONLoaderError("Cannot specify both file_path and url")

    if file_path:
        return load_json_from_file(file_path)
    return load_json_from_url(url, timeout)


def load_specification(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, Specification]:
    """Load and parse a provider code specification.

    Args:
        file_path: Path to a local specification file.
        url: URL of a specification document.
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, parsed specification).

    Raises:
        JSONLoaderError: If loading fails or the document is not a valid specification.
    """
    source, data = load_json(file_path=file_path, url=url, timeout=timeout)
    try:
        return source, parse_specification(data)
    except SpecificationError as e:
        logger.error("Invalid specification in %s: %s", source, e)
        raise JSONLoaderError(f"Invalid specification in {source}: {e}") from e
