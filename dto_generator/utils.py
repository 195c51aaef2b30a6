"""Utility functions for loading and writing Dart source text.

This module provides functions for loading source from files, URLs and
standard input with proper error handling and validation.
"""

import sys
from pathlib import Path
from typing import TextIO
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)


class SourceLoaderError(Exception):
    """Custom exception for source loading errors."""

    pass


def load_source_from_file(file_path: str | Path) -> tuple[str, str]:
    """Load source text from a local file.

    Args:
        file_path: Path to the Dart file.

    Returns:
        Tuple of (source description, text).

    Raises:
        FileNotFoundError: If file doesn't exist.
        SourceLoaderError: If file cannot be read or decoded.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load source from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".dart":
        logger.warning(f"File does not have .dart extension: {file_path}")
        # Don't raise, just warn - might still be Dart source

    try:
        text = file_path.read_text(encoding="utf-8")
        logger.info(f"Successfully loaded source from {file_path}")
        return str(file_path), text
    except UnicodeDecodeError as e:
        logger.error(f"File {file_path} is not valid UTF-8: {e}", exc_info=True)
        raise SourceLoaderError(f"File {file_path} is not valid UTF-8: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
        raise SourceLoaderError(f"Error reading file {file_path}: {e}") from e


def load_source_from_url(url: str, timeout: int = 30) -> tuple[str, str]:
    """Load source text from a URL.

    Args:
        url: URL to fetch the source from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, text).

    Raises:
        SourceLoaderError: If URL is invalid or the request fails.
    """
    logger.debug(f"Attempting to load source from URL: {url}")

    # Validate URL
    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise SourceLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        response.encoding = response.encoding or "utf-8"
        logger.info(f"Successfully loaded source from {url}")
        return url, response.text

    except requests.exceptions.Timeout:
        logger.error(f"Request timeout for URL: {url}")
        raise SourceLoaderError(f"Request timeout for URL: {url}")
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise SourceLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise SourceLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}", exc_info=True)
        raise SourceLoaderError(f"Request error for URL {url}: {e}") from e


def load_source_from_stream(stream: TextIO = None) -> tuple[str, str]:
    """Read source text from a stream (standard input by default)."""
    stream = stream or sys.stdin
    return "<stdin>", stream.read()


def load_source(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, str]:
    """Load source text from either a file or URL.

    Args:
        file_path: Path to local Dart file (mutually exclusive with url).
        url: URL to fetch source from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, text).

    Raises:
        SourceLoaderError: If neither or both parameters are provided, or loading fails.
        FileNotFoundError: If file doesn't exist.
    """
    if not file_path and not url:
        logger.error("Neither file_path nor url provided")
        raise SourceLoaderError("Either file_path or url must be provided")

    if file_path and url:
        logger.error("Both file_path and url provided")
        raise SourceLoaderError("Cannot specify both file_path and url")

    if file_path:
        return load_source_from_file(file_path)
    else:
        return load_source_from_url(url, timeout)


def write_source(file_path: str | Path, text: str) -> Path:
    """Write text to a file as UTF-8.

    Raises:
        SourceLoaderError: If the file cannot be written.
    """
    path = Path(file_path)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        logger.error(f"Error writing file {path}: {e}", exc_info=True)
        raise SourceLoaderError(f"Error writing file {path}: {e}") from e
    logger.info(f"Wrote {len(text)} characters to {path}")
    return path
