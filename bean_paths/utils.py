"""Utility functions for loading bean model descriptions.

This module loads JSON model descriptions from files, URLs and streams and
converts them into a TypeModel with proper error handling.
"""

import json
from pathlib import Path
from typing import Any, TextIO
from urllib.parse import urlparse

import requests

from .codegen.core.model import ModelError, TypeModel, convert_model_dict
from .logging_config import get_logger

logger = get_logger(__name__)


class ModelLoaderError(Exception):
    """Custom exception for model loading errors."""

    pass


def load_json_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        FileNotFoundError: If file doesn't exist.
        ModelLoaderError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug("Attempting to load JSON from file: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning("File does not have .json extension: %s", file_path)

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info("Successfully loaded JSON from %s", file_path)
        return str(file_path), data
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in file %s: %s", file_path, e)
        raise ModelLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise ModelLoaderError(f"Error reading file {file_path}: {e}") from e


def load_json_from_url(url: str, timeout: int = 30) -> tuple[str, Any]:
    """Load JSON data from a URL.

    Args:
        url: URL to fetch JSON from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        ModelLoaderError: If URL is invalid, request fails, or response isn't valid JSON.
    """
    logger.debug("Attempting to load JSON from URL: %s", url)

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error("Invalid URL format: %s", url)
        raise ModelLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if "application/json" not in content_type and not url.endswith(".json"):
            logger.warning("URL %s does not have JSON content type: %s", url, content_type)

        data = response.json()
        logger.info("Successfully loaded JSON from %s", url)
        return url, data

    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise ModelLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error for URL %s: %s", url, e)
        raise ModelLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        logger.error("HTTP error %s for URL: %s", status, url)
        raise ModelLoaderError(f"HTTP error {status} for URL: {url}") from e
    except requests.exceptions.JSONDecodeError as e:
        logger.error("Invalid JSON response from URL %s: %s", url, e)
        raise ModelLoaderError(f"Invalid JSON response from URL {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e)
        raise ModelLoaderError(f"Request error for URL {url}: {e}") from e


def load_json_from_stream(stream: TextIO, name: str = "<stdin>") -> tuple[str, Any]:
    """Load JSON data from an open text stream such as stdin."""
    try:
        return name, json.load(stream)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", name, e)
        raise ModelLoaderError(f"Invalid JSON in {name}: {e}") from e


def load_model(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, TypeModel]:
    """Load a bean model from either a file or URL.

    Args:
        file_path: Path to local JSON file (mutually exclusive with url).
        url: URL to fetch JSON from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, TypeModel).

    Raises:
        ModelLoaderError: If neither or both sources are given, loading fails,
            or the JSON does not describe a valid model.
        FileNotFoundError: If file doesn't exist.
    """
    if not file_path and not url:
        raise ModelLoaderError("Either file_path or url must be provided")

    if file_path and url:
        raise ModelLoaderError("Cannot specify both file_path and url")

    if file_path:
        source, data = load_json_from_file(file_path)
    else:
        source, data = load_json_from_url(url, timeout)

    return source, model_from_data(data, source)


def model_from_data(data: Any, source: str) -> TypeModel:
    """Convert loaded JSON data into a TypeModel, tagging errors with the source."""
    try:
        model = convert_model_dict(data)
    except ModelError as e:
        raise ModelLoaderError(f"Invalid model in {source}: {e}") from e
    logger.info("Loaded %d beans from %s", len(model.beans), source)
    return model
