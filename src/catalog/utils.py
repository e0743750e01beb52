"""Utility functions for loading marketplace data files.

This module provides helpers shared by the store, seller and product data
sources: locating data files and reading JSON record lists.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from src.api.exceptions import DataSourceError
from src.config import PRODUCTS_FILENAME, SELLERS_FILENAME, STORES_FILENAME

# Configure module logger
logger = logging.getLogger(__name__)


def load_json_records(path: str) -> List[Dict[str, Any]]:
    """Load a JSON file containing a list of objects.

    Args:
        path: Path to the JSON file.

    Returns:
        List of record dictionaries. Non-object entries are dropped.

    Raises:
        DataSourceError: If the file does not exist, is not valid JSON, or
            does not contain a list.
    """
    json_file = Path(path)
    if not json_file.exists():
        raise DataSourceError(str(path))

    logger.info(f"Loading records from {path}")

    try:
        with open(json_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to read {path}: {e}", exc_info=True)
        raise DataSourceError(str(path), e) from e

    if not isinstance(data, list):
        raise DataSourceError(
            str(path), ValueError(f"expected a list, got {type(data).__name__}")
        )

    records = [record for record in data if isinstance(record, dict)]
    if len(records) != len(data):
        logger.warning(
            f"Dropped {len(data) - len(records)} non-object entries from {path}"
        )

    logger.info(f"Loaded {len(records)} records")
    return records


def record_id(record: Dict[str, Any]) -> Any:
    """Return a record's identifier, accepting both ``id`` and ``_id``."""
    if "id" in record:
        return record["id"]
    return record.get("_id")


def check_data_exists(data_dir: str) -> bool:
    """Check if all data files exist in the specified directory.

    Args:
        data_dir: Directory to check for data files.

    Returns:
        True if stores, sellers and products files all exist.
    """
    data_path = Path(data_dir)
    required_files = [STORES_FILENAME, SELLERS_FILENAME, PRODUCTS_FILENAME]

    return all((data_path / filename).exists() for filename in required_files)
