"""Data source dependencies for the API routes.

Data files are parsed once and kept in a module-level cache. Routes receive
the data sources through FastAPI ``Depends`` so tests can substitute
in-memory versions with ``app.dependency_overrides``.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

from src.catalog.products import ProductCatalog
from src.catalog.sellers import SellerDirectory
from src.catalog.stores import StoreRepository
from src.config import DATA_DIR, PRODUCTS_FILENAME, SELLERS_FILENAME, STORES_FILENAME

# Configure module logger
logger = logging.getLogger(__name__)

# Cache for loaded data sources, keyed by source name
_data_cache: Dict[str, object] = {}


def clear_data_cache() -> None:
    """Drop all cached data sources so the next request reloads them."""
    logger.info("Clearing data cache")
    _data_cache.clear()


def _data_path(filename: str, data_dir: Optional[str] = None) -> str:
    return str(Path(data_dir or DATA_DIR) / filename)


def get_store_repository() -> StoreRepository:
    """Return the cached store repository, loading it on first use."""
    if "stores" not in _data_cache:
        _data_cache["stores"] = StoreRepository.from_json(_data_path(STORES_FILENAME))
    return _data_cache["stores"]


def get_seller_directory() -> SellerDirectory:
    """Return the cached seller directory, loading it on first use."""
    if "sellers" not in _data_cache:
        _data_cache["sellers"] = SellerDirectory.from_json(
            _data_path(SELLERS_FILENAME)
        )
    return _data_cache["sellers"]


def get_product_catalog() -> ProductCatalog:
    """Return the cached product catalog, loading it on first use."""
    if "products" not in _data_cache:
        _data_cache["products"] = ProductCatalog.from_csv(
            _data_path(PRODUCTS_FILENAME)
        )
    return _data_cache["products"]


def loaded_sources() -> Dict[str, int]:
    """Return the number of records in each data source already loaded."""
    return {name: len(source) for name, source in _data_cache.items()}
