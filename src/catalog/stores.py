"""Store data source.

Stores are read-only here: zone configuration is written by store owners
through another service and only consumed for delivery resolution.
"""

import logging
from typing import Any, Dict, List, Optional

from src.api.exceptions import StoreNotFoundError
from src.catalog.utils import load_json_records, record_id
from src.delivery.models import DeliveryZone
from src.delivery.zones import zones_from_store

# Configure module logger
logger = logging.getLogger(__name__)


class StoreRepository:
    """In-memory lookup of store documents by id."""

    def __init__(self, stores: Optional[List[Dict[str, Any]]] = None):
        self._stores: Dict[str, Dict[str, Any]] = {}
        for store in stores or []:
            store_id = record_id(store)
            if store_id is None:
                logger.warning("Skipping store without id")
                continue
            self._stores[str(store_id)] = store

    @classmethod
    def from_json(cls, path: str) -> "StoreRepository":
        """Load stores from a JSON file holding a list of store documents."""
        return cls(load_json_records(path))

    def __len__(self) -> int:
        return len(self._stores)

    def get(self, store_id: str) -> Dict[str, Any]:
        """Return a store document.

        Raises:
            StoreNotFoundError: If no store has this id.
        """
        store = self._stores.get(str(store_id))
        if store is None:
            raise StoreNotFoundError(str(store_id))
        return store

    def zones_for(self, store_id: str) -> List[DeliveryZone]:
        """Return the parsed delivery zones of a store, in configured order."""
        return zones_from_store(self.get(store_id))
