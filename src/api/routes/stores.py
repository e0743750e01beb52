"""Store delivery endpoints for the ShopZone API.

This module provides the endpoint buyers use to check whether a store can
deliver to them, and at what cost.
"""

import logging
import time
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from src.api.dependencies import get_store_repository
from src.api.exceptions import ShopZoneException
from src.api.metrics import metrics_service
from src.catalog.stores import StoreRepository
from src.delivery.models import DeliveryMatch, DeliveryQuery, DeliveryZone
from src.delivery.resolver import resolve_delivery

# Configure module logger
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(
    prefix="/stores",
    tags=["delivery"],
)


class DeliveryValidationResponse(BaseModel):
    """Response model for delivery validation requests.

    Attributes:
        available: Whether at least one zone can deliver.
        zones: Matching zones, cheapest first.
        cheapest_option: The cheapest matching zone, if any.
    """

    model_config = ConfigDict(populate_by_name=True)

    available: bool = Field(..., description="Whether delivery is possible")
    zones: List[DeliveryMatch] = Field(
        default_factory=list, description="Matching zones sorted by cost"
    )
    cheapest_option: Optional[DeliveryMatch] = Field(
        default=None, alias="cheapestOption", description="Cheapest matching zone"
    )


@router.post("/{store_id}/validate-delivery", response_model=DeliveryValidationResponse)
def validate_delivery(
    store_id: str,
    query: Optional[DeliveryQuery] = None,
    stores: StoreRepository = Depends(get_store_repository),
) -> DeliveryValidationResponse:
    """Check which of a store's delivery zones serve a location or state.

    A body with neither ``location`` nor ``state`` is accepted and simply
    matches nothing.

    Args:
        store_id: Store whose zones are checked.
        query: Buyer's ``location`` and/or ``state``.

    Returns:
        DeliveryValidationResponse. "Not available" is a normal result.

    Raises:
        StoreNotFoundError: If the store does not exist (404).

    Example:
        POST /stores/helix-store/validate-delivery
        {"location": {"latitude": 4.9134, "longitude": 6.2932}, "state": "Rivers"}
    """
    query = query or DeliveryQuery()
    start_time = time.time()

    logger.info(
        f"Validating delivery for store {store_id}",
        extra={
            "store_id": store_id,
            "has_location": query.location is not None,
            "has_state": bool(query.state),
        },
    )

    try:
        zones = stores.zones_for(store_id)
        resolution = resolve_delivery(zones, query)
    except ShopZoneException:
        raise
    except Exception as e:
        logger.error(
            f"Error validating delivery for store {store_id}: {e}",
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to validate delivery: {str(e)}",
        )

    metrics_service.record_resolution(
        latency_ms=(time.time() - start_time) * 1000,
        available=resolution.available,
    )

    return DeliveryValidationResponse(
        available=resolution.available,
        zones=resolution.zones,
        cheapest_option=resolution.cheapest,
    )


@router.get("/{store_id}/delivery-zones", response_model=List[DeliveryZone])
def list_delivery_zones(
    store_id: str,
    stores: StoreRepository = Depends(get_store_repository),
) -> List[DeliveryZone]:
    """List a store's delivery zones.

    Inactive zones are included; zones that fail validation are not.
    """
    return stores.zones_for(store_id)
