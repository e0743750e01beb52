"""Product search endpoints for the ShopZone API.

This module provides the nearby product listing: products of sellers within
a radius of the buyer, each annotated with its distance.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field

from src.api.dependencies import get_product_catalog, get_seller_directory
from src.api.exceptions import ShopZoneException
from src.api.metrics import metrics_service
from src.catalog.nearby import NearbyProductSearch, NearbyQuery
from src.catalog.products import ProductCatalog, ProductFilters
from src.catalog.sellers import SellerDirectory
from src.config import (
    DEFAULT_NEARBY_RADIUS_KM,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)

# Configure module logger
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(
    prefix="/products",
    tags=["products"],
)


class Pagination(BaseModel):
    """Pagination block of a product listing."""

    page: int
    limit: int
    total: int
    pages: int


class SearchLocation(BaseModel):
    """Echo of the search centre; radius is in kilometers."""

    latitude: float
    longitude: float
    radius: float


class NearbyProductsResponse(BaseModel):
    """Response model for nearby product searches."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    data: List[Dict[str, Any]] = Field(
        default_factory=list, description="Products with a distance field in km"
    )
    pagination: Pagination
    search_location: SearchLocation = Field(..., alias="searchLocation")
    message: Optional[str] = None


@router.get("/nearby", response_model=NearbyProductsResponse)
def get_nearby_products(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    radius: float = Query(
        DEFAULT_NEARBY_RADIUS_KM, ge=0, description="Search radius in km"
    ),
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    category: Optional[str] = None,
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    rating: Optional[float] = Query(None, ge=0, le=5),
    search: Optional[str] = None,
    sellers: SellerDirectory = Depends(get_seller_directory),
    catalog: ProductCatalog = Depends(get_product_catalog),
) -> NearbyProductsResponse:
    """Get products sold by sellers near a location.

    Products are sorted by rating and recency; ``distance`` is informational.

    Example:
        GET /products/nearby?latitude=4.8156&longitude=7.0134&radius=25&category=food
    """
    start_time = time.time()
    query = NearbyQuery(
        latitude=latitude,
        longitude=longitude,
        radius_km=radius,
        page=page,
        limit=limit,
    )
    filters = ProductFilters(
        category=category,
        min_price=min_price,
        max_price=max_price,
        rating=rating,
        search=search,
    )

    try:
        result = NearbyProductSearch(catalog).search(sellers.all(), filters, query)
    except ShopZoneException:
        raise
    except Exception as e:
        logger.error(f"Error fetching nearby products: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch nearby products: {str(e)}",
        )

    metrics_service.record_search((time.time() - start_time) * 1000)

    return NearbyProductsResponse(
        data=result.products,
        pagination=Pagination(
            page=result.page,
            limit=result.limit,
            total=result.total,
            pages=result.pages,
        ),
        search_location=SearchLocation(**result.search_location),
        message=result.message,
    )
