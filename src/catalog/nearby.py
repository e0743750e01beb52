"""Nearby product search.

Finds sellers within a radius of the buyer, lists their products through the
catalog, and attaches the buyer-to-seller distance to every product.
"""

import logging
import math
import time
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from src.catalog.products import ProductCatalog, ProductFilters
from src.catalog.sellers import find_nearby_sellers
from src.config import (
    DEFAULT_NEARBY_RADIUS_KM,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)
from src.delivery.geo import distance_km, round_distance
from src.delivery.models import Coordinate

# Configure module logger
logger = logging.getLogger(__name__)

NO_SELLERS_MESSAGE = "No sellers found in the specified area"


class NearbyQuery(BaseModel):
    """Search centre, radius and page requested by the buyer."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    radius_km: float = Field(default=DEFAULT_NEARBY_RADIUS_KM, ge=0)
    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @property
    def location(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class NearbySearchResult(BaseModel):
    """A page of products near the buyer.

    Attributes:
        products: Product records, each with a ``distance`` field in km.
        total: Number of matching products across all pages.
        page: Page number returned.
        limit: Page size.
        pages: Total number of pages.
        search_location: Echo of the search centre and radius.
        message: Set when no seller is in range.
    """

    products: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_SIZE
    pages: int = 0
    search_location: Dict[str, float] = Field(default_factory=dict)
    message: Optional[str] = None


class NearbyProductSearch:
    """Searches a product catalog for listings of nearby sellers."""

    def __init__(self, catalog: ProductCatalog):
        self.catalog = catalog

    def search(
        self,
        sellers: Sequence[Dict[str, Any]],
        filters: Optional[ProductFilters],
        query: NearbyQuery,
    ) -> NearbySearchResult:
        """Find products sold by sellers near the query location.

        Products keep the catalog's sort order; distance is attached as
        metadata and never used for ordering.

        Args:
            sellers: Seller records to consider.
            filters: Product filters passed through to the catalog.
            query: Search centre, radius and pagination.

        Returns:
            NearbySearchResult for the requested page.
        """
        start_time = time.time()
        location = query.location
        search_location = {
            "latitude": query.latitude,
            "longitude": query.longitude,
            "radius": query.radius_km,
        }

        nearby_sellers = find_nearby_sellers(sellers, location, query.radius_km)

        if not nearby_sellers:
            logger.info(
                "No sellers in search area",
                extra={"radius_km": query.radius_km, "sellers_total": len(sellers)},
            )
            return NearbySearchResult(
                page=query.page,
                limit=query.limit,
                search_location=search_location,
                message=NO_SELLERS_MESSAGE,
            )

        seller_locations = {seller.seller_id: seller.location for seller in nearby_sellers}

        page = self.catalog.find_products(
            seller_ids=seller_locations.keys(),
            filters=filters,
            page=query.page,
            limit=query.limit,
        )

        products = []
        for product in page.items:
            seller_location = seller_locations.get(str(product.get("seller")))
            distance = None
            if seller_location is not None:
                distance = round_distance(
                    distance_km(
                        location.latitude,
                        location.longitude,
                        seller_location.latitude,
                        seller_location.longitude,
                    )
                )
            products.append({**product, "distance": distance})

        logger.info(
            "Nearby products found",
            extra={
                "sellers_nearby": len(nearby_sellers),
                "products_total": page.total,
                "products_returned": len(products),
                "search_time_ms": round((time.time() - start_time) * 1000, 2),
            },
        )

        return NearbySearchResult(
            products=products,
            total=page.total,
            page=query.page,
            limit=query.limit,
            pages=math.ceil(page.total / query.limit),
            search_location=search_location,
        )
