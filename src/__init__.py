"""ShopZone: marketplace backend with delivery-zone resolution.

This package provides a backend service that decides which of a storefront's
delivery zones can serve a buyer, and finds products sold near a buyer.

Modules:
    api: FastAPI application and REST API endpoints
    delivery: Distance math, zone matching and zone resolution
    catalog: Seller/product data sources and nearby product search
"""

__version__ = "0.1.0"
