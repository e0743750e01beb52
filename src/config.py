"""Service configuration.

Values are module-level constants. The data directory and log level can be
overridden through environment variables.
"""

import os

# Data files
DATA_DIR = os.getenv("SHOPZONE_DATA_DIR", "data")
STORES_FILENAME = "stores.json"
SELLERS_FILENAME = "sellers.json"
PRODUCTS_FILENAME = "products.csv"

# Logging
LOG_LEVEL = os.getenv("SHOPZONE_LOG_LEVEL", "INFO")

# Nearby search defaults
DEFAULT_NEARBY_RADIUS_KM = 10.0
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100
