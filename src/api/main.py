"""FastAPI application main module.

This module defines the main FastAPI application instance, error handlers and
service endpoints for ShopZone, and serves as the entry point for the API
server.
"""

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src import __version__
from src.api.dependencies import clear_data_cache, loaded_sources
from src.api.exceptions import ShopZoneException
from src.api.logging_config import RequestLoggingMiddleware, setup_logging
from src.api.metrics import metrics_service
from src.api.routes import products, stores
from src.catalog.utils import check_data_exists
from src.config import DATA_DIR, LOG_LEVEL

setup_logging(LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create FastAPI application instance
app = FastAPI(
    title="ShopZone API",
    description="Marketplace delivery-zone resolution and nearby product search",
    version=__version__,
)

app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(stores.router)
app.include_router(products.router)


@app.exception_handler(ShopZoneException)
async def shopzone_exception_handler(
    request: Request, exc: ShopZoneException
) -> JSONResponse:
    """Render ShopZone errors as ``{"error", "details"}`` JSON."""
    logger.warning(
        exc.message,
        extra={
            "path": str(request.url.path),
            "status_code": exc.status_code,
            "error_type": type(exc).__name__,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "details": jsonable_encoder(exc.details)},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation failures as 400 responses."""
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    logger.info(
        "Request validation failed",
        extra={"path": str(request.url.path), "error_count": len(errors)},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation failed", "details": errors},
    )


@app.get("/ping")
def ping() -> Dict[str, str]:
    """Health check endpoint.

    Returns:
        Dictionary with status key set to "ok".

    Example:
        >>> response = client.get("/ping")
        >>> assert response.json() == {"status": "ok"}
    """
    return {"status": "ok"}


@app.get("/status")
def service_status() -> Dict[str, Any]:
    """Report whether the data files are present and what is loaded."""
    return {
        "data_dir": DATA_DIR,
        "data_available": check_data_exists(DATA_DIR),
        "loaded_sources": loaded_sources(),
        "version": __version__,
    }


@app.get("/metrics")
def get_metrics() -> Dict[str, Any]:
    """Return delivery resolution and nearby search counters."""
    return metrics_service.get_metrics()


@app.post("/admin/reload-data")
def reload_data() -> Dict[str, str]:
    """Clear cached data sources so the next request rereads the data files."""
    clear_data_cache()
    return {"status": "Data cache cleared"}


if __name__ == "__main__":
    import sys
    from pathlib import Path

    import uvicorn

    # Add project root to Python path for imports
    project_root = Path(__file__).parent.parent.parent
    sys.path.insert(0, str(project_root))

    uvicorn.run(
        "src.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
