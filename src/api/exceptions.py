"""Custom exceptions for the ShopZone API.

Defines specific exception types for better error handling and reporting.
"""

from typing import Any, Dict, Optional


class ShopZoneException(Exception):
    """Base exception for ShopZone errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code for API responses
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class StoreNotFoundError(ShopZoneException):
    """Raised when a store id is not present in the data source."""

    def __init__(self, store_id: str, details: Optional[Dict[str, Any]] = None):
        message = f"Store '{store_id}' not found."
        super().__init__(
            message=message,
            status_code=404,
            details=details or {"store_id": store_id},
        )


class DataSourceError(ShopZoneException):
    """Raised when a data file is missing or cannot be read."""

    def __init__(self, path: str, error: Optional[Exception] = None):
        if error is None:
            message = f"Data file not found at '{path}'."
            details: Dict[str, Any] = {"path": path}
        else:
            message = f"Failed to load data from '{path}': {str(error)}"
            details = {
                "path": path,
                "error": str(error),
                "error_type": type(error).__name__,
            }
        super().__init__(message=message, status_code=503, details=details)

