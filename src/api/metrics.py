"""Metrics service for tracking API performance.

Singleton service counting delivery resolutions and nearby searches, with
their latencies.
"""

import threading
from typing import Dict


class _LatencyCounter:
    """Call count and latency statistics for one kind of operation."""

    def __init__(self):
        self.reset()

    def record(self, latency_ms: float) -> None:
        self.count += 1
        self.total_ms += latency_ms
        self.min_ms = min(self.min_ms, latency_ms)
        self.max_ms = max(self.max_ms, latency_ms)

    def snapshot(self) -> Dict:
        avg = self.total_ms / self.count if self.count > 0 else 0.0
        return {
            "count": self.count,
            "average_latency_ms": round(avg, 2),
            "min_latency_ms": round(self.min_ms, 2) if self.count > 0 else 0.0,
            "max_latency_ms": round(self.max_ms, 2),
        }

    def reset(self) -> None:
        self.count = 0
        self.total_ms = 0.0
        self.min_ms = float("inf")
        self.max_ms = 0.0


class MetricsService:
    """Singleton service for tracking API metrics.

    Thread-safe counters for delivery resolutions and nearby searches.
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        """Create singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(MetricsService, cls).__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize metrics counters."""
        if self._initialized:
            return

        self._lock = threading.Lock()
        self._resolutions = _LatencyCounter()
        self._searches = _LatencyCounter()
        self._deliveries_available = 0
        self._initialized = True

    def record_resolution(self, latency_ms: float, available: bool) -> None:
        """Record a delivery resolution.

        Args:
            latency_ms: Latency in milliseconds
            available: Whether any zone matched
        """
        with self._lock:
            self._resolutions.record(latency_ms)
            if available:
                self._deliveries_available += 1

    def record_search(self, latency_ms: float) -> None:
        """Record a nearby product search.

        Args:
            latency_ms: Latency in milliseconds
        """
        with self._lock:
            self._searches.record(latency_ms)

    def get_metrics(self) -> Dict:
        """Get current metrics.

        Returns:
            Dictionary with:
            - delivery_resolutions: count and latency statistics
            - deliveries_available: resolutions that found a zone
            - nearby_searches: count and latency statistics
        """
        with self._lock:
            return {
                "delivery_resolutions": self._resolutions.snapshot(),
                "deliveries_available": self._deliveries_available,
                "nearby_searches": self._searches.snapshot(),
            }

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._lock:
            self._resolutions.reset()
            self._searches.reset()
            self._deliveries_available = 0


# Global singleton instance
metrics_service = MetricsService()
