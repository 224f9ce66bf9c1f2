"""
Rate calculation metrics

In-memory counters and histograms for the rate pipeline:
- shipping.rates.calculated (one per calculate_rates call)
- shipping.rates.method_failure{method=...} (one per failing plugin)
- shipping.rates.per_shipment (histogram of rates returned per call)

For production, export get_all_metrics() to Prometheus, DataDog, or CloudWatch.
"""
import logging
from collections import deque
from datetime import datetime, timezone, timedelta
from threading import Lock
from typing import Dict, Optional

from shipping_engine.core.config import settings

logger = logging.getLogger(__name__)


class MetricsCollector:
    """
    In-memory metrics collector with rolling windows.

    Collects counters (monotonically increasing values) and histograms
    (distribution of values).
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._counters: Dict[str, int] = {}
        self._histograms: Dict[str, deque] = {}
        self._lock = Lock()
        self._start_time = datetime.now(timezone.utc)

    def increment(self, name: str, value: int = 1, labels: Dict[str, str] = None) -> None:
        """Increment a counter metric."""
        if not self.enabled:
            return
        key = self._make_key(name, labels)
        with self._lock:
            self._counters[key] = self._counters.get(key, 0) + value

    def observe(self, name: str, value: float, labels: Dict[str, str] = None) -> None:
        """Record a histogram observation."""
        if not self.enabled:
            return
        key = self._make_key(name, labels)
        now = datetime.now(timezone.utc)
        with self._lock:
            if key not in self._histograms:
                self._histograms[key] = deque(maxlen=10000)  # Keep last 10k observations
            self._histograms[key].append((now, value))

    def _make_key(self, name: str, labels: Optional[Dict[str, str]]) -> str:
        """Create metric key from name and labels."""
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"

    def get_counter(self, name: str, labels: Dict[str, str] = None) -> int:
        key = self._make_key(name, labels)
        return self._counters.get(key, 0)

    def get_histogram_stats(self, name: str, labels: Dict[str, str] = None,
                            window_seconds: int = 300) -> Dict:
        """Get histogram statistics for time window."""
        key = self._make_key(name, labels)
        cutoff = datetime.now(timezone.utc) - timedelta(seconds=window_seconds)

        with self._lock:
            if key not in self._histograms:
                return {"count": 0, "avg": 0, "min": 0, "max": 0}
            values = [v for ts, v in self._histograms[key] if ts > cutoff]

        if not values:
            return {"count": 0, "avg": 0, "min": 0, "max": 0}

        return {
            "count": len(values),
            "avg": sum(values) / len(values),
            "min": min(values),
            "max": max(values),
        }

    def get_all_metrics(self) -> Dict:
        """Get all metrics for export/display."""
        now = datetime.now(timezone.utc)
        return {
            "uptime_seconds": (now - self._start_time).total_seconds(),
            "counters": dict(self._counters),
            "rates_per_shipment": self.get_histogram_stats("shipping.rates.per_shipment"),
            "collected_at": now.isoformat(),
        }

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()
            self._histograms.clear()


# Global metrics collector
metrics = MetricsCollector(enabled=settings.SHIPPING_METRICS_ENABLED)
