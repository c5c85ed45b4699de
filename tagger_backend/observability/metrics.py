"""
Operation metrics.

Repository calls and connection lifecycle events are timed and folded into
per-operation aggregates that the ``/metrics`` endpoint reports. Each
aggregate is keyed by operation name plus its tags, e.g.
``repository.get[collection=drivers]``.
"""

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from ..constants import MAX_METRICS

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _metric_key(operation_name: str, tags: dict[str, Any]) -> str:
    if not tags:
        return operation_name
    labels = "_".join(f"{name}={tags[name]}" for name in sorted(tags))
    return f"{operation_name}[{labels}]"


@dataclass
class OperationMetrics:
    """Running count, latency bounds and failures of one operation."""

    operation_name: str
    count: int = 0
    total_duration_ms: float = 0.0
    min_duration_ms: float | None = None
    max_duration_ms: float = 0.0
    error_count: int = 0
    last_execution: datetime | None = None

    @property
    def avg_duration_ms(self) -> float:
        if not self.count:
            return 0.0
        return self.total_duration_ms / self.count

    @property
    def error_rate(self) -> float:
        """Failed share of executions, in percent."""
        if not self.count:
            return 0.0
        return 100 * self.error_count / self.count

    def record(self, duration_ms: float, success: bool = True) -> None:
        self.count += 1
        self.total_duration_ms += duration_ms
        if self.min_duration_ms is None or duration_ms < self.min_duration_ms:
            self.min_duration_ms = duration_ms
        self.max_duration_ms = max(self.max_duration_ms, duration_ms)
        self.error_count += 0 if success else 1
        self.last_execution = _now()

    def merge(self, other: "OperationMetrics") -> None:
        """Fold another aggregate of the same operation into this one."""
        self.count += other.count
        self.total_duration_ms += other.total_duration_ms
        self.error_count += other.error_count
        self.max_duration_ms = max(self.max_duration_ms, other.max_duration_ms)
        if other.min_duration_ms is not None:
            self.min_duration_ms = (
                other.min_duration_ms
                if self.min_duration_ms is None
                else min(self.min_duration_ms, other.min_duration_ms)
            )
        if other.last_execution and (
            self.last_execution is None or other.last_execution > self.last_execution
        ):
            self.last_execution = other.last_execution

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation_name,
            "count": self.count,
            "avg_duration_ms": round(self.avg_duration_ms, 2),
            "min_duration_ms": round(self.min_duration_ms or 0.0, 2),
            "max_duration_ms": round(self.max_duration_ms, 2),
            "error_count": self.error_count,
            "error_rate_percent": round(self.error_rate, 2),
            "last_execution": self.last_execution.isoformat() if self.last_execution else None,
        }


class MetricsCollector:
    """
    Thread-safe store of operation aggregates.

    At most ``max_metrics`` keys are kept; recording into a new key when full
    evicts the key that was recorded into least recently.
    """

    def __init__(self, max_metrics: int = MAX_METRICS):
        self._max_metrics = max_metrics
        self._entries: OrderedDict[str, OperationMetrics] = OrderedDict()
        self._lock = threading.Lock()

    def record_operation(
        self, operation_name: str, duration_ms: float, success: bool = True, **tags: Any
    ) -> None:
        """
        Record one execution of ``operation_name``.

        Args:
            operation_name: Dotted operation name, e.g. "repository.add"
            duration_ms: Wall-clock duration in milliseconds
            success: False when the operation raised
            **tags: Labels that split the aggregate (collection, ...)
        """
        key = _metric_key(operation_name, tags)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                if len(self._entries) >= self._max_metrics:
                    evicted, _ = self._entries.popitem(last=False)
                    logger.debug(f"Metrics full, evicted '{evicted}'")
                entry = self._entries[key] = OperationMetrics(operation_name=operation_name)
            else:
                self._entries.move_to_end(key)
            entry.record(duration_ms, success)

    def get_metrics(self, operation_name: str | None = None) -> dict[str, Any]:
        """Per-key aggregates, optionally limited to keys starting with ``operation_name``."""
        prefix = operation_name or ""
        with self._lock:
            metrics = {
                key: entry.to_dict()
                for key, entry in self._entries.items()
                if key.startswith(prefix)
            }
            total = len(self._entries)
        return {"timestamp": _now().isoformat(), "metrics": metrics, "total_operations": total}

    def get_summary(self) -> dict[str, Any]:
        """Aggregates merged across tags, one per operation name."""
        merged: dict[str, OperationMetrics] = {}
        with self._lock:
            for entry in self._entries.values():
                name = entry.operation_name
                merged.setdefault(name, OperationMetrics(operation_name=name)).merge(entry)
            total = len(self._entries)
        return {
            "timestamp": _now().isoformat(),
            "total_operations": total,
            "summary": {name: entry.to_dict() for name, entry in merged.items()},
        }

    def get_operation_count(self, operation_name: str) -> int:
        """Executions of ``operation_name`` across every tag set."""
        with self._lock:
            return sum(
                entry.count
                for entry in self._entries.values()
                if entry.operation_name == operation_name
            )

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()


_metrics_collector: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Process-wide collector, created on first use."""
    global _metrics_collector
    if _metrics_collector is None:
        _metrics_collector = MetricsCollector()
    return _metrics_collector


def record_operation(
    operation_name: str, duration_ms: float, success: bool = True, **tags: Any
) -> None:
    """Record into the process-wide collector."""
    get_metrics_collector().record_operation(operation_name, duration_ms, success, **tags)
