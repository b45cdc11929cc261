from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import Counter, Histogram

# Low-cardinality labels only: never label by object key.
STORAGE_OPERATIONS = Counter(
    "storage_operations_total",
    "Total object storage operations",
    ["operation", "outcome"],
)

STORAGE_LATENCY = Histogram(
    "storage_operation_duration_seconds",
    "Object storage operation latency in seconds",
    ["operation"],
)


class OperationOutcome:
    """Outcome label for one tracked operation; the caller may refine it."""

    __slots__ = ("value",)

    def __init__(self) -> None:
        self.value = "ok"


@contextmanager
def track_operation(operation: str, *, enabled: bool = True) -> Iterator[OperationOutcome]:
    outcome = OperationOutcome()
    start = time.perf_counter()
    try:
        yield outcome
    except Exception:
        if outcome.value == "ok":
            outcome.value = "error"
        raise
    finally:
        if enabled:
            STORAGE_OPERATIONS.labels(operation, outcome.value).inc()
            STORAGE_LATENCY.labels(operation).observe(time.perf_counter() - start)
