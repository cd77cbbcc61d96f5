import time
from collections.abc import Callable
from functools import wraps

from prometheus_client import Counter, Gauge, Histogram


LEDGER_OPERATIONS_TOTAL = Counter(
    "ledger_operations_total",
    "Total number of ledger operations",
    ["operation", "outcome"],
)

OVERDRAFT_EVENTS_TOTAL = Counter(
    "ledger_overdraft_events_total",
    "Total number of overdraft events",
    ["fee_collected"],
)

OPEN_ACCOUNTS = Gauge(
    "ledger_open_accounts",
    "Number of accounts currently held by the registry",
)

LEDGER_OPERATION_DURATION_SECONDS = Histogram(
    "ledger_operation_duration_seconds",
    "Ledger operation duration",
    ["operation"],
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1],
)


def track_operation_duration[**P, R](
    operation: str,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                duration = time.perf_counter() - start
                LEDGER_OPERATION_DURATION_SECONDS.labels(operation=operation).observe(duration)

        return wrapper

    return decorator
