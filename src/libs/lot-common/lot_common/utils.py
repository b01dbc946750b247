# src/libs/lot-common/lot_common/utils.py
import time
import functools
from typing import Callable, Any

from .monitoring import DB_OPERATION_LATENCY_SECONDS


def async_timed(repository: str, method: str) -> Callable:
    """
    Decorates an async repository method so its latency lands in the
    DB_OPERATION_LATENCY_SECONDS histogram, whether it returns or raises.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            start_time = time.monotonic()
            try:
                return await func(*args, **kwargs)
            finally:
                DB_OPERATION_LATENCY_SECONDS.labels(
                    repository=repository, method=method
                ).observe(time.monotonic() - start_time)
        return wrapper
    return decorator
