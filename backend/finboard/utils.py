"""Shared utilities."""

from __future__ import annotations

import asyncio
import math
from datetime import datetime, timezone
from functools import wraps
from typing import Awaitable, Callable, ParamSpec, TypeVar

_P = ParamSpec("_P")
_R = TypeVar("_R")


def async_threadable(fn: Callable[_P, _R]) -> Callable[_P, Awaitable[_R]]:
    """Decorator that wraps a sync function to run in a thread via asyncio.to_thread.

    The decorated function becomes async. Callers simply ``await func(...)``
    instead of ``await asyncio.to_thread(func, ...)``.
    """

    @wraps(fn)
    async def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        return await asyncio.to_thread(fn, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_float(val) -> float | None:
    """Parse a provider number (float, int or numeric string).

    Returns None for missing, unparsable, NaN or infinite values so the
    result is always safe to serialize as JSON.
    """
    if val is None or isinstance(val, bool):
        return None
    try:
        num = float(val)
    except (TypeError, ValueError):
        return None
    if math.isnan(num) or math.isinf(num):
        return None
    return num
