"""Internal async helpers shared by engine modules."""

from __future__ import annotations

import inspect
from typing import Any, Callable


async def _maybe_await(value: Any) -> Any:
    """Await awaitables and return non-awaitable values unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


async def _call_maybe_async(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call a sync or async callable and return its resolved result."""
    return await _maybe_await(func(*args, **kwargs))
