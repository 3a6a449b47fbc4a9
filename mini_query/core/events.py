"""Lifecycle hooks and their notification helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

from ._async_utils import _call_maybe_async
from .result import QueryResult

if TYPE_CHECKING:
    from .context import ExecutionContext

logger = logging.getLogger(__name__)

QueryHook = Callable[["ExecutionContext"], Any]
ReceiveHook = Callable[[list, QueryResult, "ExecutionContext"], Any]
ErrorHook = Callable[[BaseException, "ExecutionContext"], Any]


@dataclass(frozen=True)
class QueryEvents:
    """Optional hooks invoked around query execution.

    Hooks may be plain or coroutine functions.

    Attributes:
        on_query: Called before dispatch. Returning or raising an exception
            aborts the query with that error.
        on_receive: Called with `(rows, result, context)` when at least one
            row was returned. Returning or raising an exception fails the
            query with that error.
        on_error: Called once with `(error, context)` for every failed query.
            Its return value is ignored.
    """

    on_query: Optional[QueryHook] = None
    on_receive: Optional[ReceiveHook] = None
    on_error: Optional[ErrorHook] = None


async def notify_query(events: QueryEvents, context: ExecutionContext) -> Optional[Exception]:
    """Run the pre-execution hook and return the error it produced, if any."""

    if events.on_query is None:
        return None
    return await _hook_error(events.on_query, context)


async def notify_receive(
    events: QueryEvents,
    rows: list,
    result: QueryResult,
    context: ExecutionContext,
) -> Optional[Exception]:
    """Run the receive hook and return the error it produced, if any."""

    if events.on_receive is None:
        return None
    return await _hook_error(events.on_receive, rows, result, context)


async def notify_error(events: QueryEvents, error: BaseException, context: ExecutionContext) -> None:
    """Run the error hook; its failures are logged and do not replace `error`."""

    if events.on_error is None:
        return
    try:
        await _call_maybe_async(events.on_error, error, context)
    except Exception:
        logger.exception("on_error hook failed for query %r", context.query)


async def _hook_error(hook: Callable[..., Any], *args: Any) -> Optional[Exception]:
    try:
        outcome = await _call_maybe_async(hook, *args)
    except Exception as exc:
        return exc
    if isinstance(outcome, Exception):
        return outcome
    return None
