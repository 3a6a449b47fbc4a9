"""Query execution: dispatch, result shaping, and single settlement.

`execute_query` runs one query through normalization, formatting, mask
validation, the pre-execution hook, exactly one dispatch to the execution
primitive, the receive hook, and result shaping. The first error detected at
any stage wins; it is reported to the `on_error` hook once and raised.

Cancelling the awaiting task is not supported: `asyncio.CancelledError`
propagates as is and no hook runs for it.
"""

from __future__ import annotations

import logging
import time
from typing import Any, NoReturn, Optional

from ._async_utils import _maybe_await
from .context import CallContext, build_context
from .errors import InvalidMaskError, LooseQueryError, QueryResultError
from .events import notify_error, notify_query, notify_receive
from .normalizer import NormalizedQuery, apply_formatting, normalize_query
from .result import QueryResult, as_query_result
from .result_mask import QueryResultMask, SpecialQuery, validate_mask
from .shaping import shape_rows
from .types import QueryParams

logger = logging.getLogger(__name__)


class _Settlement:
    """Owns one call's error slot and guarantees a single settlement."""

    def __init__(self, call: CallContext, error: Optional[Exception] = None):
        self._call = call
        self.error = error
        self._settled = False

    async def check(self, text: Any, params: QueryParams) -> None:
        """Raise the pending error, if any, after notifying `on_error`."""

        if self._call.client is None and self.error is None:
            self.error = LooseQueryError()
        if self.error is not None:
            await self._reject(text, params)

    def resolve(self, value: Any) -> Any:
        self._mark_settled()
        return value

    async def _reject(self, text: Any, params: QueryParams) -> NoReturn:
        self._mark_settled()
        error = self.error
        context = build_context(self._call, text, params)
        await notify_error(self._call.options.events, error, context)
        raise error

    def _mark_settled(self) -> None:
        if self._settled:
            raise RuntimeError("query is already settled")
        self._settled = True


async def execute_query(
    call: CallContext,
    query: Any,
    values: Any = None,
    mask: Any = None,
) -> Any:
    """Execute one query and shape its rows according to `mask`.

    Args:
        call: Caller context holding the execution client and options.
        query: A query descriptor, SQL string, `QueryFile`, or mapping.
        values: Values to format into the query or bind natively.
        mask: A `QueryResultMask` value, `None` for `ANY`, or
            `SpecialQuery.RESULT` to receive the raw `QueryResult`.

    Returns:
        The shaped value: a row, the row list, or `None`.

    Raises:
        QueryEngineError: Input, formatting, shape, or context errors.
        Exception: Errors reported by the execution primitive, unchanged.
    """

    options = call.options
    special = mask if isinstance(mask, SpecialQuery) else None

    normalized = apply_formatting(normalize_query(query, values, options), options)
    validated = QueryResultMask.ANY
    error = normalized.error
    if error is None and special is None:
        try:
            validated = validate_mask(mask)
        except InvalidMaskError as exc:
            error = exc

    text, params = normalized.text, normalized.params
    settlement = _Settlement(call, error)
    await settlement.check(text, params)

    settlement.error = await notify_query(options.events, build_context(call, text, params))
    await settlement.check(text, params)

    result = await _dispatch(settlement, call, normalized)
    if result is not None and result.rows:
        receive_error = await notify_receive(
            options.events, result.rows, result, build_context(call, text, params)
        )
        if receive_error is not None:
            settlement.error = receive_error
    await settlement.check(text, params)

    if special is not None:
        return settlement.resolve(result)
    data = None
    try:
        data = shape_rows(result, validated, text, params)
    except QueryResultError as exc:
        settlement.error = exc
    await settlement.check(text, params)
    return settlement.resolve(data)


async def _dispatch(
    settlement: _Settlement,
    call: CallContext,
    normalized: NormalizedQuery,
) -> Optional[QueryResult]:
    """Invoke the execution primitive once; record failures on the settlement."""

    kwargs = {"name": normalized.statement_name} if normalized.statement_name else {}
    start = time.monotonic()
    try:
        raw = await _maybe_await(call.client.query(normalized.text, normalized.params, **kwargs))
        result = as_query_result(raw)
    except Exception as exc:
        settlement.error = exc
        return None
    duration = int((time.monotonic() - start) * 1000)
    result._set_duration(duration)
    logger.debug("query executed in %d ms, %d row(s): %s", duration, len(result.rows), normalized.text)
    return result
