"""Result shaping against a query result mask."""

from __future__ import annotations

from typing import Any

from .errors import QueryResultError, QueryResultErrorCode
from .result import QueryResult
from .result_mask import QueryResultMask
from .types import QueryParams

_ONE = QueryResultMask.ONE
_MANY = QueryResultMask.MANY
_NONE = QueryResultMask.NONE


def shape_rows(
    result: QueryResult,
    mask: QueryResultMask,
    query: Any,
    params: QueryParams = None,
) -> Any:
    """Return the value implied by `mask` for the rows in `result`.

    Returns:
        The first row when one row is expected, the full row list when many
        are accepted, or `None` for an accepted empty result.

    Raises:
        QueryResultError: The row count contradicts the mask.
    """

    rows = result.rows
    count = len(rows)
    if count:
        if count > 1 and mask & _ONE:
            raise QueryResultError(QueryResultErrorCode.MULTIPLE, result, query, params)
        if not mask & (_ONE | _MANY):
            raise QueryResultError(QueryResultErrorCode.NOT_EMPTY, result, query, params)
        if not mask & _MANY:
            return rows[0]
        return rows

    if not mask & _NONE:
        raise QueryResultError(QueryResultErrorCode.NO_DATA, result, query, params)
    if mask & _ONE:
        return None
    return rows if mask & _MANY else None
