"""Error taxonomy raised by the query engine.

Input errors subclass `TypeError` and formatting errors subclass `ValueError`
so callers can catch them by their built-in category as well.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

INVALID_QUERY = "Invalid query format."
INVALID_FUNCTION = "Invalid function name."
INVALID_MASK = "Invalid Query Result Mask specified."
LOOSE_QUERY = "Querying against a released or lost connection."


class QueryEngineError(Exception):
    """Base class for errors raised by the query engine."""


class InvalidQueryError(QueryEngineError, TypeError):
    """Raised when a query descriptor is absent or has an unsupported shape."""

    def __init__(self, message: str = INVALID_QUERY):
        super().__init__(message)


class InvalidFunctionError(InvalidQueryError):
    """Raised when a function call descriptor has no usable function name."""

    def __init__(self, message: str = INVALID_FUNCTION):
        super().__init__(message)


class InvalidMaskError(QueryEngineError, TypeError):
    """Raised when a query result mask is out of range or contradictory."""

    def __init__(self, message: str = INVALID_MASK):
        super().__init__(message)


class StatementError(QueryEngineError, TypeError):
    """Raised by `parse()` of an external query object that is malformed."""


class QueryFileError(QueryEngineError):
    """Stored on a `QueryFile` whose preparation failed."""

    def __init__(self, message: str, file: str):
        super().__init__(message)
        self.file = file


class FormattingError(QueryEngineError, ValueError):
    """Raised when values cannot be formatted into query text."""


class LooseQueryError(QueryEngineError):
    """Raised when a query settles without a valid execution client."""

    def __init__(self, message: str = LOOSE_QUERY):
        super().__init__(message)


class QueryResultErrorCode(IntEnum):
    """Kinds of mismatch between returned rows and the expected cardinality."""

    NO_DATA = 0
    NOT_EMPTY = 1
    MULTIPLE = 2


_RESULT_MESSAGES = {
    QueryResultErrorCode.NO_DATA: "No data returned from the query.",
    QueryResultErrorCode.NOT_EMPTY: "No return data was expected.",
    QueryResultErrorCode.MULTIPLE: "Multiple rows were not expected.",
}


class QueryResultError(QueryEngineError):
    """Raised when the number of returned rows contradicts the result mask.

    Attributes:
        code: Which mismatch occurred.
        result: The raw `QueryResult` that was received.
        received: Number of rows received.
        query: Final query text that was executed.
        params: Parameters sent with the query, if any.
    """

    def __init__(
        self,
        code: QueryResultErrorCode,
        result: Any,
        query: Any,
        params: Any = None,
    ):
        super().__init__(_RESULT_MESSAGES[code])
        self.code = code
        self.result = result
        self.received = len(result.rows) if result is not None else 0
        self.query = query
        self.params = params

    def __repr__(self) -> str:
        return (
            f"QueryResultError(code={self.code.name}, received={self.received}, "
            f"query={self.query!r})"
        )
