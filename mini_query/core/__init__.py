"""Public core API for query normalization, execution, and result shaping."""

from .context import CallContext, EngineOptions, ExecutionContext, build_context
from .descriptors import (
    ExternalQuery,
    FunctionCall,
    NamedPreparedStatement,
    ParameterizedText,
    ParsedStatement,
    PreparedFile,
    QueryDescriptor,
    RawText,
    coerce_descriptor,
)
from .engine import execute_query
from .errors import (
    FormattingError,
    InvalidFunctionError,
    InvalidMaskError,
    InvalidQueryError,
    LooseQueryError,
    QueryEngineError,
    QueryFileError,
    QueryResultError,
    QueryResultErrorCode,
    StatementError,
)
from .events import QueryEvents
from .formatting import QueryFormatter, default_formatter
from .query_file import QueryFile
from .result import QueryResult, ResultRows
from .result_mask import QueryResultMask, SpecialQuery, validate_mask
from .runner import QueryRunner
from .shaping import shape_rows

__all__ = [
    "CallContext",
    "EngineOptions",
    "ExecutionContext",
    "build_context",
    "ExternalQuery",
    "FunctionCall",
    "NamedPreparedStatement",
    "ParameterizedText",
    "ParsedStatement",
    "PreparedFile",
    "QueryDescriptor",
    "RawText",
    "coerce_descriptor",
    "execute_query",
    "FormattingError",
    "InvalidFunctionError",
    "InvalidMaskError",
    "InvalidQueryError",
    "LooseQueryError",
    "QueryEngineError",
    "QueryFileError",
    "QueryResultError",
    "QueryResultErrorCode",
    "StatementError",
    "QueryEvents",
    "QueryFormatter",
    "default_formatter",
    "QueryFile",
    "QueryResult",
    "ResultRows",
    "QueryResultMask",
    "SpecialQuery",
    "validate_mask",
    "QueryRunner",
    "shape_rows",
]
