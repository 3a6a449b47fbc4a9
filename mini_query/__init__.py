"""mini_query: async query execution with result cardinality checks."""

from .core.context import CallContext, EngineOptions, ExecutionContext, build_context
from .core.descriptors import (
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
from .core.engine import execute_query
from .core.errors import (
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
from .core.events import QueryEvents
from .core.formatting import QueryFormatter, default_formatter
from .core.query_file import QueryFile
from .core.result import QueryResult, ResultRows
from .core.result_mask import QueryResultMask, SpecialQuery, validate_mask
from .core.runner import QueryRunner
from .core.shaping import shape_rows
from .ports import DbApiClient

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
    "DbApiClient",
]
