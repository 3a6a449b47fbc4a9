"""Port contracts for the engine's external collaborators."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from .types import QueryParams


class ExecutionPrimitivePort(Protocol):
    """Executes one statement.

    `query` may be a coroutine function or a plain function. It returns a
    `QueryResult`, an object exposing `rows`, or a sequence of those for
    multi-statement execution. `name` is passed only for named prepared
    statements.
    """

    def query(self, text: str, params: QueryParams = None, **kwargs: Any) -> Any: ...


class FormatterPort(Protocol):
    """Substitutes values into query text."""

    def format_query(self, text: str, values: Any = None) -> str: ...

    def format_function(self, name: str, values: Any = None, capitalize: bool = False) -> str: ...


class PreparedFilePort(Protocol):
    """Prepared SQL file handle."""

    query: Optional[str]
    error: Optional[Exception]

    @property
    def file(self) -> str: ...

    def prepare(self) -> None: ...
