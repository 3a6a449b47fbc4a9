"""Query runner facade with one method per expected result shape."""

from __future__ import annotations

from typing import Any, Callable, Optional

from .context import CallContext, EngineOptions
from .contracts import ExecutionPrimitivePort
from .descriptors import FunctionCall
from .engine import execute_query
from .result import QueryResult
from .result_mask import QueryResultMask, SpecialQuery

Transform = Optional[Callable[[Any], Any]]


class QueryRunner:
    """Runs queries against one execution client.

    Args:
        client: Execution primitive, for example a `DbApiClient`.
        options: Engine options shared by all queries of this runner.
        tag: Diagnostic tag passed to event hooks.
        correlation_id: Correlation id passed to event hooks.
    """

    def __init__(
        self,
        client: ExecutionPrimitivePort,
        *,
        options: EngineOptions | None = None,
        tag: Any = None,
        correlation_id: Any = None,
    ):
        self._call = CallContext(
            client=client,
            options=options or EngineOptions(),
            tag=tag,
            correlation_id=correlation_id,
        )

    @property
    def context(self) -> CallContext:
        return self._call

    def release(self) -> None:
        """Detach the client; later queries fail with `LooseQueryError`."""

        self._call.client = None

    async def query(self, query: Any, values: Any = None, mask: Any = None) -> Any:
        """Execute a query with an explicit result mask."""

        return await execute_query(self._call, query, values, mask)

    async def none(self, query: Any, values: Any = None) -> None:
        """Expect no rows."""

        await self.query(query, values, QueryResultMask.NONE)

    async def one(self, query: Any, values: Any = None, transform: Transform = None) -> Any:
        """Expect exactly one row and return it."""

        return _apply(transform, await self.query(query, values, QueryResultMask.ONE))

    async def many(self, query: Any, values: Any = None, transform: Transform = None) -> Any:
        """Expect one or more rows and return them."""

        return _apply(transform, await self.query(query, values, QueryResultMask.MANY))

    async def one_or_none(self, query: Any, values: Any = None, transform: Transform = None) -> Any:
        """Expect zero or one row; return the row or `None`."""

        return _apply(transform, await self.query(query, values, QueryResultMask.ONE_OR_NONE))

    async def many_or_none(self, query: Any, values: Any = None, transform: Transform = None) -> Any:
        """Expect any number of rows and return them as a list."""

        return _apply(transform, await self.query(query, values, QueryResultMask.MANY_OR_NONE))

    async def any(self, query: Any, values: Any = None, transform: Transform = None) -> Any:
        """Same as `many_or_none`."""

        return await self.many_or_none(query, values, transform)

    async def result(self, query: Any, values: Any = None, transform: Transform = None) -> Any:
        """Return the raw `QueryResult` without shaping."""

        raw: QueryResult = await self.query(query, values, SpecialQuery.RESULT)
        return _apply(transform, raw)

    async def func(self, name: str, values: Any = None, mask: Any = QueryResultMask.MANY_OR_NONE) -> Any:
        """Call a database function: `select * from name(values)`."""

        return await self.query(FunctionCall(name), values, mask)

    async def proc(self, name: str, values: Any = None, transform: Transform = None) -> Any:
        """Call a procedure-like function expecting at most one row."""

        return _apply(transform, await self.func(name, values, QueryResultMask.ONE_OR_NONE))


def _apply(transform: Transform, value: Any) -> Any:
    return transform(value) if transform is not None else value
