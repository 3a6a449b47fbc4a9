"""DB-API execution client implementing the engine's execution primitive."""

from __future__ import annotations

import inspect
from typing import Any, Mapping

from ...core._async_utils import _maybe_await
from ...core.result import QueryResult
from ...core.types import QueryParams, RowMapping


class DbApiClient:
    """Runs statements on a DB-API connection and returns `QueryResult` objects.

    Both sync connections (`sqlite3`, `psycopg`) and async connections with
    awaitable cursor methods are supported.

    With `autocommit` enabled (the default) each successful statement is
    committed right away. Disable it to manage transactions on the
    connection yourself.
    """

    def __init__(self, conn: Any, *, autocommit: bool = True):
        """Create client.

        Args:
            conn: DB-API connection object, sync or async.
            autocommit: Commit after every successful statement.
        """

        self.conn = conn
        self.autocommit = autocommit
        self._closed = False

    async def query(self, text: str, params: QueryParams = None, *, name: str | None = None) -> QueryResult:
        """Execute one statement and collect its rows.

        `name` identifies a prepared statement. DB-API drivers manage statement
        preparation themselves, so it is accepted and not forwarded.
        """

        if self._closed:
            raise RuntimeError("connection is closed")
        cur = await _maybe_await(self.conn.cursor())
        try:
            if params is None:
                await _maybe_await(cur.execute(text))
            else:
                await _maybe_await(cur.execute(text, params))
            desc = getattr(cur, "description", None)
            rows: list[RowMapping] = []
            fields = None
            if desc:
                fields = [d[0] for d in desc]
                fetched = await _maybe_await(cur.fetchall())
                rows = [self._row_to_mapping(fields, r) for r in fetched]
            row_count = getattr(cur, "rowcount", None)
        finally:
            close = getattr(cur, "close", None)
            if callable(close):
                await _maybe_await(close())
        if self.autocommit:
            commit = getattr(self.conn, "commit", None)
            if callable(commit):
                await _maybe_await(commit())
        return QueryResult(
            rows,
            command=_command_of(text),
            row_count=row_count if row_count is not None and row_count >= 0 else len(rows),
            fields=fields,
        )

    def _row_to_mapping(self, fields: list[str], row: Any) -> RowMapping:
        """Normalize row object to mapping.

        Supports mapping rows directly and tuple/list rows via the cursor
        column names.
        """

        if isinstance(row, Mapping):
            return row

        if isinstance(row, (tuple, list)):
            return dict(zip(fields, row, strict=True))

        try:
            return dict(row)
        except (TypeError, ValueError):
            pass

        raise TypeError(f"Unsupported row type: {type(row)}")

    def close(self) -> None:
        """Close underlying connection.

        Raises:
            RuntimeError: The connection closes asynchronously; use `aclose()`.
        """

        if self._closed:
            return
        close = getattr(self.conn, "close", None)
        if callable(close) and inspect.iscoroutinefunction(getattr(type(self.conn), "close", None)):
            raise RuntimeError("connection closes asynchronously; use aclose()")
        self._closed = True
        if callable(close):
            close()

    async def aclose(self) -> None:
        """Async close underlying connection."""

        if self._closed:
            return
        self._closed = True
        close = getattr(self.conn, "close", None)
        if callable(close):
            await _maybe_await(close())

    async def __aenter__(self) -> DbApiClient:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.aclose()


def _command_of(text: str) -> str | None:
    words = text.split(None, 1)
    return words[0].upper() if words else None
