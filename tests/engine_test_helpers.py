from __future__ import annotations

from typing import Any

from mini_query import QueryResult


def make_result(count: int, **kwargs: Any) -> QueryResult:
    return QueryResult([{"id": i + 1} for i in range(count)], **kwargs)


class FakeClient:
    """Execution primitive that replays prepared results and records calls."""

    def __init__(self, *results: Any, error: BaseException | None = None):
        self._results = list(results)
        self._error = error
        self.calls: list[tuple[str, Any, dict[str, Any]]] = []

    async def query(self, text: str, params: Any = None, **kwargs: Any) -> Any:
        self.calls.append((text, params, kwargs))
        if self._error is not None:
            raise self._error
        if self._results:
            return self._results.pop(0)
        return QueryResult([])


class SyncFakeClient(FakeClient):
    """Fake primitive whose `query` is a plain function."""

    def query(self, text: str, params: Any = None, **kwargs: Any) -> Any:  # type: ignore[override]
        self.calls.append((text, params, kwargs))
        if self._error is not None:
            raise self._error
        if self._results:
            return self._results.pop(0)
        return QueryResult([])


class RowsOnly:
    """Foreign result object exposing only `rows`."""

    def __init__(self, rows: list[dict[str, Any]], command: str | None = None):
        self.rows = rows
        self.command = command
