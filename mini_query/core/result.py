"""Raw query result types returned by execution primitives."""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence


class ResultRows(list):
    """Row list carrying a read-only `duration` once execution completes."""

    _duration: Optional[int] = None

    @property
    def duration(self) -> Optional[int]:
        """Execution time in milliseconds, `None` before dispatch finished."""

        return self._duration


class QueryResult:
    """Result of one executed statement.

    Attributes:
        rows: Returned rows as mappings.
        command: Leading SQL command (`SELECT`, `INSERT`, ...), when known.
        row_count: Driver-reported affected/returned row count, when known.
        fields: Column names, when known.
    """

    def __init__(
        self,
        rows: Iterable[Any] = (),
        *,
        command: Optional[str] = None,
        row_count: Optional[int] = None,
        fields: Optional[Sequence[str]] = None,
    ):
        self.rows = rows if isinstance(rows, ResultRows) else ResultRows(rows)
        self.command = command
        self.row_count = row_count
        self.fields = list(fields) if fields is not None else None
        self._duration: Optional[int] = None

    @property
    def duration(self) -> Optional[int]:
        """Execution time in milliseconds, `None` before dispatch finished."""

        return self._duration

    def _set_duration(self, duration: int) -> None:
        self._duration = duration
        self.rows._duration = duration

    def __repr__(self) -> str:
        return (
            f"QueryResult(command={self.command!r}, rows={len(self.rows)}, "
            f"duration={self._duration!r})"
        )


def as_query_result(raw: Any) -> QueryResult:
    """Convert a primitive's return value to a `QueryResult`.

    A sequence of results (multi-statement execution) yields its last entry.
    Objects exposing `rows` are converted; other values are rejected.
    """

    if isinstance(raw, QueryResult):
        return raw
    if isinstance(raw, (list, tuple)):
        if not raw:
            return QueryResult()
        return as_query_result(raw[-1])
    rows = getattr(raw, "rows", None)
    if rows is None:
        raise TypeError(f"Unsupported query result type: {type(raw)}")
    return QueryResult(
        rows,
        command=getattr(raw, "command", None),
        row_count=getattr(raw, "row_count", getattr(raw, "rowCount", None)),
        fields=getattr(raw, "fields", None),
    )
