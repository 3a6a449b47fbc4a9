"""Event hooks and error reporting: on_query/on_receive/on_error, invalid masks, function calls."""

from __future__ import annotations

import asyncio
import logging
import sqlite3
import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "mini_query").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mini_query import (
    DbApiClient,
    EngineOptions,
    FunctionCall,
    InvalidMaskError,
    QueryEvents,
    QueryRunner,
)


def on_query(context):
    print(f"[{context.tag}/{context.correlation_id}] -> {context.query}")
    if "DROP" in context.query.upper():
        return PermissionError("DROP statements are not allowed here")
    return None


def on_receive(rows, result, context):
    print(f"[{context.tag}] <- {len(rows)} row(s) in {result.duration} ms")


def on_error(error, context):
    print(f"[{context.tag}] !! {type(error).__name__}: {error} (query: {context.query})")


async def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    conn = sqlite3.connect(":memory:")
    try:
        options = EngineOptions(
            capitalize_sql=True,
            events=QueryEvents(on_query=on_query, on_receive=on_receive, on_error=on_error),
        )
        db = QueryRunner(DbApiClient(conn), options=options, tag="demo", correlation_id="run-1")

        print(await db.any("SELECT 1 AS a UNION ALL SELECT 2"))

        try:
            await db.none("DROP TABLE anything")
        except PermissionError:
            pass

        try:
            await db.query("SELECT 1", mask=7)
        except InvalidMaskError:
            pass

        # SQLite table-valued functions work as function calls.
        rows = await db.query(FunctionCall("json_each"), ['[1, 2]'])
        print([row["value"] for row in rows])
    finally:
        conn.close()


if __name__ == "__main__":
    asyncio.run(main())
