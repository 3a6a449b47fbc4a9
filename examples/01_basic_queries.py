"""Basic QueryRunner examples against sqlite3: none/one/one_or_none/many and transforms."""

from __future__ import annotations

import asyncio
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

from mini_query import DbApiClient, QueryResultError, QueryRunner


async def main() -> None:
    conn = sqlite3.connect(":memory:")
    try:
        db = QueryRunner(DbApiClient(conn))
        await db.none('CREATE TABLE "users" ("id" INTEGER PRIMARY KEY, "email" TEXT);')
        await db.none(
            'INSERT INTO "users" ("email") VALUES ($1), ($2);',
            ["alice@example.com", "bob@example.com"],
        )

        alice = await db.one('SELECT * FROM "users" WHERE "email" = ${email};', {"email": "alice@example.com"})
        print("one:", alice)

        missing = await db.one_or_none('SELECT * FROM "users" WHERE "id" = $1;', 42)
        print("one_or_none:", missing)

        users = await db.many('SELECT * FROM "users" ORDER BY "id";')
        print("many:", users, f"({users.duration} ms)")

        total = await db.one('SELECT COUNT(*) AS "n" FROM "users";', transform=lambda row: row["n"])
        print("count:", total)

        try:
            await db.one('SELECT * FROM "users";')
        except QueryResultError as exc:
            print("expected error:", exc.code.name, exc)
    finally:
        conn.close()


if __name__ == "__main__":
    asyncio.run(main())
