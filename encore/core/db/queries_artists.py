"""
Artist-related DB queries.

Every function takes an open connection whose `row_factory` is `aiosqlite.Row`
and never commits unless its docstring says so.
"""

from __future__ import annotations

import aiosqlite

from encore.core.db.models import ArtistRow


def _row_to_artist(row: aiosqlite.Row) -> ArtistRow:
    return ArtistRow(id=int(row["id"]), name=row["name"], created_at=row["created_at"])


async def find_artist_by_name(conn: aiosqlite.Connection, name: str) -> ArtistRow | None:
    """Exact-name lookup. If several rows match, the oldest wins."""
    cursor = await conn.execute(
        """
        SELECT id, name, created_at
        FROM artists
        WHERE name = ?
        ORDER BY id ASC
        LIMIT 1
        """,
        (name,),
    )
    row = await cursor.fetchone()
    return _row_to_artist(row) if row is not None else None


async def add_artist(conn: aiosqlite.Connection, name: str, *, created_at: int) -> int:
    """Insert an artist and return its id."""
    cursor = await conn.execute(
        "INSERT INTO artists (name, created_at) VALUES (?, ?);",
        (name, int(created_at)),
    )
    return int(cursor.lastrowid)


async def list_artists(
    conn: aiosqlite.Connection,
    *,
    limit: int,
    offset: int,
) -> list[ArtistRow]:
    cursor = await conn.execute(
        """
        SELECT id, name, created_at
        FROM artists
        ORDER BY name COLLATE NOCASE ASC, id ASC
        LIMIT ? OFFSET ?;
        """,
        (int(limit), int(offset)),
    )
    rows = await cursor.fetchall()
    return [_row_to_artist(r) for r in rows]


async def count_artists(conn: aiosqlite.Connection) -> int:
    cursor = await conn.execute("SELECT COUNT(*) AS c FROM artists;")
    row = await cursor.fetchone()
    return int(row["c"]) if row is not None else 0
