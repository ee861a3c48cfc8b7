"""
Album-related DB queries.

Every function takes an open connection whose `row_factory` is `aiosqlite.Row`
and never commits unless its docstring says so.
"""

from __future__ import annotations

import aiosqlite

from encore.core.db.models import AlbumRow


def _row_to_album(row: aiosqlite.Row) -> AlbumRow:
    return AlbumRow(
        id=int(row["id"]),
        title=row["title"],
        artist_id=row["artist_id"],
        year=row["year"],
        artist_name=row["artist_name"],
        created_at=row["created_at"],
    )


async def find_album_by_title_and_artist(
    conn: aiosqlite.Connection, title: str, artist_id: int | None
) -> AlbumRow | None:
    """
    Lookup an album by exact title within one artist scope.

    `artist_id=None` matches albums that have no artist.
    """
    if artist_id is not None:
        cursor = await conn.execute(
            """
            SELECT al.id, al.title, al.artist_id, al.year, al.created_at,
                   ar.name AS artist_name
            FROM albums al
            LEFT JOIN artists ar ON ar.id = al.artist_id
            WHERE al.title = ? AND al.artist_id = ?
            ORDER BY al.id ASC
            LIMIT 1
            """,
            (title, int(artist_id)),
        )
    else:
        cursor = await conn.execute(
            """
            SELECT al.id, al.title, al.artist_id, al.year, al.created_at,
                   NULL AS artist_name
            FROM albums al
            WHERE al.title = ? AND al.artist_id IS NULL
            ORDER BY al.id ASC
            LIMIT 1
            """,
            (title,),
        )
    row = await cursor.fetchone()
    return _row_to_album(row) if row is not None else None


async def add_album(
    conn: aiosqlite.Connection,
    title: str,
    artist_id: int | None,
    year: int | None,
    *,
    created_at: int,
) -> int:
    """Insert an album and return its id."""
    cursor = await conn.execute(
        "INSERT INTO albums (title, artist_id, year, created_at) VALUES (?, ?, ?, ?);",
        (title, artist_id, year, int(created_at)),
    )
    return int(cursor.lastrowid)


async def list_albums(
    conn: aiosqlite.Connection,
    *,
    artist_id: int | None = None,
    limit: int,
    offset: int,
) -> list[AlbumRow]:
    """List albums, optionally restricted to one artist."""
    where = "WHERE al.artist_id = ?" if artist_id is not None else ""
    params: tuple[int, ...] = (int(artist_id),) if artist_id is not None else ()
    cursor = await conn.execute(
        f"""
        SELECT al.id, al.title, al.artist_id, al.year, al.created_at,
               ar.name AS artist_name
        FROM albums al
        LEFT JOIN artists ar ON ar.id = al.artist_id
        {where}
        ORDER BY al.title COLLATE NOCASE ASC, al.id ASC
        LIMIT ? OFFSET ?;
        """,
        (*params, int(limit), int(offset)),
    )
    rows = await cursor.fetchall()
    return [_row_to_album(r) for r in rows]


async def count_albums(conn: aiosqlite.Connection) -> int:
    cursor = await conn.execute("SELECT COUNT(*) AS c FROM albums;")
    row = await cursor.fetchone()
    return int(row["c"]) if row is not None else 0
