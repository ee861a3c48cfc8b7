"""
Track-related DB queries.

Every function takes an open connection whose `row_factory` is `aiosqlite.Row`
and never commits unless its docstring says so.

Important:
- Do NOT interpolate user input into SQL. The only dynamic SQL here is the
  ORDER BY clause, selected from `_TRACK_ORDERING`.
"""

from __future__ import annotations

import aiosqlite

from encore.core.db.models import NewTrack, TrackRow

_TRACK_SELECT = """
    SELECT t.*, ar.name AS artist_name, al.title AS album_title
    FROM tracks t
    LEFT JOIN artists ar ON ar.id = t.artist_id
    LEFT JOIN albums al ON al.id = t.album_id
"""

_TRACK_ORDERING: dict[str, str] = {
    "title": "ORDER BY t.title COLLATE NOCASE ASC, t.id ASC",
    "path": "ORDER BY t.path ASC, t.id ASC",
    "artist": (
        "ORDER BY ar.name COLLATE NOCASE ASC, al.title COLLATE NOCASE ASC,"
        " t.title COLLATE NOCASE ASC, t.id ASC"
    ),
    "tracknum": "ORDER BY t.disc_no ASC, t.track_no ASC, t.title COLLATE NOCASE ASC, t.id ASC",
    "imported": "ORDER BY t.imported_at ASC, t.id ASC",
}


def tracks_order_clause(order_by: str) -> str:
    try:
        return _TRACK_ORDERING[order_by]
    except KeyError:
        raise ValueError(f"Unsupported track ordering: {order_by!r}") from None


def _row_to_track(row: aiosqlite.Row) -> TrackRow:
    """Convert an aiosqlite Row to a TrackRow dataclass."""
    return TrackRow(
        id=int(row["id"]),
        path=str(row["path"]),
        title=row["title"],
        file_hash=row["file_hash"],
        file_extension_id=row["file_extension_id"],
        artist_id=row["artist_id"],
        album_id=row["album_id"],
        duration_ms=row["duration_ms"],
        bitrate=row["bitrate"],
        sample_rate=row["sample_rate"],
        file_size=row["file_size"],
        track_no=row["track_no"],
        disc_no=row["disc_no"],
        imported_at=row["imported_at"],
        updated_at=row["updated_at"],
        artist=row["artist_name"],
        album=row["album_title"],
    )


async def add_track(conn: aiosqlite.Connection, track: NewTrack, *, imported_at: int) -> int:
    """Insert a track and return its id. Raises on a duplicate `file_hash`."""
    cursor = await conn.execute(
        """
        INSERT INTO tracks (
            path, title, file_hash,
            file_extension_id, artist_id, album_id,
            duration_ms, bitrate, sample_rate,
            file_size, track_no, disc_no,
            imported_at, updated_at
        ) VALUES (
            :path, :title, :file_hash,
            :file_extension_id, :artist_id, :album_id,
            :duration_ms, :bitrate, :sample_rate,
            :file_size, :track_no, :disc_no,
            :imported_at, :updated_at
        )
        """,
        {
            "path": track.path,
            "title": track.title,
            "file_hash": track.file_hash,
            "file_extension_id": track.file_extension_id,
            "artist_id": track.artist_id,
            "album_id": track.album_id,
            "duration_ms": track.duration_ms,
            "bitrate": track.bitrate,
            "sample_rate": track.sample_rate,
            "file_size": track.file_size,
            "track_no": track.track_no,
            "disc_no": track.disc_no,
            "imported_at": int(imported_at),
            "updated_at": int(imported_at),
        },
    )
    return int(cursor.lastrowid)


async def all_track_fingerprints(conn: aiosqlite.Connection) -> set[str]:
    cursor = await conn.execute("SELECT file_hash FROM tracks;")
    rows = await cursor.fetchall()
    return {str(r["file_hash"]) for r in rows}


async def get_track_by_id(conn: aiosqlite.Connection, track_id: int) -> TrackRow | None:
    cursor = await conn.execute(f"{_TRACK_SELECT} WHERE t.id = ?;", (int(track_id),))
    row = await cursor.fetchone()
    return _row_to_track(row) if row else None


async def get_track_by_hash(conn: aiosqlite.Connection, file_hash: str) -> TrackRow | None:
    cursor = await conn.execute(f"{_TRACK_SELECT} WHERE t.file_hash = ?;", (file_hash,))
    row = await cursor.fetchone()
    return _row_to_track(row) if row else None


async def get_track_by_path(conn: aiosqlite.Connection, path: str) -> TrackRow | None:
    cursor = await conn.execute(
        f"{_TRACK_SELECT} WHERE t.path = ? ORDER BY t.id ASC LIMIT 1;", (path,)
    )
    row = await cursor.fetchone()
    return _row_to_track(row) if row else None


async def list_tracks(
    conn: aiosqlite.Connection,
    *,
    limit: int,
    offset: int,
    order_by: str,
) -> list[TrackRow]:
    order_clause = tracks_order_clause(order_by)
    cursor = await conn.execute(
        f"""
        {_TRACK_SELECT}
        {order_clause}
        LIMIT ? OFFSET ?;
        """,
        (int(limit), int(offset)),
    )
    rows = await cursor.fetchall()
    return [_row_to_track(r) for r in rows]


async def list_tracks_by_album(
    conn: aiosqlite.Connection,
    album_id: int,
    *,
    limit: int,
    offset: int,
    order_by: str = "tracknum",
) -> list[TrackRow]:
    order_clause = tracks_order_clause(order_by)
    cursor = await conn.execute(
        f"""
        {_TRACK_SELECT}
        WHERE t.album_id = ?
        {order_clause}
        LIMIT ? OFFSET ?;
        """,
        (int(album_id), int(limit), int(offset)),
    )
    rows = await cursor.fetchall()
    return [_row_to_track(r) for r in rows]


async def count_tracks(conn: aiosqlite.Connection) -> int:
    cursor = await conn.execute("SELECT COUNT(*) AS c FROM tracks;")
    row = await cursor.fetchone()
    return int(row["c"]) if row else 0
