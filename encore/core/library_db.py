"""
Async access to the catalog database.

`LibraryDb` wraps a single aiosqlite connection. The SQL itself lives in
`encore.core.db.queries_*` (one module per table group), the row types in
`encore.core.db.models` and the migrations in `encore.core.db.schema`.

Transactions:
- `add_*` methods never commit. A scan inserts all of its rows into one pending
  transaction; they are visible to lookups on this connection right away.
- The scanner ends that transaction with `commit()`, or `rollback()` on failure.
- Library-folder bookkeeping commits immediately; `MusicLibrary` refuses it while a
  scan is running.
"""

from __future__ import annotations

import time
from pathlib import Path

import aiosqlite

from encore.core.db import queries_albums, queries_artists, queries_meta, queries_tracks
from encore.core.db.models import (
    AlbumRow,
    ArtistRow,
    FileExtensionRow,
    LibraryFolderRow,
    NewTrack,
    TrackRow,
    normalize_int,
    normalize_text,
)
from encore.core.db.schema import ensure_schema as ensure_schema_sql

__all__ = [
    "AlbumRow",
    "ArtistRow",
    "FileExtensionRow",
    "LibraryDb",
    "LibraryFolderRow",
    "NewTrack",
    "TrackRow",
]

# Applied to every new connection.
_CONNECTION_PRAGMAS = (
    "PRAGMA foreign_keys = ON;",
    "PRAGMA journal_mode = WAL;",
    "PRAGMA synchronous = NORMAL;",
    "PRAGMA temp_store = MEMORY;",
)


def _now() -> int:
    return int(time.time())


class LibraryDb:
    """
    Catalog repository.

        db = LibraryDb("encore-library.sqlite3")
        await db.open()
        await db.ensure_schema()
        try:
            ...
        finally:
            await db.close()

    `open()` and `close()` are idempotent. Every other method raises
    RuntimeError while the database is closed.
    """

    def __init__(self, db_path: str | Path) -> None:
        self._path = str(db_path)
        self._conn: aiosqlite.Connection | None = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    async def open(self) -> None:
        if self.is_open:
            return
        conn = await aiosqlite.connect(self._path)
        conn.row_factory = aiosqlite.Row
        for pragma in _CONNECTION_PRAGMAS:
            await conn.execute(pragma)
        self._conn = conn

    async def close(self) -> None:
        conn, self._conn = self._conn, None
        if conn is not None:
            await conn.close()

    def _require_conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise RuntimeError(f"LibraryDb({self._path!r}) is not open; await open() first.")
        return self._conn

    async def ensure_schema(self) -> None:
        await ensure_schema_sql(self._require_conn())

    async def commit(self) -> None:
        await self._require_conn().commit()

    async def rollback(self) -> None:
        await self._require_conn().rollback()

    # ---- repository operations used by the scanner ----

    async def all_track_fingerprints(self) -> set[str]:
        return await queries_tracks.all_track_fingerprints(self._require_conn())

    async def find_artist_by_name(self, name: str) -> ArtistRow | None:
        return await queries_artists.find_artist_by_name(self._require_conn(), name)

    async def find_album_by_title_and_artist(
        self, title: str, artist_id: int | None
    ) -> AlbumRow | None:
        return await queries_albums.find_album_by_title_and_artist(
            self._require_conn(), title, artist_id
        )

    async def find_extension_by_name(self, extension: str) -> FileExtensionRow | None:
        return await queries_meta.find_extension_by_name(
            self._require_conn(), extension.lstrip(".").lower()
        )

    async def add_artist(self, name: str) -> int:
        """Insert an artist (uncommitted) and return its id."""
        clean = normalize_text(name)
        if clean is None:
            raise ValueError("artist name must not be empty")
        return await queries_artists.add_artist(self._require_conn(), clean, created_at=_now())

    async def add_album(self, title: str, artist_id: int | None, year: int | None) -> int:
        """Insert an album (uncommitted) and return its id."""
        clean = normalize_text(title)
        if clean is None:
            raise ValueError("album title must not be empty")
        return await queries_albums.add_album(
            self._require_conn(),
            clean,
            normalize_int(artist_id),
            normalize_int(year),
            created_at=_now(),
        )

    async def add_track(self, track: NewTrack) -> int:
        """Insert a track (uncommitted) and return its id."""
        return await queries_tracks.add_track(self._require_conn(), track, imported_at=_now())

    # ---- read queries ----

    async def get_track_by_id(self, track_id: int) -> TrackRow | None:
        return await queries_tracks.get_track_by_id(self._require_conn(), track_id)

    async def get_track_by_hash(self, file_hash: str) -> TrackRow | None:
        return await queries_tracks.get_track_by_hash(self._require_conn(), file_hash)

    async def get_track_by_path(self, path: str) -> TrackRow | None:
        return await queries_tracks.get_track_by_path(self._require_conn(), path)

    async def list_tracks(
        self, *, limit: int = 500, offset: int = 0, order_by: str = "title"
    ) -> list[TrackRow]:
        return await queries_tracks.list_tracks(
            self._require_conn(), limit=limit, offset=offset, order_by=order_by
        )

    async def list_tracks_by_album(
        self, album_id: int, *, limit: int = 500, offset: int = 0, order_by: str = "tracknum"
    ) -> list[TrackRow]:
        return await queries_tracks.list_tracks_by_album(
            self._require_conn(), album_id, limit=limit, offset=offset, order_by=order_by
        )

    async def count_tracks(self) -> int:
        return await queries_tracks.count_tracks(self._require_conn())

    async def list_artists(self, *, limit: int = 500, offset: int = 0) -> list[ArtistRow]:
        return await queries_artists.list_artists(self._require_conn(), limit=limit, offset=offset)

    async def count_artists(self) -> int:
        return await queries_artists.count_artists(self._require_conn())

    async def list_albums(
        self, *, artist_id: int | None = None, limit: int = 500, offset: int = 0
    ) -> list[AlbumRow]:
        return await queries_albums.list_albums(
            self._require_conn(), artist_id=artist_id, limit=limit, offset=offset
        )

    async def count_albums(self) -> int:
        return await queries_albums.count_albums(self._require_conn())

    async def list_extensions(self) -> list[FileExtensionRow]:
        return await queries_meta.list_extensions(self._require_conn())

    # ---- library folders ----

    async def add_library_folder(self, path: str) -> int:
        return await queries_meta.add_library_folder(self._require_conn(), path)

    async def remove_library_folder(self, path: str) -> bool:
        return await queries_meta.remove_library_folder(self._require_conn(), path)

    async def list_library_folders(self, *, enabled_only: bool = True) -> list[LibraryFolderRow]:
        return await queries_meta.list_library_folders(
            self._require_conn(), enabled_only=enabled_only
        )

    async def mark_library_folder_scanned(self, path: str, *, tracks_added: int) -> None:
        await queries_meta.mark_library_folder_scanned(
            self._require_conn(), path, scanned_at=_now(), tracks_added=tracks_added
        )
