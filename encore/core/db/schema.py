"""
Catalog schema and its migrations.

The schema version lives in SQLite's `PRAGMA user_version`. Each entry of
`_MIGRATIONS` upgrades the catalog by exactly one version and commits; there is
no downgrade path. `LibraryDb.ensure_schema` is the only caller.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Final

import aiosqlite

SCHEMA_VERSION: Final[int] = 2

# Reference rows every track links to through `file_extension_id`.
SEEDED_EXTENSIONS: Final[tuple[str, ...]] = ("wav", "wma", "mp3")


async def _create_catalog(conn: aiosqlite.Connection) -> None:
    """v1: extension lookup table, artists, albums and tracks."""
    await conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS file_extensions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            extension TEXT NOT NULL UNIQUE
        );

        CREATE TABLE IF NOT EXISTS artists (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            created_at INTEGER NOT NULL DEFAULT (strftime('%s', 'now'))
        );

        -- NULL artist_ids never collide under UNIQUE, so "no artist" albums are
        -- deduplicated by the resolver, not by this constraint.
        CREATE TABLE IF NOT EXISTS albums (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            artist_id INTEGER REFERENCES artists(id) ON DELETE SET NULL,
            year INTEGER,
            created_at INTEGER NOT NULL DEFAULT (strftime('%s', 'now')),
            UNIQUE(title, artist_id)
        );
        CREATE INDEX IF NOT EXISTS idx_albums_artist_title ON albums(artist_id, title);

        CREATE TABLE IF NOT EXISTS tracks (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            file_hash TEXT NOT NULL UNIQUE,
            path TEXT NOT NULL,
            title TEXT NOT NULL,
            file_extension_id INTEGER REFERENCES file_extensions(id) ON DELETE SET NULL,
            artist_id INTEGER REFERENCES artists(id) ON DELETE SET NULL,
            album_id INTEGER REFERENCES albums(id) ON DELETE SET NULL,
            duration_ms INTEGER,
            bitrate INTEGER,
            sample_rate INTEGER,
            imported_at INTEGER NOT NULL,
            updated_at INTEGER NOT NULL
        );
        CREATE INDEX IF NOT EXISTS idx_tracks_path ON tracks(path);
        CREATE INDEX IF NOT EXISTS idx_tracks_artist ON tracks(artist_id);
        CREATE INDEX IF NOT EXISTS idx_tracks_album ON tracks(album_id);
        """
    )
    await conn.executemany(
        "INSERT OR IGNORE INTO file_extensions (extension) VALUES (?);",
        [(ext,) for ext in SEEDED_EXTENSIONS],
    )


async def _add_library_folders(conn: aiosqlite.Connection) -> None:
    """v2: persistent scan roots and per-file facts used for browsing."""
    await conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS library_folders (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            path TEXT NOT NULL UNIQUE,
            enabled INTEGER NOT NULL DEFAULT 1,
            added_at INTEGER NOT NULL DEFAULT (strftime('%s', 'now')),
            last_scanned_at INTEGER,
            track_count INTEGER NOT NULL DEFAULT 0
        );

        ALTER TABLE tracks ADD COLUMN file_size INTEGER;
        ALTER TABLE tracks ADD COLUMN track_no INTEGER;
        ALTER TABLE tracks ADD COLUMN disc_no INTEGER;
        """
    )


# target version -> step that produces it from the previous version
_MIGRATIONS: Final[dict[int, Callable[[aiosqlite.Connection], Awaitable[None]]]] = {
    1: _create_catalog,
    2: _add_library_folders,
}


async def _user_version(conn: aiosqlite.Connection) -> int:
    cursor = await conn.execute("PRAGMA user_version;")
    row = await cursor.fetchone()
    return int(row[0]) if row is not None else 0


async def ensure_schema(conn: aiosqlite.Connection) -> None:
    """
    Bring the catalog on `conn` up to `SCHEMA_VERSION`.

    Raises RuntimeError for a catalog written by a newer release.
    """
    current = await _user_version(conn)
    if current > SCHEMA_VERSION:
        raise RuntimeError(
            f"Database schema version {current} is newer than supported {SCHEMA_VERSION}."
        )
    await migrate(conn, from_version=current, to_version=SCHEMA_VERSION)


async def migrate(conn: aiosqlite.Connection, *, from_version: int, to_version: int) -> None:
    """Apply every step in (from_version, to_version], committing after each one."""
    for version in range(from_version + 1, to_version + 1):
        step = _MIGRATIONS.get(version)
        if step is None:
            raise RuntimeError(f"No migration path from {version - 1} to {version}.")
        await step(conn)
        await conn.execute(f"PRAGMA user_version = {version};")
        await conn.commit()
