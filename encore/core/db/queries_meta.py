"""
Lookup-table and library-folder queries.

Every function takes an open connection whose `row_factory` is `aiosqlite.Row`.
The library-folder writers commit immediately; they never run inside a scan.
"""

from __future__ import annotations

import aiosqlite

from encore.core.db.models import FileExtensionRow, LibraryFolderRow

# ---------------------------------------------------------------------------
# File extensions
# ---------------------------------------------------------------------------


async def find_extension_by_name(
    conn: aiosqlite.Connection, extension: str
) -> FileExtensionRow | None:
    """Lookup a seeded extension ("mp3", without dot)."""
    cursor = await conn.execute(
        "SELECT id, extension FROM file_extensions WHERE extension = ?;",
        (extension,),
    )
    row = await cursor.fetchone()
    if row is None:
        return None
    return FileExtensionRow(id=int(row["id"]), extension=row["extension"])


async def list_extensions(conn: aiosqlite.Connection) -> list[FileExtensionRow]:
    cursor = await conn.execute("SELECT id, extension FROM file_extensions ORDER BY id;")
    rows = await cursor.fetchall()
    return [FileExtensionRow(id=int(r["id"]), extension=r["extension"]) for r in rows]


# ---------------------------------------------------------------------------
# Library folders
# ---------------------------------------------------------------------------


def _row_to_folder(row: aiosqlite.Row) -> LibraryFolderRow:
    return LibraryFolderRow(
        id=int(row["id"]),
        path=str(row["path"]),
        enabled=bool(row["enabled"]),
        added_at=row["added_at"],
        last_scanned_at=row["last_scanned_at"],
        track_count=int(row["track_count"] or 0),
    )


async def add_library_folder(conn: aiosqlite.Connection, path: str) -> int:
    """Add a library folder. Returns the folder ID."""
    await conn.execute(
        "INSERT OR IGNORE INTO library_folders (path) VALUES (?);",
        (path,),
    )
    cursor = await conn.execute(
        "SELECT id FROM library_folders WHERE path = ?;",
        (path,),
    )
    row = await cursor.fetchone()
    await conn.commit()
    return int(row["id"])


async def remove_library_folder(conn: aiosqlite.Connection, path: str) -> bool:
    """Remove a library folder by path. Returns True if a row was deleted."""
    cursor = await conn.execute("DELETE FROM library_folders WHERE path = ?;", (path,))
    await conn.commit()
    return cursor.rowcount > 0


async def list_library_folders(
    conn: aiosqlite.Connection, *, enabled_only: bool = True
) -> list[LibraryFolderRow]:
    where = "WHERE enabled = 1" if enabled_only else ""
    cursor = await conn.execute(
        f"""
        SELECT id, path, enabled, added_at, last_scanned_at, track_count
        FROM library_folders
        {where}
        ORDER BY id ASC;
        """
    )
    rows = await cursor.fetchall()
    return [_row_to_folder(r) for r in rows]


async def mark_library_folder_scanned(
    conn: aiosqlite.Connection, path: str, *, scanned_at: int, tracks_added: int
) -> None:
    """Record a completed scan of `path`, accumulating its imported-track count."""
    await conn.execute(
        """
        UPDATE library_folders
        SET last_scanned_at = ?, track_count = track_count + ?
        WHERE path = ?;
        """,
        (int(scanned_at), int(tracks_added), path),
    )
    await conn.commit()
