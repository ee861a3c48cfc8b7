"""
Get-or-create resolution for artists, albums and file extensions.

Each resolver consults the session index first, then the catalog, and only then
inserts a new row. New ids are written back to the session so later tracks in
the same scan reuse them without another round trip.
"""

from __future__ import annotations

import logging

from encore.core.db.models import normalize_text
from encore.core.library_db import LibraryDb
from encore.core.session import ScanSession

logger = logging.getLogger(__name__)


async def resolve_artist(db: LibraryDb, session: ScanSession, name: str | None) -> int | None:
    """Return the id of the artist called `name`, creating it if needed."""
    name = normalize_text(name)
    if name is None:
        return None

    cached = session.artist_ids.get(name)
    if cached is not None:
        return cached

    existing = await db.find_artist_by_name(name)
    if existing is not None:
        artist_id = existing.id
    else:
        artist_id = await db.add_artist(name)
        logger.debug("Created artist %r (id=%d)", name, artist_id)

    session.artist_ids[name] = artist_id
    return artist_id


async def resolve_album(
    db: LibraryDb,
    session: ScanSession,
    title: str | None,
    artist_id: int | None,
    year: int | None,
) -> int | None:
    """
    Return the id of the album `title` within `artist_id`'s scope, creating it if
    needed. `year` is only used when the album is created; existing rows are
    never modified.
    """
    title = normalize_text(title)
    if title is None:
        return None

    key = (title, artist_id)
    cached = session.album_ids.get(key)
    if cached is not None:
        return cached

    existing = await db.find_album_by_title_and_artist(title, artist_id)
    if existing is not None:
        album_id = existing.id
    else:
        album_id = await db.add_album(title, artist_id, year)
        logger.debug("Created album %r (id=%d, artist_id=%s)", title, album_id, artist_id)

    session.album_ids[key] = album_id
    return album_id


async def resolve_extension(db: LibraryDb, session: ScanSession, extension: str) -> int | None:
    """Return the seeded file_extensions id for `extension`, or None if it is missing."""
    if extension in session.extension_ids:
        return session.extension_ids[extension]

    row = await db.find_extension_by_name(extension)
    if row is None:
        logger.warning("File extension %r is not seeded in the catalog", extension)
    extension_id = row.id if row is not None else None
    session.extension_ids[extension] = extension_id
    return extension_id
