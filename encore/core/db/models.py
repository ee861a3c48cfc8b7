"""
Row types exchanged between `LibraryDb` and its callers, plus the text/int
normalizers applied before anything is written. Nothing here touches SQLite.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FileExtensionRow:
    """Seeded lookup row for a supported file extension (without the dot)."""

    id: int
    extension: str


@dataclass(frozen=True, slots=True)
class ArtistRow:
    """One row of `artists`."""

    id: int
    name: str
    created_at: int | None = None


@dataclass(frozen=True, slots=True)
class AlbumRow:
    """Album record as stored in SQLite."""

    id: int
    title: str
    artist_id: int | None
    year: int | None
    artist_name: str | None = None  # Denormalized for convenience in list queries
    created_at: int | None = None


@dataclass(frozen=True, slots=True)
class TrackRow:
    """
    One row of `tracks`, joined with its artist name and album title.

    Notes:
    - `file_hash` is the identity of a track; `path` only records where the content
      was first found.
    - `artist`/`album` are filled by list queries that join the related tables.
    """

    id: int
    path: str
    title: str
    file_hash: str
    file_extension_id: int | None = None
    artist_id: int | None = None
    album_id: int | None = None
    duration_ms: int | None = None
    bitrate: int | None = None
    sample_rate: int | None = None
    file_size: int | None = None
    track_no: int | None = None
    disc_no: int | None = None
    imported_at: int | None = None
    updated_at: int | None = None
    artist: str | None = None
    album: str | None = None


@dataclass(frozen=True, slots=True)
class NewTrack:
    """
    Input record used by the scanner when importing a file.

    `file_hash` is required and must be unique across the catalog.
    """

    path: str
    title: str
    file_hash: str
    file_extension_id: int | None = None
    artist_id: int | None = None
    album_id: int | None = None
    duration_ms: int | None = None
    bitrate: int | None = None
    sample_rate: int | None = None
    file_size: int | None = None
    track_no: int | None = None
    disc_no: int | None = None


@dataclass(frozen=True, slots=True)
class LibraryFolderRow:
    """A configured library root."""

    id: int
    path: str
    enabled: bool
    added_at: int | None
    last_scanned_at: int | None
    track_count: int


def normalize_text(value: str | None) -> str | None:
    """Strip `value`; blank or missing text becomes None."""
    if value is None:
        return None
    v = value.strip()
    return v if v else None


def normalize_int(value: int | None) -> int | None:
    """`int(value)`, passing None through."""
    if value is None:
        return None
    return int(value)
