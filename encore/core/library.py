"""
`MusicLibrary`: the entry point front ends use.

It owns nothing the scanner needs; it only sequences work around it:

- makes sure the catalog schema exists before anything runs
- lets one scan run at a time and announces each root on the event bus
- remembers configured library folders and their scan statistics
- offers paged, read-only views of the catalog as immutable value objects
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import NewType, TypeVar

from encore.core.db.models import AlbumRow, TrackRow
from encore.core.events import EventBus, LibraryScanEvent, event_bus
from encore.core.library_db import LibraryDb
from encore.core.metadata import MetadataReader
from encore.core.scanner import LibraryScanner, ScanResult

logger = logging.getLogger(__name__)

ArtistId = NewType("ArtistId", int)
AlbumId = NewType("AlbumId", int)
TrackId = NewType("TrackId", int)

MAX_PAGE_SIZE = 10_000

T = TypeVar("T")


def _optional_id(kind: Callable[[int], T], value: int | None) -> T | None:
    return kind(value) if value is not None else None


@dataclass(frozen=True, slots=True)
class Artist:
    id: ArtistId
    name: str


@dataclass(frozen=True, slots=True)
class Album:
    id: AlbumId
    title: str
    artist_id: ArtistId | None = None
    artist_name: str | None = None
    year: int | None = None

    @classmethod
    def from_row(cls, row: AlbumRow) -> Album:
        return cls(
            id=AlbumId(row.id),
            title=row.title,
            artist_id=_optional_id(ArtistId, row.artist_id),
            artist_name=row.artist_name,
            year=row.year,
        )


@dataclass(frozen=True, slots=True)
class Track:
    """A catalogued piece of content. `path` is where it was first found."""

    id: TrackId
    title: str
    path: str
    file_hash: str
    artist_id: ArtistId | None = None
    artist_name: str | None = None
    album_id: AlbumId | None = None
    album_title: str | None = None
    track_no: int | None = None
    disc_no: int | None = None
    duration_ms: int | None = None
    bitrate: int | None = None
    sample_rate: int | None = None

    @classmethod
    def from_row(cls, row: TrackRow) -> Track:
        return cls(
            id=TrackId(row.id),
            title=row.title,
            path=row.path,
            file_hash=row.file_hash,
            artist_id=_optional_id(ArtistId, row.artist_id),
            artist_name=row.artist,
            album_id=_optional_id(AlbumId, row.album_id),
            album_title=row.album,
            track_no=row.track_no,
            disc_no=row.disc_no,
            duration_ms=row.duration_ms,
            bitrate=row.bitrate,
            sample_rate=row.sample_rate,
        )


@dataclass(frozen=True, slots=True)
class LibraryFolder:
    """A configured root. `track_count` totals the tracks its scans have imported."""

    path: str
    last_scanned_at: int | None = None
    track_count: int = 0


class MusicLibraryError(RuntimeError):
    """Misuse of the facade, or a request it cannot satisfy."""


class MusicLibraryNotReadyError(MusicLibraryError):
    """`initialize()` has not completed yet."""


def _check_page(offset: int, limit: int) -> None:
    if offset < 0:
        raise ValueError(f"offset must be >= 0, got {offset}")
    if not 0 < limit <= MAX_PAGE_SIZE:
        raise ValueError(f"limit must be between 1 and {MAX_PAGE_SIZE}, got {limit}")


class MusicLibrary:
    """
    Facade over `LibraryDb` and `LibraryScanner`.

    The database must be opened by the caller; `initialize()` only migrates it.
    A scanner is built from `db` and `reader` unless one is injected, and scan
    events go to the global `event_bus` unless another bus is given.
    """

    def __init__(
        self,
        *,
        db: LibraryDb,
        reader: MetadataReader | None = None,
        scanner: LibraryScanner | None = None,
        events: EventBus | None = None,
    ) -> None:
        self._db = db
        self._scanner = scanner or LibraryScanner(db=db, reader=reader)
        self._events = events if events is not None else event_bus
        self._ready = False
        self._scanning = asyncio.Lock()

    @property
    def is_scanning(self) -> bool:
        return self._scanning.locked()

    async def initialize(self) -> None:
        if not self._db.is_open:
            raise MusicLibraryError(
                "LibraryDb is not open; call await db.open() before initialize()."
            )
        await self._db.ensure_schema()
        self._ready = True

    def _ensure_ready(self) -> None:
        if not self._ready:
            raise MusicLibraryNotReadyError("Call await MusicLibrary.initialize() first.")

    def _ensure_idle(self) -> None:
        # Folder writes commit, which would also commit a running scan's pending rows.
        if self._scanning.locked():
            raise MusicLibraryError("A library scan is already running.")

    # ---- scanning ----

    async def scan_library(self, root: str | Path) -> ScanResult:
        """Scan one root. Scanner errors propagate unchanged after a `failed` event."""
        return await self.scan_all_libraries([root])

    async def scan_all_libraries(self, roots: Iterable[str | Path]) -> ScanResult:
        """Scan `roots` in order; the first fatal error stops the remaining roots."""
        self._ensure_ready()
        async with self._exclusive_scan():
            total = ScanResult()
            for root in roots:
                total.merge(await self._scan_announced(root))
            return total

    async def scan_configured_libraries(self) -> ScanResult:
        """
        Scan every enabled library folder.

        A folder's statistics are updated right after its own scan commits, so a
        failure in a later folder does not lose them.
        """
        self._ensure_ready()
        folders = await self._db.list_library_folders()
        if not folders:
            raise MusicLibraryError("No library folders configured.")

        async with self._exclusive_scan():
            total = ScanResult()
            for folder in folders:
                result = await self._scan_announced(folder.path)
                await self._db.mark_library_folder_scanned(
                    folder.path, tracks_added=result.tracks_added
                )
                total.merge(result)
            return total

    def _exclusive_scan(self) -> asyncio.Lock:
        # A second caller fails immediately; it never waits on the lock.
        if self._scanning.locked():
            raise MusicLibraryError("A library scan is already running.")
        return self._scanning

    async def _scan_announced(self, root: str | Path) -> ScanResult:
        label = str(root)
        await self._events.publish(LibraryScanEvent(status="started", root=label))
        try:
            result = await self._scanner.scan_library(root)
        except Exception as e:
            logger.error("Scan of %s failed: %s", label, e)
            await self._events.publish(LibraryScanEvent(status="failed", root=label, error=str(e)))
            raise
        await self._events.publish(
            LibraryScanEvent(
                status="completed",
                root=label,
                tracks_added=result.tracks_added,
                errors=len(result.errors),
            )
        )
        return result

    # ---- library folders ----

    async def get_library_folders(self) -> list[LibraryFolder]:
        self._ensure_ready()
        return [
            LibraryFolder(path=f.path, last_scanned_at=f.last_scanned_at, track_count=f.track_count)
            for f in await self._db.list_library_folders()
        ]

    async def add_library_folder(self, path: str | Path) -> int:
        """Register an existing directory (stored resolved) and return its folder id."""
        self._ensure_ready()
        self._ensure_idle()
        folder = Path(path).resolve()
        if not folder.exists():
            raise MusicLibraryError(f"Folder does not exist: {folder}")
        if not folder.is_dir():
            raise MusicLibraryError(f"Path is not a directory: {folder}")

        folder_id = await self._db.add_library_folder(str(folder))
        logger.info("Library folder added: %s", folder)
        return folder_id

    async def remove_library_folder(self, path: str | Path) -> bool:
        self._ensure_ready()
        self._ensure_idle()
        folder = str(Path(path).resolve())
        removed = await self._db.remove_library_folder(folder)
        if removed:
            logger.info("Library folder removed: %s", folder)
        return removed

    # ---- browsing ----

    async def get_artists(self, *, offset: int = 0, limit: int = 100) -> tuple[Artist, ...]:
        self._ensure_ready()
        _check_page(offset, limit)
        rows = await self._db.list_artists(limit=limit, offset=offset)
        return tuple(Artist(id=ArtistId(r.id), name=r.name) for r in rows)

    async def get_albums(
        self, *, artist_id: ArtistId | None = None, offset: int = 0, limit: int = 100
    ) -> tuple[Album, ...]:
        self._ensure_ready()
        _check_page(offset, limit)
        rows = await self._db.list_albums(artist_id=artist_id, limit=limit, offset=offset)
        return tuple(map(Album.from_row, rows))

    async def get_tracks(
        self, *, album_id: AlbumId | None = None, offset: int = 0, limit: int = 200
    ) -> tuple[Track, ...]:
        """All tracks ordered by artist/album/title, or one album's tracks in disc/track order."""
        self._ensure_ready()
        _check_page(offset, limit)
        if album_id is not None:
            rows = await self._db.list_tracks_by_album(album_id, limit=limit, offset=offset)
        else:
            rows = await self._db.list_tracks(limit=limit, offset=offset, order_by="artist")
        return tuple(map(Track.from_row, rows))
