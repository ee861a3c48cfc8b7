"""
Library scan engine.

`LibraryScanner.scan_library` walks one root and imports every supported file
whose content is not yet in the catalog:

    enumerate -> filter by extension -> fingerprint -> dedup check
    -> read metadata -> resolve artist/album/extension -> add track

Failure policy:
- missing root: `LibraryRootNotFoundError`, raised before anything is touched
- unreadable/corrupt file: recorded in `ScanResult.errors`, scan continues
- duplicate content: skipped silently
- commit failure: pending rows are rolled back and the error propagates

Concurrency:
- files are processed one at a time; the directory walk, hashing and tag reads
  run in threads (`asyncio.to_thread`) to keep the event loop responsive
- the session's dedup set and resolution indexes therefore have a single writer
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Iterable
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path

from encore.core import require_library_root
from encore.core.db.models import NewTrack
from encore.core.fingerprint import calculate_file_hash
from encore.core.formats import extension_name, is_supported_format
from encore.core.library_db import LibraryDb
from encore.core.metadata import (
    MetadataCorrupt,
    MetadataReader,
    MutagenMetadataReader,
    TrackMetadata,
)
from encore.core.resolver import resolve_album, resolve_artist, resolve_extension
from encore.core.session import ScanSession

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScanResult:
    """
    Summary of one scan (or of several, once merged).

    `tracks_updated` and `tracks_removed` are reserved for update/removal
    reconciliation and stay 0 for now.
    """

    tracks_added: int = 0
    tracks_updated: int = 0
    tracks_removed: int = 0
    duration: timedelta = field(default_factory=timedelta)
    errors: list[str] = field(default_factory=list)

    def merge(self, other: ScanResult) -> None:
        """Fold `other` into this result (counts and durations summed, errors appended)."""
        self.tracks_added += other.tracks_added
        self.tracks_updated += other.tracks_updated
        self.tracks_removed += other.tracks_removed
        self.duration += other.duration
        self.errors.extend(other.errors)


async def iter_library_files(root: Path) -> AsyncIterator[Path]:
    """
    Asynchronously yields every regular file under `root`, depth-unbounded.

    Symlinks to files are yielded like the files themselves (content dedup makes
    a link and its target one track). Broken links are skipped.

    Implementation notes:
    - We collect file paths in a thread to avoid blocking the event loop on large trees.
    - Paths are yielded sorted so repeated scans see files in the same order.
    """

    def _walk() -> list[Path]:
        paths: list[Path] = []
        for p in root.rglob("*"):
            try:
                if not p.is_file():
                    continue
            except OSError:
                # Broken permissions/paths during the walk are not importable anyway.
                continue
            paths.append(p)
        paths.sort(key=str)
        return paths

    paths = await asyncio.to_thread(_walk)
    for p in paths:
        yield p


class LibraryScanner:
    """
    Imports library roots into the catalog.

    Dependencies:
    - `LibraryDb` for persistence (the scanner owns the commit of each scan)
    - a `MetadataReader` for tags (mutagen by default)
    """

    def __init__(self, *, db: LibraryDb, reader: MetadataReader | None = None) -> None:
        self._db = db
        self._reader: MetadataReader = reader or MutagenMetadataReader()

    async def scan_all_libraries(self, roots: Iterable[str | Path]) -> ScanResult:
        """
        Scan `roots` one after another and aggregate the results.

        Roots share the catalog, so content imported from an earlier root is a
        duplicate for a later one. A fatal error in any root aborts the rest.
        """
        total = ScanResult()
        for root in roots:
            total.merge(await self.scan_library(root))
        return total

    async def scan_library(self, root: str | Path | None) -> ScanResult:
        """Scan one library root and commit everything it imported in one batch."""
        root_path = require_library_root(root)

        started = time.perf_counter()
        result = ScanResult()
        session = await ScanSession.start(self._db)
        logger.info("Scanning library %s", root_path)

        try:
            async for path in iter_library_files(root_path):
                if not is_supported_format(path.suffix):
                    continue
                await self._scan_file(path, session, result)

            await self._db.commit()
        except BaseException:
            # Includes cancellation: a half-imported root must not be persisted.
            await self._db.rollback()
            raise

        result.duration = timedelta(seconds=time.perf_counter() - started)
        logger.info(
            "Scan of %s complete: %d added, %d errors in %.2fs",
            root_path,
            result.tracks_added,
            len(result.errors),
            result.duration.total_seconds(),
        )
        return result

    async def _scan_file(self, path: Path, session: ScanSession, result: ScanResult) -> None:
        fingerprint = await asyncio.to_thread(calculate_file_hash, path)
        if session.is_known(fingerprint):
            logger.debug("Skipping duplicate content: %s", path)
            return

        outcome = await asyncio.to_thread(self._reader.read, path)
        if isinstance(outcome, MetadataCorrupt):
            result.errors.append(f"{path}: {outcome.reason}")
            logger.warning("Skipping unreadable file %s: %s", path, outcome.reason)
            return

        await self._import_track(path, fingerprint, outcome.metadata, session)
        session.remember(fingerprint)
        result.tracks_added += 1

    async def _import_track(
        self,
        path: Path,
        fingerprint: str,
        metadata: TrackMetadata,
        session: ScanSession,
    ) -> int:
        title = metadata.title if metadata.title and metadata.title.strip() else path.stem

        artist_id = await resolve_artist(self._db, session, metadata.artist)
        album_id = await resolve_album(
            self._db, session, metadata.album, artist_id, metadata.year
        )
        extension_id = await resolve_extension(self._db, session, extension_name(path))

        track_id = await self._db.add_track(
            NewTrack(
                path=str(path),
                title=title,
                file_hash=fingerprint,
                file_extension_id=extension_id,
                artist_id=artist_id,
                album_id=album_id,
                duration_ms=metadata.duration_ms,
                bitrate=metadata.bitrate,
                sample_rate=metadata.sample_rate,
                file_size=path.stat().st_size,
                track_no=metadata.track_number,
                disc_no=metadata.disc_number,
            )
        )
        logger.debug("Imported %s as track %d (%s)", path, track_id, title)
        return track_id
