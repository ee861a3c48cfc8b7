"""
Per-scan state.

A `ScanSession` is created at the start of every `scan_library` call and passed
explicitly through the file loop and the entity resolvers. It is never stored at
module level, so two scans (or two tests) never share state by accident.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from encore.core.library_db import LibraryDb

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScanSession:
    """
    Dedup set and get-or-create indexes for one scan.

    - `known_fingerprints`: every content hash already in the catalog, plus every
      hash imported so far in this scan
    - `artist_ids`: artist name -> id
    - `album_ids`: (album title, artist id or None) -> id
    - `extension_ids`: extension name -> id, or None when the seed row is missing
    """

    known_fingerprints: set[str] = field(default_factory=set)
    artist_ids: dict[str, int] = field(default_factory=dict)
    album_ids: dict[tuple[str, int | None], int] = field(default_factory=dict)
    extension_ids: dict[str, int | None] = field(default_factory=dict)

    @classmethod
    async def start(cls, db: LibraryDb) -> ScanSession:
        """Create a session seeded with the fingerprints already in the catalog."""
        fingerprints = await db.all_track_fingerprints()
        logger.debug("Scan session seeded with %d known fingerprints", len(fingerprints))
        return cls(known_fingerprints=fingerprints)

    def is_known(self, fingerprint: str) -> bool:
        return fingerprint in self.known_fingerprints

    def remember(self, fingerprint: str) -> None:
        self.known_fingerprints.add(fingerprint)
