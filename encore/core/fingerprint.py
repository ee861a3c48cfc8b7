"""
Content fingerprints.

A fingerprint is the SHA-256 digest of a file's bytes. It ignores the path,
name and timestamps, so a copied, renamed or relocated file keeps its identity.
"""

from __future__ import annotations

import hashlib
import logging
from collections import defaultdict
from pathlib import Path
from typing import Iterable

from encore.core import require_library_root
from encore.core.formats import is_supported_format

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def calculate_file_hash(path: str | Path) -> str:
    """Return the lowercase hex SHA-256 digest of the file at `path`."""
    sha = hashlib.sha256()
    with open(path, "rb") as f:
        while chunk := f.read(CHUNK_SIZE):
            sha.update(chunk)
    return sha.hexdigest()


def find_duplicate_files(roots: Iterable[str | Path]) -> dict[str, list[Path]]:
    """
    Group supported audio files under `roots` by fingerprint.

    Only groups with more than one file are returned. Files inside each group are
    sorted by path; groups are ordered by their first path.

    Every root is checked before any file is hashed; a missing root raises
    `LibraryRootNotFoundError`.
    """
    root_paths = [require_library_root(root) for root in roots]
    groups: dict[str, list[Path]] = defaultdict(list)
    for root in root_paths:
        for path in root.rglob("*"):
            if not path.is_file() or not is_supported_format(path.suffix):
                continue
            groups[calculate_file_hash(path)].append(path)

    duplicates = {
        digest: sorted(paths) for digest, paths in groups.items() if len(paths) > 1
    }
    logger.debug("Found %d duplicate groups", len(duplicates))
    return dict(sorted(duplicates.items(), key=lambda item: str(item[1][0])))
