"""
Core domain package.

This package contains the import pipeline (format filter, fingerprinting,
metadata reading, entity resolution and the scan engine) plus the SQLite catalog
it writes to. Nothing in here knows about the CLI.

Consumers should usually import from the specific module they need
(e.g. `encore.core.scanner`).
"""

from __future__ import annotations

from pathlib import Path

__all__: list[str] = [
    "CoreError",
    "NotFoundError",
    "LibraryRootNotFoundError",
    "require_library_root",
]


class CoreError(Exception):
    """Base class for core-layer exceptions."""


class NotFoundError(CoreError):
    """Raised when an entity (track/album/artist/etc.) cannot be found."""


class LibraryRootNotFoundError(NotFoundError, FileNotFoundError):
    """Raised when a library root is missing or is not a directory."""

    def __init__(self, root: object) -> None:
        super().__init__(f"Library path not found: {root}")
        self.root = root


def require_library_root(root: str | Path | None) -> Path:
    """Return `root` as a Path, or raise LibraryRootNotFoundError if it is not a directory."""
    if root is None:
        raise LibraryRootNotFoundError(root)
    path = Path(root)
    if not path.is_dir():
        raise LibraryRootNotFoundError(path)
    return path
