"""
Internal DB subpackage for Encore.

This package splits the catalog into focused units (models, schema/migrations,
and query groups) while keeping `LibraryDb` as the single public interface that
the rest of the codebase imports.

External code should import `LibraryDb` from `encore.core.library_db`.
"""

from __future__ import annotations

# Models / DTOs
from .models import (
    AlbumRow,
    ArtistRow,
    FileExtensionRow,
    LibraryFolderRow,
    NewTrack,
    TrackRow,
)

# Schema / migrations
from .schema import ensure_schema, migrate

__all__ = [
    # models
    "ArtistRow",
    "AlbumRow",
    "FileExtensionRow",
    "LibraryFolderRow",
    "NewTrack",
    "TrackRow",
    # schema
    "ensure_schema",
    "migrate",
]
