"""
Supported audio formats.

The catalog only links tracks to a small, pre-seeded set of file extensions, so
the filter is deliberately narrow.
"""

from __future__ import annotations

from pathlib import Path

SUPPORTED_EXTENSIONS: frozenset[str] = frozenset({".wav", ".wma", ".mp3"})


def is_supported_format(extension: str) -> bool:
    """
    Return True if `extension` (including its leading dot) is a supported format.

    Comparison is case-insensitive. Empty strings and unknown extensions are rejected.
    """
    if not extension:
        return False
    return extension.lower() in SUPPORTED_EXTENSIONS


def extension_name(path: Path) -> str:
    """Lookup key for the file_extensions table: "Song.MP3" -> "mp3"."""
    return path.suffix.lstrip(".").lower()
