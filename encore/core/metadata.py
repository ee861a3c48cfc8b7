"""
Metadata reading for audio files.

The reader returns a tagged result instead of raising for damaged input:

- `MetadataOk(metadata)` for a file mutagen could parse
- `MetadataCorrupt(reason)` for a file that is corrupt or in a format mutagen
  does not recognize

Any other exception propagates.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, TypeAlias

from mutagen import File as mutagen_file
from mutagen import MutagenError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TrackMetadata:
    """
    Normalized tag data for one file.

    Every field is optional; the scanner decides on fallbacks (e.g. the title).
    """

    title: str | None = None
    artist: str | None = None
    album: str | None = None
    year: int | None = None
    track_number: int | None = None
    disc_number: int | None = None
    duration_ms: int | None = None
    bitrate: int | None = None
    sample_rate: int | None = None


@dataclass(frozen=True, slots=True)
class MetadataOk:
    metadata: TrackMetadata


@dataclass(frozen=True, slots=True)
class MetadataCorrupt:
    reason: str


MetadataResult: TypeAlias = MetadataOk | MetadataCorrupt


class MetadataReader(Protocol):
    """Anything that can turn a file path into a `MetadataResult`."""

    def read(self, path: Path) -> MetadataResult: ...


# Tag keys per field, in lookup order: ID3 (MP3, WAV), ASF (WMA), then Vorbis-style.
_TAG_KEYS: dict[str, tuple[str, ...]] = {
    "title": ("TIT2", "Title", "title", "TITLE"),
    "artist": ("TPE1", "Author", "WM/AlbumArtist", "artist", "ARTIST"),
    "album": ("TALB", "WM/AlbumTitle", "album", "ALBUM"),
    "year": ("TDRC", "TYER", "WM/Year", "date", "DATE", "YEAR"),
    "track_number": ("TRCK", "WM/TrackNumber", "tracknumber", "TRACKNUMBER"),
    "disc_number": ("TPOS", "WM/PartOfSet", "discnumber", "DISCNUMBER"),
}

_LEADING_INT = re.compile(r"\s*(\d+)")
_FOUR_DIGITS = re.compile(r"(?=(\d{4}))")


def _first_text(value: Any) -> str | None:
    """
    Reduce a mutagen tag value to one stripped string, or None.

    Values arrive as ID3 frames (`.text`), ASF attributes (`.value`), lists of
    either, bytes or plain strings; only the first item of a list counts.
    """
    while True:
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        elif hasattr(value, "text"):
            value = value.text
        elif hasattr(value, "value"):
            value = value.value
        else:
            break

    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    text = str(value).strip()
    return text or None


def _parse_int_maybe(value: Any) -> int | None:
    """Leading integer of "3", "3/12" or a frame holding either; None otherwise."""
    text = _first_text(value)
    if text is None:
        return None
    m = _LEADING_INT.match(text)
    return int(m.group(1)) if m else None


def _parse_year_maybe(value: Any) -> int | None:
    """First plausible year (1000-3000) in "1999", "1999-01-01", "(c) 1999" and so on."""
    text = _first_text(value)
    if text is None:
        return None
    for m in _FOUR_DIGITS.finditer(text):
        year = int(m.group(1))
        if 1000 <= year <= 3000:
            return year
    return None


def _lookup(tags: Mapping[str, Any] | None, field_name: str) -> Any:
    if not tags:
        return None
    for key in _TAG_KEYS[field_name]:
        if key in tags:
            return tags[key]
    return None


def _positive_int(value: Any) -> int | None:
    return value if isinstance(value, int) and value > 0 else None


def extract_metadata(path: Path) -> TrackMetadata:
    """
    Read tags and stream info with mutagen.

    Blocking; the scanner calls it from a worker thread. Raises ValueError when
    mutagen does not recognize the file, and lets MutagenError through for
    files it recognizes but cannot parse.
    """
    audio = mutagen_file(path)
    if audio is None:
        raise ValueError("unsupported or unreadable audio file")

    tags = audio.tags
    info = audio.info
    length = getattr(info, "length", None)

    return TrackMetadata(
        title=_first_text(_lookup(tags, "title")),
        artist=_first_text(_lookup(tags, "artist")),
        album=_first_text(_lookup(tags, "album")),
        year=_parse_year_maybe(_lookup(tags, "year")),
        track_number=_parse_int_maybe(_lookup(tags, "track_number")),
        disc_number=_parse_int_maybe(_lookup(tags, "disc_number")),
        duration_ms=int(length * 1000) if isinstance(length, (int, float)) and length > 0 else None,
        bitrate=_positive_int(getattr(info, "bitrate", None)),
        sample_rate=_positive_int(getattr(info, "sample_rate", None)),
    )


def read_metadata(path: Path) -> MetadataResult:
    """Read tags from `path`, mapping decoder failures to `MetadataCorrupt`."""
    try:
        return MetadataOk(extract_metadata(path))
    except (MutagenError, ValueError) as e:
        reason = f"{type(e).__name__}: {e}"
        logger.debug("Unreadable audio file %s: %s", path, reason)
        return MetadataCorrupt(reason)


class MutagenMetadataReader:
    """Default `MetadataReader` backed by mutagen."""

    def read(self, path: Path) -> MetadataResult:
        return read_metadata(path)
