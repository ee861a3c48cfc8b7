"""
Tests for encore.core.scanner and the helpers it is built from.

These tests verify:
- the format filter and content fingerprints
- dedup by content (within a scan, across scans and across roots)
- per-file failure isolation vs. fatal errors
- artist/album/extension resolution
"""

from __future__ import annotations

import asyncio
import sqlite3
import threading
import wave
from datetime import timedelta
from pathlib import Path

import pytest

from encore.core import LibraryRootNotFoundError
from encore.core.fingerprint import calculate_file_hash, find_duplicate_files
from encore.core.formats import is_supported_format
from encore.core.library_db import LibraryDb
from encore.core.metadata import MetadataCorrupt, MetadataOk, TrackMetadata
from encore.core.scanner import LibraryScanner, ScanResult, iter_library_files


def write_wav(path: Path, seed: int = 0, frames: int = 4410) -> Path:
    """Write a short mono 16-bit PCM WAV whose samples depend on `seed`."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(path), "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(44100)
        w.writeframes(bytes((seed + i) % 256 for i in range(frames * 2)))
    return path


class FakeReader:
    """MetadataReader double keyed by file name."""

    def __init__(
        self,
        tags: dict[str, TrackMetadata] | None = None,
        corrupt: set[str] | None = None,
    ) -> None:
        self.tags = tags or {}
        self.corrupt = corrupt or set()
        self.calls: list[str] = []

    def read(self, path: Path) -> MetadataOk | MetadataCorrupt:
        self.calls.append(path.name)
        if path.name in self.corrupt:
            return MetadataCorrupt("CorruptFileException: invalid header")
        return MetadataOk(self.tags.get(path.name, TrackMetadata()))


class FailingCommitDb(LibraryDb):
    async def commit(self) -> None:
        raise sqlite3.OperationalError("disk I/O error")


@pytest.fixture
async def db() -> LibraryDb:
    db = LibraryDb(":memory:")
    await db.open()
    await db.ensure_schema()
    yield db
    await db.close()


# =============================================================================
# Format filter / fingerprints
# =============================================================================


class TestFormatFilter:
    @pytest.mark.parametrize(
        ("extension", "expected"),
        [
            (".wav", True),
            (".WAV", True),
            (".mp3", True),
            (".Mp3", True),
            (".wma", True),
            (".WMA", True),
            (".flac", False),
            (".ogg", False),
            (".txt", False),
            ("wav", False),
            ("", False),
        ],
    )
    def test_is_supported_format(self, extension: str, expected: bool) -> None:
        assert is_supported_format(extension) is expected


class TestFingerprint:
    def test_hash_is_deterministic(self, tmp_path: Path) -> None:
        path = write_wav(tmp_path / "a.wav", seed=1)
        assert calculate_file_hash(path) == calculate_file_hash(path)

    def test_hash_ignores_name_and_location(self, tmp_path: Path) -> None:
        a = write_wav(tmp_path / "a.wav", seed=1)
        b = tmp_path / "deep" / "er" / "renamed.mp3"
        b.parent.mkdir(parents=True)
        b.write_bytes(a.read_bytes())

        assert calculate_file_hash(a) == calculate_file_hash(b)

    def test_one_byte_difference_changes_hash(self, tmp_path: Path) -> None:
        a = tmp_path / "a.wav"
        b = tmp_path / "b.wav"
        a.write_bytes(b"RIFF" + b"\x00" * 100)
        b.write_bytes(b"RIFF" + b"\x00" * 99 + b"\x01")

        assert calculate_file_hash(a) != calculate_file_hash(b)

    def test_hash_is_lowercase_sha256_hex(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.wav"
        path.write_bytes(b"")
        assert (
            calculate_file_hash(path)
            == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )

    def test_find_duplicate_files(self, tmp_path: Path) -> None:
        a = write_wav(tmp_path / "one" / "a.wav", seed=1)
        b = tmp_path / "two" / "b.mp3"
        b.parent.mkdir()
        b.write_bytes(a.read_bytes())
        write_wav(tmp_path / "one" / "unique.wav", seed=2)
        (tmp_path / "one" / "copy.txt").write_bytes(a.read_bytes())

        groups = find_duplicate_files([tmp_path / "one", tmp_path / "two"])

        assert list(groups.values()) == [[a, b]]
        assert list(groups) == [calculate_file_hash(a)]

    def test_find_duplicate_files_rejects_missing_root(self, tmp_path: Path) -> None:
        write_wav(tmp_path / "one" / "a.wav", seed=1)

        with pytest.raises(LibraryRootNotFoundError):
            find_duplicate_files([tmp_path / "one", tmp_path / "missing"])

        with pytest.raises(LibraryRootNotFoundError):
            find_duplicate_files([tmp_path / "one" / "a.wav"])


class TestIterLibraryFiles:
    async def test_walks_all_depths_in_sorted_order(self, tmp_path: Path) -> None:
        write_wav(tmp_path / "b.wav")
        write_wav(tmp_path / "a" / "b" / "c" / "d.wav")
        (tmp_path / "notes.txt").write_text("hi")

        found = [p async for p in iter_library_files(tmp_path)]

        assert found == sorted(found, key=str)
        assert {p.name for p in found} == {"b.wav", "d.wav", "notes.txt"}

    async def test_yields_symlinked_files_and_skips_broken_links(self, tmp_path: Path) -> None:
        target = write_wav(tmp_path / "elsewhere" / "real.wav")
        root = tmp_path / "root"
        root.mkdir()
        (root / "link.wav").symlink_to(target)
        (root / "dangling.wav").symlink_to(tmp_path / "gone.wav")

        found = [p async for p in iter_library_files(root)]

        assert found == [root / "link.wav"]


# =============================================================================
# Scan engine
# =============================================================================


class TestScanLibrary:
    async def test_imports_supported_files(self, db: LibraryDb, tmp_path: Path) -> None:
        write_wav(tmp_path / "a.wav", seed=1)
        (tmp_path / "b.mp3").write_bytes(b"ID3 fake mp3 payload")
        (tmp_path / "c.WMA").write_bytes(b"fake wma payload")
        reader = FakeReader()

        result = await LibraryScanner(db=db, reader=reader).scan_library(tmp_path)

        assert result.tracks_added == 3
        assert result.errors == []
        assert await db.count_tracks() == 3

    async def test_ignores_unsupported_formats(self, db: LibraryDb, tmp_path: Path) -> None:
        write_wav(tmp_path / "a.wav", seed=1)
        (tmp_path / "b.flac").write_bytes(b"flac")
        (tmp_path / "c.ogg").write_bytes(b"ogg")
        (tmp_path / "cover.jpg").write_bytes(b"jpg")
        reader = FakeReader()

        result = await LibraryScanner(db=db, reader=reader).scan_library(tmp_path)

        assert result.tracks_added == 1
        assert reader.calls == ["a.wav"]

    async def test_scans_subdirectories(self, db: LibraryDb, tmp_path: Path) -> None:
        write_wav(tmp_path / "top.wav", seed=1)
        write_wav(tmp_path / "artist" / "album" / "disc 1" / "deep.wav", seed=2)

        result = await LibraryScanner(db=db, reader=FakeReader()).scan_library(tmp_path)

        assert result.tracks_added == 2

    async def test_symlinked_file_outside_root_is_imported(
        self, db: LibraryDb, tmp_path: Path
    ) -> None:
        target = write_wav(tmp_path / "elsewhere" / "a.wav", seed=1)
        root = tmp_path / "root"
        root.mkdir()
        (root / "link.wav").symlink_to(target)

        result = await LibraryScanner(db=db, reader=FakeReader()).scan_library(root)

        assert result.tracks_added == 1
        track = (await db.list_tracks())[0]
        assert track.path == str(root / "link.wav")
        assert track.file_hash == calculate_file_hash(target)

    async def test_symlink_and_target_in_root_are_one_track(
        self, db: LibraryDb, tmp_path: Path
    ) -> None:
        target = write_wav(tmp_path / "a.wav", seed=1)
        (tmp_path / "z-link.wav").symlink_to(target)

        result = await LibraryScanner(db=db, reader=FakeReader()).scan_library(tmp_path)

        assert result.tracks_added == 1
        assert await db.count_tracks() == 1

    async def test_identical_content_is_imported_once(
        self, db: LibraryDb, tmp_path: Path
    ) -> None:
        original = write_wav(tmp_path / "a.wav", seed=7)
        copy = tmp_path / "nested" / "deeper" / "totally different name.wav"
        copy.parent.mkdir(parents=True)
        copy.write_bytes(original.read_bytes())
        reader = FakeReader()

        result = await LibraryScanner(db=db, reader=reader).scan_library(tmp_path)

        assert result.tracks_added == 1
        assert result.errors == []
        assert await db.count_tracks() == 1
        # The duplicate is caught before its tags are read.
        assert len(reader.calls) == 1

    async def test_rescan_adds_nothing(self, db: LibraryDb, tmp_path: Path) -> None:
        write_wav(tmp_path / "a.wav", seed=1)
        write_wav(tmp_path / "b.wav", seed=2)
        scanner = LibraryScanner(db=db, reader=FakeReader())

        first = await scanner.scan_library(tmp_path)
        second = await scanner.scan_library(tmp_path)

        assert first.tracks_added == 2
        assert second.tracks_added == 0
        assert second.errors == []
        assert await db.count_tracks() == 2

    async def test_relocated_copy_is_not_reimported(self, db: LibraryDb, tmp_path: Path) -> None:
        first_root = tmp_path / "old"
        second_root = tmp_path / "new"
        original = write_wav(first_root / "song.wav", seed=3)
        scanner = LibraryScanner(db=db, reader=FakeReader())
        await scanner.scan_library(first_root)

        moved = second_root / "renamed" / "track 01.wav"
        moved.parent.mkdir(parents=True)
        moved.write_bytes(original.read_bytes())
        result = await scanner.scan_library(second_root)

        assert result.tracks_added == 0
        track = await db.get_track_by_hash(calculate_file_hash(moved))
        assert track is not None
        assert track.path == str(original)

    async def test_corrupt_files_are_recorded_and_skipped(
        self, db: LibraryDb, tmp_path: Path
    ) -> None:
        for i in range(3):
            write_wav(tmp_path / f"good{i}.wav", seed=i)
        for i in range(2):
            write_wav(tmp_path / f"bad{i}.wav", seed=100 + i)
        reader = FakeReader(corrupt={"bad0.wav", "bad1.wav"})

        result = await LibraryScanner(db=db, reader=reader).scan_library(tmp_path)

        assert result.tracks_added == 3
        assert len(result.errors) == 2
        assert str(tmp_path / "bad0.wav") in result.errors[0]
        assert "invalid header" in result.errors[0]
        assert await db.count_tracks() == 3

    async def test_unreadable_file_with_real_reader(self, db: LibraryDb, tmp_path: Path) -> None:
        write_wav(tmp_path / "good.wav", seed=1)
        (tmp_path / "broken.wav").write_bytes(b"this is not really audio data " * 20)

        result = await LibraryScanner(db=db).scan_library(tmp_path)

        assert result.tracks_added == 1
        assert len(result.errors) == 1
        assert result.errors[0].startswith(str(tmp_path / "broken.wav"))

    async def test_corrupt_file_can_be_imported_after_repair(
        self, db: LibraryDb, tmp_path: Path
    ) -> None:
        write_wav(tmp_path / "a.wav", seed=1)
        reader = FakeReader(corrupt={"a.wav"})
        scanner = LibraryScanner(db=db, reader=reader)

        assert (await scanner.scan_library(tmp_path)).tracks_added == 0

        reader.corrupt.clear()
        assert (await scanner.scan_library(tmp_path)).tracks_added == 1

    async def test_missing_root_raises(self, db: LibraryDb, tmp_path: Path) -> None:
        scanner = LibraryScanner(db=db, reader=FakeReader())

        with pytest.raises(LibraryRootNotFoundError):
            await scanner.scan_library(tmp_path / "does-not-exist")

        with pytest.raises(FileNotFoundError):
            await scanner.scan_library(tmp_path / "does-not-exist")

    async def test_file_root_raises(self, db: LibraryDb, tmp_path: Path) -> None:
        path = write_wav(tmp_path / "a.wav")

        with pytest.raises(LibraryRootNotFoundError):
            await LibraryScanner(db=db, reader=FakeReader()).scan_library(path)

    async def test_none_root_raises(self, db: LibraryDb) -> None:
        with pytest.raises(LibraryRootNotFoundError):
            await LibraryScanner(db=db, reader=FakeReader()).scan_library(None)

    async def test_result_shape(self, db: LibraryDb, tmp_path: Path) -> None:
        write_wav(tmp_path / "a.wav", seed=1)

        result = await LibraryScanner(db=db, reader=FakeReader()).scan_library(tmp_path)

        assert result.tracks_updated == 0
        assert result.tracks_removed == 0
        assert result.duration > timedelta(0)

    async def test_commit_failure_propagates_and_rolls_back(self, tmp_path: Path) -> None:
        db = FailingCommitDb(":memory:")
        await db.open()
        try:
            await db.ensure_schema()
            write_wav(tmp_path / "a.wav", seed=1)
            reader = FakeReader(tags={"a.wav": TrackMetadata(artist="Bonobo", album="Migration")})

            with pytest.raises(sqlite3.OperationalError):
                await LibraryScanner(db=db, reader=reader).scan_library(tmp_path)

            assert await db.count_tracks() == 0
            assert await db.count_artists() == 0
            assert await db.count_albums() == 0
        finally:
            await db.close()

    async def test_cancellation_rolls_back(self, db: LibraryDb, tmp_path: Path) -> None:
        write_wav(tmp_path / "a.wav", seed=1)
        write_wav(tmp_path / "b.wav", seed=2)
        reached = threading.Event()
        release = threading.Event()

        class StallingReader(FakeReader):
            def read(self, path: Path) -> MetadataOk | MetadataCorrupt:
                if path.name == "b.wav":
                    reached.set()
                    release.wait(5)
                return super().read(path)

        reader = StallingReader(tags={"a.wav": TrackMetadata(artist="Bonobo", album="Migration")})
        task = asyncio.create_task(LibraryScanner(db=db, reader=reader).scan_library(tmp_path))
        try:
            assert await asyncio.to_thread(reached.wait, 5)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task
        finally:
            release.set()

        assert await db.count_tracks() == 0
        assert await db.count_artists() == 0
        assert await db.count_albums() == 0
        assert await db.all_track_fingerprints() == set()


class TestTrackFields:
    async def test_title_falls_back_to_file_name(self, db: LibraryDb, tmp_path: Path) -> None:
        write_wav(tmp_path / "My Song.wav", seed=1)

        await LibraryScanner(db=db).scan_library(tmp_path)

        rows = await db.list_tracks()
        assert [r.title for r in rows] == ["My Song"]

    async def test_blank_title_falls_back_to_file_name(
        self, db: LibraryDb, tmp_path: Path
    ) -> None:
        write_wav(tmp_path / "Intro.wav", seed=1)
        reader = FakeReader(tags={"Intro.wav": TrackMetadata(title="   ")})

        await LibraryScanner(db=db, reader=reader).scan_library(tmp_path)

        rows = await db.list_tracks()
        assert rows[0].title == "Intro"

    async def test_metadata_is_copied_through(self, db: LibraryDb, tmp_path: Path) -> None:
        path = write_wav(tmp_path / "a.wav", seed=1)
        reader = FakeReader(
            tags={
                "a.wav": TrackMetadata(
                    title="Kerala",
                    duration_ms=250_000,
                    bitrate=320_000,
                    sample_rate=48_000,
                    track_number=4,
                    disc_number=1,
                )
            }
        )

        await LibraryScanner(db=db, reader=reader).scan_library(tmp_path)

        row = await db.get_track_by_hash(calculate_file_hash(path))
        assert row is not None
        assert row.title == "Kerala"
        assert row.path == str(path)
        assert row.duration_ms == 250_000
        assert row.bitrate == 320_000
        assert row.sample_rate == 48_000
        assert row.track_no == 4
        assert row.disc_no == 1
        assert row.file_size == path.stat().st_size
        assert row.artist_id is None
        assert row.album_id is None
        assert row.imported_at is not None
        assert row.imported_at == row.updated_at

    async def test_missing_metadata_fields_stay_null(self, db: LibraryDb, tmp_path: Path) -> None:
        write_wav(tmp_path / "a.wav", seed=1)

        await LibraryScanner(db=db, reader=FakeReader()).scan_library(tmp_path)

        row = (await db.list_tracks())[0]
        assert row.duration_ms is None
        assert row.bitrate is None
        assert row.sample_rate is None

    async def test_assigns_file_extension(self, db: LibraryDb, tmp_path: Path) -> None:
        write_wav(tmp_path / "a.WAV", seed=1)
        (tmp_path / "b.mp3").write_bytes(b"mp3 bytes")

        await LibraryScanner(db=db, reader=FakeReader()).scan_library(tmp_path)

        extensions = {e.extension: e.id for e in await db.list_extensions()}
        rows = {Path(r.path).name: r for r in await db.list_tracks()}
        assert rows["a.WAV"].file_extension_id == extensions["wav"]
        assert rows["b.mp3"].file_extension_id == extensions["mp3"]

    async def test_missing_extension_seed_fails_soft(self, db: LibraryDb, tmp_path: Path) -> None:
        await db._require_conn().execute("DELETE FROM file_extensions WHERE extension = 'wav';")
        await db.commit()
        write_wav(tmp_path / "a.wav", seed=1)

        result = await LibraryScanner(db=db, reader=FakeReader()).scan_library(tmp_path)

        assert result.tracks_added == 1
        assert (await db.list_tracks())[0].file_extension_id is None


class TestEntityResolution:
    async def test_bonobo_scenario(self, db: LibraryDb, tmp_path: Path) -> None:
        write_wav(tmp_path / "a.wav", seed=1)
        write_wav(tmp_path / "b.wav", seed=2)
        reader = FakeReader(
            tags={
                "a.wav": TrackMetadata(title="Kerala", artist="Bonobo", album="Migration"),
                "b.wav": TrackMetadata(title="Bambro", artist="Bonobo", album="Migration"),
            }
        )

        result = await LibraryScanner(db=db, reader=reader).scan_library(tmp_path)

        assert result.tracks_added == 2
        artists = await db.list_artists()
        albums = await db.list_albums()
        assert [a.name for a in artists] == ["Bonobo"]
        assert [a.title for a in albums] == ["Migration"]
        assert albums[0].artist_id == artists[0].id

        tracks = await db.list_tracks(order_by="title")
        assert [t.title for t in tracks] == ["Bambro", "Kerala"]
        assert {t.album_id for t in tracks} == {albums[0].id}
        assert {t.artist_id for t in tracks} == {artists[0].id}

    async def test_reuses_existing_artist(self, db: LibraryDb, tmp_path: Path) -> None:
        artist_id = await db.add_artist("Bonobo")
        await db.commit()
        write_wav(tmp_path / "a.wav", seed=1)
        reader = FakeReader(tags={"a.wav": TrackMetadata(artist="Bonobo")})

        await LibraryScanner(db=db, reader=reader).scan_library(tmp_path)

        assert await db.count_artists() == 1
        assert (await db.list_tracks())[0].artist_id == artist_id

    async def test_artist_names_match_exactly(self, db: LibraryDb, tmp_path: Path) -> None:
        write_wav(tmp_path / "a.wav", seed=1)
        write_wav(tmp_path / "b.wav", seed=2)
        reader = FakeReader(
            tags={
                "a.wav": TrackMetadata(artist="Bonobo"),
                "b.wav": TrackMetadata(artist="bonobo"),
            }
        )

        await LibraryScanner(db=db, reader=reader).scan_library(tmp_path)

        assert await db.count_artists() == 2

    async def test_album_year_comes_from_first_track(self, db: LibraryDb, tmp_path: Path) -> None:
        write_wav(tmp_path / "01.wav", seed=1)
        write_wav(tmp_path / "02.wav", seed=2)
        reader = FakeReader(
            tags={
                "01.wav": TrackMetadata(artist="Bonobo", album="Migration", year=2017),
                "02.wav": TrackMetadata(artist="Bonobo", album="Migration", year=2020),
            }
        )

        await LibraryScanner(db=db, reader=reader).scan_library(tmp_path)

        albums = await db.list_albums()
        assert len(albums) == 1
        assert albums[0].year == 2017

    async def test_same_album_title_for_different_artists(
        self, db: LibraryDb, tmp_path: Path
    ) -> None:
        write_wav(tmp_path / "a.wav", seed=1)
        write_wav(tmp_path / "b.wav", seed=2)
        reader = FakeReader(
            tags={
                "a.wav": TrackMetadata(artist="Weezer", album="Weezer"),
                "b.wav": TrackMetadata(artist="Peter Gabriel", album="Weezer"),
            }
        )

        await LibraryScanner(db=db, reader=reader).scan_library(tmp_path)

        albums = await db.list_albums()
        assert len(albums) == 2
        assert {a.artist_name for a in albums} == {"Weezer", "Peter Gabriel"}

    async def test_album_without_artist_is_reused(self, db: LibraryDb, tmp_path: Path) -> None:
        write_wav(tmp_path / "a.wav", seed=1)
        write_wav(tmp_path / "b.wav", seed=2)
        reader = FakeReader(
            tags={
                "a.wav": TrackMetadata(album="Field Recordings"),
                "b.wav": TrackMetadata(album="Field Recordings"),
            }
        )

        await LibraryScanner(db=db, reader=reader).scan_library(tmp_path)

        albums = await db.list_albums()
        assert len(albums) == 1
        assert albums[0].artist_id is None
        assert await db.count_artists() == 0

    async def test_albums_are_reused_across_scans(self, db: LibraryDb, tmp_path: Path) -> None:
        write_wav(tmp_path / "one" / "a.wav", seed=1)
        write_wav(tmp_path / "two" / "b.wav", seed=2)
        meta = TrackMetadata(artist="Bonobo", album="Migration")
        reader = FakeReader(tags={"a.wav": meta, "b.wav": meta})
        scanner = LibraryScanner(db=db, reader=reader)

        await scanner.scan_library(tmp_path / "one")
        await scanner.scan_library(tmp_path / "two")

        assert await db.count_artists() == 1
        assert await db.count_albums() == 1


# =============================================================================
# Multi-root coordination
# =============================================================================


class TestScanAllLibraries:
    async def test_empty_list(self, db: LibraryDb) -> None:
        result = await LibraryScanner(db=db, reader=FakeReader()).scan_all_libraries([])

        assert result == ScanResult()
        assert result.duration == timedelta(0)
        assert result.errors == []

    async def test_aggregates_results_in_root_order(self, db: LibraryDb, tmp_path: Path) -> None:
        write_wav(tmp_path / "one" / "a.wav", seed=1)
        write_wav(tmp_path / "one" / "bad1.wav", seed=2)
        write_wav(tmp_path / "two" / "b.wav", seed=3)
        write_wav(tmp_path / "two" / "c.wav", seed=4)
        write_wav(tmp_path / "two" / "bad2.wav", seed=5)
        reader = FakeReader(corrupt={"bad1.wav", "bad2.wav"})

        result = await LibraryScanner(db=db, reader=reader).scan_all_libraries(
            [tmp_path / "one", tmp_path / "two"]
        )

        assert result.tracks_added == 3
        assert len(result.errors) == 2
        assert "bad1.wav" in result.errors[0]
        assert "bad2.wav" in result.errors[1]
        assert result.duration > timedelta(0)

    async def test_dedup_spans_roots(self, db: LibraryDb, tmp_path: Path) -> None:
        original = write_wav(tmp_path / "one" / "a.wav", seed=1)
        copy = tmp_path / "two" / "a copy.wav"
        copy.parent.mkdir()
        copy.write_bytes(original.read_bytes())

        result = await LibraryScanner(db=db, reader=FakeReader()).scan_all_libraries(
            [tmp_path / "one", tmp_path / "two"]
        )

        assert result.tracks_added == 1
        assert await db.count_tracks() == 1

    async def test_missing_root_aborts_remaining_roots(
        self, db: LibraryDb, tmp_path: Path
    ) -> None:
        write_wav(tmp_path / "one" / "a.wav", seed=1)
        write_wav(tmp_path / "three" / "c.wav", seed=3)
        reader = FakeReader()

        with pytest.raises(LibraryRootNotFoundError):
            await LibraryScanner(db=db, reader=reader).scan_all_libraries(
                [tmp_path / "one", tmp_path / "two", tmp_path / "three"]
            )

        # The first root committed before the failure; the third never ran.
        assert await db.count_tracks() == 1
        assert reader.calls == ["a.wav"]
