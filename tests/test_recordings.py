"""Tests for the recordings folder index."""

import contextlib
import datetime as dt
import os
from pathlib import Path

import pytest

from recordings import (
    Listing,
    ListingState,
    RecordingDirectoryIndex,
    format_when,
    human_bytes,
)


def touch(path: Path, when: dt.datetime, size: int = 0) -> Path:
    path.write_bytes(b"\0" * size)
    ts = when.timestamp()
    os.utime(path, (ts, ts))
    return path


class TestHumanBytes:
    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0 B"),
            (1023, "1023 B"),
            (1024, "1.0 KB"),
            (1536, "1.5 KB"),
            (5 * 1024 * 1024, "5.0 MB"),
            (1_073_741_824, "1.0 GB"),
            (3 * 1024**5, "3072.0 TB"),
        ],
    )
    def test_rendering(self, size: int, expected: str) -> None:
        assert human_bytes(size) == expected


class TestListing:
    def test_empty_and_error_are_distinct(self) -> None:
        assert Listing.empty().state is ListingState.EMPTY
        err = Listing.error("Permission denied")
        assert err.state is ListingState.ERROR
        assert err.reason == "Permission denied"
        assert len(err) == 0 and len(Listing.empty()) == 0

    def test_items_without_files_is_empty(self) -> None:
        assert Listing.items([]).state is ListingState.EMPTY


class TestRecordingDirectoryIndex:
    def test_filter(self, tmp_path: Path) -> None:
        now = dt.datetime(2024, 1, 1, 10, 0)
        for name in ("a.mp4", "b.txt", "wf-recorder-x.bin", "c.mkv"):
            touch(tmp_path / name, now)
        (tmp_path / "d.webm").mkdir()

        listing = RecordingDirectoryIndex().list(tmp_path)

        assert listing.state is ListingState.ITEMS
        assert set(listing.names()) == {"a.mp4", "wf-recorder-x.bin", "c.mkv"}

    def test_not_recursive(self, tmp_path: Path) -> None:
        sub = tmp_path / "sub"
        sub.mkdir()
        touch(sub / "deep.mp4", dt.datetime(2024, 1, 1))
        assert RecordingDirectoryIndex().list(tmp_path).state is ListingState.EMPTY

    def test_newest_first(self, tmp_path: Path) -> None:
        touch(tmp_path / "one.mp4", dt.datetime(2024, 1, 1, 10, 0, 5))
        touch(tmp_path / "two.mp4", dt.datetime(2024, 1, 2, 9, 0))
        touch(tmp_path / "three.mp4", dt.datetime(2024, 1, 1, 10, 0, 40))

        listing = RecordingDirectoryIndex().list(tmp_path)

        assert listing.names()[0] == "two.mp4"
        assert set(listing.names()[1:]) == {"one.mp4", "three.mp4"}
        assert [f.when for f in listing] == [
            "2024-01-02 09:00",
            "2024-01-01 10:00",
            "2024-01-01 10:00",
        ]

    def test_within_a_minute_uses_raw_mtime(self, tmp_path: Path) -> None:
        touch(tmp_path / "early.mp4", dt.datetime(2024, 1, 1, 10, 0, 1))
        touch(tmp_path / "late.mp4", dt.datetime(2024, 1, 1, 10, 0, 59))
        assert RecordingDirectoryIndex().list(tmp_path).names() == ["late.mp4", "early.mp4"]

    def test_entries_carry_size_and_time(self, tmp_path: Path) -> None:
        touch(tmp_path / "clip.webm", dt.datetime(2024, 3, 4, 5, 6), size=1536)

        (f,) = RecordingDirectoryIndex().list(tmp_path)

        assert f.name == "clip.webm"
        assert f.size_bytes == 1536
        assert f.size == "1.5 KB"
        assert f.when == "2024-03-04 05:06"
        assert f.path == tmp_path / "clip.webm"

    def test_empty_directory(self, tmp_path: Path) -> None:
        touch(tmp_path / "notes.txt", dt.datetime(2024, 1, 1))
        assert RecordingDirectoryIndex().list(tmp_path).state is ListingState.EMPTY

    def test_missing_directory_is_error(self, tmp_path: Path) -> None:
        listing = RecordingDirectoryIndex().list(tmp_path / "nope")
        assert listing.state is ListingState.ERROR
        assert listing.reason

    def test_unreadable_entry_is_skipped(self, tmp_path: Path, monkeypatch) -> None:
        touch(tmp_path / "a.mp4", dt.datetime(2024, 1, 2))
        touch(tmp_path / "b.mp4", dt.datetime(2024, 1, 1))
        real_scandir = os.scandir

        class Unreadable:
            def __init__(self, entry) -> None:
                self.name = entry.name
                self.path = entry.path
                self._entry = entry

            def is_file(self) -> bool:
                return self._entry.is_file()

            def stat(self):
                if self.name == "a.mp4":
                    raise PermissionError(13, "Permission denied", self.path)
                return self._entry.stat()

        @contextlib.contextmanager
        def scandir(path):
            with real_scandir(path) as it:
                yield (Unreadable(e) for e in it)

        monkeypatch.setattr("recordings.os.scandir", scandir)

        assert RecordingDirectoryIndex().list(tmp_path).names() == ["b.mp4"]

    def test_listing_is_not_cached(self, tmp_path: Path) -> None:
        index = RecordingDirectoryIndex()
        assert index.list(tmp_path).state is ListingState.EMPTY
        touch(tmp_path / "new.mp4", dt.datetime(2024, 1, 1))
        assert index.list(tmp_path).names() == ["new.mp4"]

    def test_latest_by_extension(self, tmp_path: Path) -> None:
        touch(tmp_path / "old.mp4", dt.datetime(2024, 1, 1))
        touch(tmp_path / "new.mp4", dt.datetime(2024, 1, 3))
        touch(tmp_path / "newer.mkv", dt.datetime(2024, 1, 5))

        assert RecordingDirectoryIndex().latest(tmp_path, "mp4") == tmp_path / "new.mp4"

    def test_latest_none(self, tmp_path: Path) -> None:
        index = RecordingDirectoryIndex()
        assert index.latest(tmp_path, "mp4") is None
        assert index.latest(tmp_path / "missing", "mp4") is None


class TestDelete:
    def test_confirmed_delete_removes_file(self, tmp_path: Path) -> None:
        index = RecordingDirectoryIndex()
        target = touch(tmp_path / "a.mp4", dt.datetime(2024, 1, 1))
        touch(tmp_path / "b.mp4", dt.datetime(2024, 1, 2))
        asked = []

        assert index.delete(target, lambda name: asked.append(name) or True)

        assert asked == ["a.mp4"]
        assert not target.exists()
        assert index.list(tmp_path).names() == ["b.mp4"]

    def test_declined_delete_keeps_file(self, tmp_path: Path) -> None:
        target = touch(tmp_path / "a.mp4", dt.datetime(2024, 1, 1))
        assert not RecordingDirectoryIndex().delete(target, lambda name: False)
        assert target.exists()

    def test_missing_file_never_asks(self, tmp_path: Path) -> None:
        def confirm(name: str) -> bool:
            raise AssertionError("should not prompt")

        assert not RecordingDirectoryIndex().delete(tmp_path / "gone.mp4", confirm)

    def test_unlink_failure_reports_false(self, tmp_path: Path, monkeypatch) -> None:
        target = touch(tmp_path / "a.mp4", dt.datetime(2024, 1, 1))

        def refuse(self, missing_ok=False):
            raise PermissionError(13, "Permission denied", str(self))

        monkeypatch.setattr(type(target), "unlink", refuse)

        assert not RecordingDirectoryIndex().delete(target, lambda name: True)
        assert target.exists()


def test_format_when() -> None:
    assert format_when(dt.datetime(2024, 12, 31, 23, 59, 58)) == "2024-12-31 23:59"
