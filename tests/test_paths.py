"""Tests for directory validation and the apply step."""

from pathlib import Path

import pytest

from notify import GREEN, RED
from paths import PathStatus, PathValidator, ensure_directory
from session import SessionState


class TestEnsureDirectory:
    def test_creates_parents(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "c"
        assert ensure_directory(target) == target
        assert target.is_dir()

    def test_existing_directory_is_fine(self, tmp_path: Path) -> None:
        assert ensure_directory(tmp_path) == tmp_path

    def test_blank_path_rejected(self) -> None:
        with pytest.raises(OSError):
            ensure_directory("   ")

    def test_file_in_the_way(self, tmp_path: Path) -> None:
        f = tmp_path / "taken"
        f.write_text("x")
        with pytest.raises(OSError):
            ensure_directory(f)

    def test_embedded_nul_raises_oserror(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            ensure_directory(f"{tmp_path}/a\0b")

    def test_expands_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        assert ensure_directory("~/Videos") == tmp_path / "Videos"


class TestPathValidator:
    def test_validate_ok_notifies_green(self, tmp_path: Path, sink) -> None:
        status = PathValidator(sink).validate(tmp_path / "new")

        assert status.valid
        assert status.reason is None
        assert (tmp_path / "new").is_dir()
        message, _, _, color = sink.sent[-1]
        assert message == f"Directory validated: {tmp_path / 'new'}"
        assert color == GREEN

    def test_validate_failure_notifies_red(self, tmp_path: Path, sink) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")

        status = PathValidator(sink).validate(blocker / "sub")

        assert not status.valid
        assert status.reason
        message, _, _, color = sink.sent[-1]
        assert message.startswith("Invalid directory path: ")
        assert color == RED

    def test_validate_is_idempotent(self, tmp_path: Path, sink) -> None:
        v = PathValidator(sink)
        first = v.validate(tmp_path / "rec")
        second = v.validate(tmp_path / "rec")
        assert first == second

    def test_invalid_status_is_idempotent(self, tmp_path: Path, sink) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")
        v = PathValidator(sink)
        assert v.validate(blocker) == v.validate(blocker)

    def test_apply_replaces_directory(self, tmp_path: Path, sink) -> None:
        state = SessionState(recording_directory=tmp_path / "old")

        status = PathValidator(sink).apply(str(tmp_path / "new"), state)

        assert status == PathStatus.ok(tmp_path / "new")
        assert state.recording_directory == tmp_path / "new"
        assert sink.messages[-1] == f"Applied recording directory: {tmp_path / 'new'}"

    def test_apply_invalid_leaves_state(self, tmp_path: Path, sink) -> None:
        state = SessionState(recording_directory=tmp_path / "old")

        status = PathValidator(sink).apply("", state)

        assert not status.valid
        assert state.recording_directory == tmp_path / "old"
        assert sink.messages[-1].startswith("Cannot apply invalid path: ")

    def test_nul_byte_is_invalid_not_a_crash(self, tmp_path: Path, sink) -> None:
        state = SessionState(recording_directory=tmp_path / "old")
        validator = PathValidator(sink)

        assert not validator.validate(f"{tmp_path}/a\0b").valid
        status = validator.apply(f"{tmp_path}/a\0b", state)

        assert not status.valid
        assert state.recording_directory == tmp_path / "old"
        assert sink.messages[-1].startswith("Cannot apply invalid path: ")
        assert sink.sent[-1][3] == RED
