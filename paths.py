from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from notify import NotificationSink, Outcome
from session import SessionState

log = logging.getLogger("ummit.paths")

PathLike = Union[str, Path]


def ensure_directory(path: PathLike) -> Path:
    """Create ``path`` and its parents; an existing directory is fine.

    Raises ``OSError`` when the path cannot be a directory.
    """
    text = str(path).strip()
    if not text:
        raise NotADirectoryError("empty path")
    p = Path(text).expanduser()
    try:
        p.mkdir(parents=True, exist_ok=True)
    except ValueError as e:
        # e.g. an embedded NUL byte typed into the entry
        raise NotADirectoryError(str(e)) from e
    return p


@dataclass(frozen=True)
class PathStatus:
    path: Path
    reason: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.reason is None

    @classmethod
    def ok(cls, path: Path) -> "PathStatus":
        return cls(path)

    @classmethod
    def invalid(cls, path: Path, reason: str) -> "PathStatus":
        return cls(path, reason)


def _describe(e: OSError) -> str:
    return e.strerror or str(e)


class PathValidator:
    """Checks (and creates) candidate output directories."""

    def __init__(self, sink: NotificationSink):
        self.sink = sink

    def _check(self, path: PathLike) -> PathStatus:
        candidate = Path(str(path).strip()).expanduser()
        try:
            return PathStatus.ok(ensure_directory(path))
        except OSError as e:
            return PathStatus.invalid(candidate, _describe(e))

    def validate(self, path: PathLike) -> PathStatus:
        log.info("Validating directory path: %s", path)
        status = self._check(path)
        if status.valid:
            self.sink.outcome(Outcome(True, f"Directory validated: {status.path}"))
        else:
            log.warning("Directory validation failed: %s", status.reason)
            self.sink.outcome(Outcome(False, f"Invalid directory path: {status.reason}"))
        return status

    def apply(self, path: PathLike, state: SessionState) -> PathStatus:
        log.info("Applying directory path: %s", path)
        status = self._check(path)
        if status.valid:
            state.recording_directory = status.path
            log.info("Recording directory applied: %s", status.path)
            self.sink.outcome(Outcome(True, f"Applied recording directory: {status.path}"))
        else:
            log.warning("Cannot apply invalid path: %s", status.reason)
            self.sink.outcome(Outcome(False, f"Cannot apply invalid path: {status.reason}"))
        return status
