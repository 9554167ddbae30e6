"""
Recording directory index: what wf-recorder left in the output folder.

Nothing here is cached. Every call re-reads the directory, so a delete (or a
new recording) shows up on the next poll without any bookkeeping.
"""

from __future__ import annotations
import datetime as dt
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

log = logging.getLogger("ummit.recordings")

UNITS = ("B", "KB", "MB", "GB", "TB")
WHEN_FMT = "%Y-%m-%d %H:%M"


def human_bytes(b: int) -> str:
    size, unit = float(b), 0
    while size >= 1024 and unit < len(UNITS) - 1:
        size /= 1024
        unit += 1
    if unit == 0:
        return f"{b} {UNITS[0]}"
    return f"{size:.1f} {UNITS[unit]}"


def format_when(ts: dt.datetime) -> str:
    return ts.strftime(WHEN_FMT)


@dataclass(frozen=True)
class RecordingFile:
    path: Path
    size_bytes: int
    modified: dt.datetime

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def size(self) -> str:
        return human_bytes(self.size_bytes)

    @property
    def when(self) -> str:
        return format_when(self.modified)


class ListingState(Enum):
    EMPTY = "empty"
    ERROR = "error"
    ITEMS = "items"


@dataclass(frozen=True)
class Listing:
    """Result of one directory scan.

    An unreadable directory (``ERROR``) and a directory without recordings
    (``EMPTY``) are kept apart so the table can say which one it is.
    """

    state: ListingState
    files: Tuple[RecordingFile, ...] = ()
    reason: Optional[str] = None

    @classmethod
    def empty(cls) -> "Listing":
        return cls(ListingState.EMPTY)

    @classmethod
    def error(cls, reason: str) -> "Listing":
        return cls(ListingState.ERROR, reason=reason)

    @classmethod
    def items(cls, files: Sequence[RecordingFile]) -> "Listing":
        return cls(ListingState.ITEMS, tuple(files)) if files else cls.empty()

    def __iter__(self) -> Iterator[RecordingFile]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)

    def names(self) -> List[str]:
        return [f.name for f in self.files]


class RecordingDirectoryIndex:
    def __init__(self, extensions: Sequence[str] = ("mp4", "mkv", "webm"), token: str = "wf-recorder"):
        self.extensions = {e.lower().lstrip(".") for e in extensions}
        self.token = token

    def matches(self, name: str) -> bool:
        ext = Path(name).suffix.lower().lstrip(".")
        return ext in self.extensions or self.token in name

    def _scan(self, directory: Path) -> Iterator[Tuple[os.DirEntry, os.stat_result]]:
        with os.scandir(directory) as it:
            for entry in it:
                try:
                    if not entry.is_file():
                        continue
                    st = entry.stat()
                except OSError as e:
                    log.debug("skipping %s: %s", entry.path, e)
                    continue
                yield entry, st

    def list(self, directory: Path) -> Listing:
        directory = Path(directory)
        found = []
        try:
            for entry, st in self._scan(directory):
                if self.matches(entry.name):
                    found.append((st.st_mtime, RecordingFile(
                        Path(entry.path),
                        st.st_size,
                        dt.datetime.fromtimestamp(st.st_mtime),
                    )))
        except OSError as e:
            log.warning("cannot list %s: %s", directory, e)
            return Listing.error(e.strerror or str(e))
        # newest first, ordered on the raw mtime rather than the rendered label
        found.sort(key=lambda pair: pair[0], reverse=True)
        return Listing.items([f for _, f in found])

    def latest(self, directory: Path, extension: str) -> Optional[Path]:
        """Most recently modified ``*.extension`` file, or ``None``."""
        ext = extension.lower().lstrip(".")
        newest: Optional[Tuple[float, Path]] = None
        try:
            for entry, st in self._scan(Path(directory)):
                if Path(entry.name).suffix.lower().lstrip(".") != ext:
                    continue
                if newest is None or st.st_mtime > newest[0]:
                    newest = (st.st_mtime, Path(entry.path))
        except OSError as e:
            log.warning("cannot scan %s: %s", directory, e)
            return None
        return newest[1] if newest else None

    def delete(self, path: Path, confirm: Callable[[str], bool]) -> bool:
        """Remove ``path`` once ``confirm(name)`` says yes."""
        p = Path(path)
        if not p.is_file():
            log.warning("not deleting %s: no such file", p)
            return False
        if not confirm(p.name):
            return False
        try:
            p.unlink()
        except OSError as e:
            log.error("Failed to delete file %s: %s", p, e)
            return False
        log.info("Deleted file: %s", p)
        return True
