"""Shared fixtures: stand-ins for the OS and the desktop."""

from __future__ import annotations

import datetime as dt
from pathlib import Path

import pytest

from config import PanelConfig
from notify import GREEN, ICON_INFO, NotificationSink
from session import SessionState


class RecordingSink(NotificationSink):
    """Keeps every notification so tests can look at them."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, int, int, str]] = []

    def notify(self, message, icon=ICON_INFO, timeout_ms=3000, color=GREEN):
        self.sent.append((message, icon, timeout_ms, color))

    @property
    def messages(self) -> list[str]:
        return [m for m, *_ in self.sent]


class StubFinder:
    """Process lookup that answers from a list of PIDs."""

    def __init__(self, pids: list[int] | None = None, error: OSError | None = None) -> None:
        self.running = list(pids or [])
        self.error = error
        self.calls = 0

    def pids(self) -> list[int]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.running)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def config(tmp_path: Path) -> PanelConfig:
    return PanelConfig(recording_dir=tmp_path / "rec")


@pytest.fixture
def state(config: PanelConfig) -> SessionState:
    return SessionState(recording_directory=config.recording_dir)


@pytest.fixture
def fixed_clock():
    return lambda: dt.datetime(2024, 1, 1, 10, 0, 0)
