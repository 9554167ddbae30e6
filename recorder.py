"""
wf-recorder session control.

The recorder runs as an independent process. We never keep its PID: whether
a recording is in progress is decided by looking the process up by name, so
a recorder started before the panel (or surviving a panel restart) is still
found and can be stopped.
"""

from __future__ import annotations
import datetime as dt
import logging
import os
import signal
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from config import PanelConfig
from notify import GREEN, ICON_INFO, ICON_OK, NotificationSink
from paths import ensure_directory
from recordings import RecordingDirectoryIndex
from session import SessionState

log = logging.getLogger("ummit.recorder")


# ── Errors ─────────────────────────────────────────────────────────
class RecorderError(Exception):
    """Base for every start/stop failure; ``status`` goes to the status line."""

    status = "Error: recorder failure"

    def __init__(self, status: Optional[str] = None, cause: Optional[BaseException] = None):
        self.status = status or self.status
        self.cause = cause
        super().__init__(self.status)


class AlreadyRunning(RecorderError):
    status = "Error: Recording already in progress"


class DirectoryUnavailable(RecorderError):
    status = "Error: Failed to create recording directory"


class LaunchFailed(RecorderError):
    status = "Error: Failed to start wf-recorder"


class NotRunning(RecorderError):
    status = "wf-recorder is not running"


class SignalFailed(RecorderError):
    status = "Error: Could not signal wf-recorder"


# ── OS collaborators ───────────────────────────────────────────────
class ProcessFinder:
    """``pidof``-based lookup. Raises ``OSError`` if the tool can't run."""

    def __init__(self, name: str, tool: str = "pidof"):
        self.name, self.tool = name, tool

    def pids(self) -> List[int]:
        res = subprocess.run(
            [self.tool, self.name], capture_output=True, text=True, check=False
        )
        return [int(tok) for tok in res.stdout.split() if tok.isdigit()]


def launch_detached(argv: Sequence[str]) -> None:
    subprocess.Popen(
        list(argv),
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


def interrupt(pid: int) -> None:
    os.kill(pid, signal.SIGINT)


@dataclass(frozen=True)
class StopReport:
    status: str
    saved: Optional[Path] = None


# ── Controller ─────────────────────────────────────────────────────
class RecorderProcessController:
    def __init__(
        self,
        config: PanelConfig,
        sink: NotificationSink,
        index: Optional[RecordingDirectoryIndex] = None,
        finder: Optional[ProcessFinder] = None,
        launch: Callable[[Sequence[str]], None] = launch_detached,
        send_signal: Callable[[int], None] = interrupt,
        clock: Callable[[], dt.datetime] = dt.datetime.now,
    ):
        self.cfg = config
        self.sink = sink
        self.index = index or RecordingDirectoryIndex(config.video_exts, config.name_token)
        self.finder = finder or ProcessFinder(config.recorder, config.lookup_tool)
        self.launch = launch
        self.send_signal = send_signal
        self.clock = clock

    def output_path(self, directory: Path) -> Path:
        stamp = self.clock().strftime(self.cfg.timestamp_fmt)
        return Path(directory) / self.cfg.output_name(stamp)

    def command(self, output: Path) -> List[str]:
        return [self.cfg.recorder, self.cfg.audio_flag, self.cfg.file_flag, str(output)]

    def _running_pids(self) -> List[int]:
        try:
            return self.finder.pids()
        except OSError as e:
            log.warning("process lookup failed: %s", e)
            return []

    def reconcile(self, state: SessionState) -> bool:
        """Make ``state.is_recording`` agree with what the OS reports."""
        running = bool(self._running_pids())
        if running != state.is_recording:
            log.info("recorder state drifted (believed %s, observed %s)", state.is_recording, running)
            if running:
                state.is_recording = True
            else:
                state.mark_idle()
        return running

    def start(self, state: SessionState) -> Path:
        if state.is_recording:
            raise AlreadyRunning()
        log.info("Starting %s...", self.cfg.recorder)
        pids = self._running_pids()
        if pids:
            log.info("%s is already running with PID: %s", self.cfg.recorder, pids)
            raise AlreadyRunning(f"Error: {self.cfg.recorder} is already running")

        try:
            directory = ensure_directory(state.recording_directory)
        except OSError as e:
            log.error("Error creating directory %s: %s", state.recording_directory, e)
            raise DirectoryUnavailable(cause=e) from e

        output = self.output_path(directory)
        try:
            self.launch(self.command(output))
        except OSError as e:
            log.error("Failed to start %s: %s", self.cfg.recorder, e)
            raise LaunchFailed(f"Error: Failed to start {self.cfg.recorder}", cause=e) from e

        state.mark_recording(output)
        state.status = f"Recording to: {output}"
        self.sink.notify(
            f"  Video recording started with {self.cfg.recorder} 📹", ICON_INFO, 5000, GREEN
        )
        return output

    def stop(self, state: SessionState) -> StopReport:
        log.info("Stopping %s...", self.cfg.recorder)
        try:
            pids = self.finder.pids()
        except OSError as e:
            log.error("Error finding %s process: %s", self.cfg.recorder, e)
            state.mark_idle()
            raise NotRunning(f"Error: Could not find {self.cfg.recorder} process", cause=e) from e
        if not pids:
            log.info("%s is not running", self.cfg.recorder)
            state.mark_idle()
            raise NotRunning(f"{self.cfg.recorder} is not running")

        failures = []
        for pid in pids:
            log.info("Sending SIGINT to %s PID: %s", self.cfg.recorder, pid)
            try:
                self.send_signal(pid)
            except OSError as e:
                log.error("SIGINT to %s failed: %s", pid, e)
                failures.append(e)
        state.mark_idle()
        if len(failures) == len(pids):
            raise SignalFailed(cause=failures[-1])

        directory = Path(state.recording_directory)
        latest = self.index.latest(directory, self.cfg.container_ext)
        if latest is None:
            state.status = "Recording stopped"
            return StopReport(state.status)

        state.status = f"Saved: {latest.name}"
        self.sink.notify(
            f"  Video recording ended and saved to: {directory}/{latest.name} 📹",
            ICON_OK,
            5000,
            GREEN,
        )
        return StopReport(state.status, latest)
