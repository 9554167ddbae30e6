"""
Desktop notifications.

The panel only ever *tells* the user something; delivery is best effort and
a failed notification never affects the caller.
"""

from __future__ import annotations
import logging
import subprocess
from dataclasses import dataclass
from typing import List, Sequence

log = logging.getLogger("ummit.notify")

# hyprctl notify icon ids
ICON_WARNING = 0
ICON_INFO = 1
ICON_HINT = 2
ICON_ERROR = 3
ICON_OK = 5

GREEN = "rgb(00FF00)"
RED = "rgb(FF0000)"


@dataclass(frozen=True)
class Outcome:
    ok: bool
    message: str


class NotificationSink:
    """Base sink; subclasses override ``notify``."""

    def notify(
        self, message: str, icon: int = ICON_INFO, timeout_ms: int = 3000, color: str = GREEN
    ) -> None:
        raise NotImplementedError

    def outcome(self, result: Outcome, timeout_ms: int = 3000) -> None:
        if result.ok:
            self.notify(result.message, ICON_HINT, timeout_ms, GREEN)
        else:
            self.notify(result.message, ICON_WARNING, timeout_ms, RED)


class HyprctlNotifier(NotificationSink):
    """Sends ``hyprctl notify`` popups; spawn errors are logged and dropped."""

    def __init__(self, executable: str = "hyprctl", font_size: int = 35):
        self.executable = executable
        self.font_size = font_size

    def command(self, message: str, icon: int, timeout_ms: int, color: str) -> List[str]:
        return [
            self.executable,
            "notify",
            str(icon),
            str(timeout_ms),
            color,
            f"fontsize:{self.font_size} {message}",
        ]

    def notify(self, message, icon=ICON_INFO, timeout_ms=3000, color=GREEN):
        try:
            subprocess.Popen(
                self.command(message, icon, timeout_ms, color),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            log.debug("notification not delivered: %s", e)


class LogNotifier(NotificationSink):
    """Used outside Hyprland: notifications only end up in the log."""

    def notify(self, message, icon=ICON_INFO, timeout_ms=3000, color=GREEN):
        level = logging.WARNING if color == RED else logging.INFO
        log.log(level, "notify: %s", message)


class FanoutNotifier(NotificationSink):
    def __init__(self, sinks: Sequence[NotificationSink]):
        self.sinks = list(sinks)

    def notify(self, message, icon=ICON_INFO, timeout_ms=3000, color=GREEN):
        for s in self.sinks:
            s.notify(message, icon, timeout_ms, color)
