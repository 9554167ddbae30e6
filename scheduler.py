from __future__ import annotations
import logging
from typing import Any, Callable

log = logging.getLogger("ummit.scheduler")


class PollingScheduler:
    """Re-runs ``refresh`` every ``interval_ms`` while the file list is shown.

    ``after`` is Tk's ``widget.after``. The timer is armed once and keeps
    rescheduling itself for the life of the window; hiding the list only
    turns the ticks into no-ops.
    """

    def __init__(
        self,
        after: Callable[[int, Callable[[], None]], Any],
        refresh: Callable[[], None],
        interval_ms: int = 1000,
    ):
        self.after = after
        self.refresh = refresh
        self.interval_ms = interval_ms
        self.visible = False
        self._armed = False

    def start(self) -> None:
        if self._armed:
            return
        self._armed = True
        self.after(self.interval_ms, self._tick)

    def set_visible(self, visible: bool) -> None:
        was = self.visible
        self.visible = visible
        if visible and not was:
            self.refresh()

    def _tick(self) -> None:
        try:
            if self.visible:
                self.refresh()
        finally:
            self.after(self.interval_ms, self._tick)
