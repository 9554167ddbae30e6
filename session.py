from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class SessionState:
    """Per-window record shared by the path, recorder and file-list code.

    Only the Tk thread touches it, so it is passed around by reference and
    never locked.
    """

    recording_directory: Path
    is_recording: bool = False
    current_output: Optional[Path] = None
    status: str = "Status: Ready"

    def mark_recording(self, output: Path) -> None:
        self.is_recording = True
        self.current_output = output

    def mark_idle(self) -> None:
        self.is_recording = False
        self.current_output = None
