"""
Runtime configuration for the UmmItOS recording panel.

Values are read once at startup (defaults + environment overrides) and are
never written back: the panel keeps no preferences between sessions.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional, Tuple


def default_recording_dir() -> Path:
    user = os.getenv("USER") or "user"
    home = Path(os.getenv("HOME") or f"/home/{user}")
    return home / "Videos" / "wf-recorder"


@dataclass(frozen=True)
class PanelConfig:
    recorder: str = "wf-recorder"
    audio_flag: str = "-a"
    file_flag: str = "--file"
    container_ext: str = "mp4"
    video_exts: Tuple[str, ...] = ("mp4", "mkv", "webm")
    name_token: str = "wf-recorder"
    timestamp_fmt: str = "%Y-%m-%d-%H-%M-%S"
    poll_ms: int = 1000
    lookup_tool: str = "pidof"
    notifier: str = "hyprctl"
    recording_dir: Path = field(default_factory=default_recording_dir)

    def output_name(self, stamp: str) -> str:
        return f"{self.name_token}-{stamp}.{self.container_ext}"


def load_config(environ: Optional[Mapping[str, str]] = None) -> PanelConfig:
    env = os.environ if environ is None else environ
    cfg = PanelConfig()
    overrides = {}
    if env.get("UMMIT_RECORD_DIR"):
        overrides["recording_dir"] = Path(env["UMMIT_RECORD_DIR"]).expanduser()
    if env.get("UMMIT_RECORDER"):
        overrides["recorder"] = env["UMMIT_RECORDER"]
    try:
        poll = int(env.get("UMMIT_POLL_MS", ""))
        if poll > 0:
            overrides["poll_ms"] = poll
    except ValueError:
        pass
    return replace(cfg, **overrides) if overrides else cfg
