from __future__ import annotations
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional

PACMAN_CONF = Path("/etc/pacman.conf")


@dataclass(frozen=True)
class Requirement:
    title: str
    message: str


def hyprctl_works() -> bool:
    try:
        res = subprocess.run(
            ["hyprctl", "version"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return False
    return res.returncode == 0


def check_system_requirements(
    environ: Optional[Mapping[str, str]] = None,
    pacman_conf: Path = PACMAN_CONF,
    hyprctl: Callable[[], bool] = hyprctl_works,
) -> List[Requirement]:
    """Unmet startup preconditions; an empty list means good to go."""
    env = os.environ if environ is None else environ
    if env.get("UMMIT_SKIP_CHECKS") == "1":
        return []
    if not pacman_conf.exists():
        return [Requirement(
            "System Requirement Error",
            "This application is designed for UmmItOS only.\n\n"
            "UmmItOS is required to run this application.",
        )]
    desktop = env.get("XDG_CURRENT_DESKTOP", "").lower()
    if "hyprland" in desktop or hyprctl():
        return []
    return [Requirement(
        "Window Manager Error",
        "This application requires Hyprland window manager.\n\n"
        "Please start Hyprland or run this within a Hyprland session.",
    )]


def in_hyprland(environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    return "hyprland" in env.get("XDG_CURRENT_DESKTOP", "").lower()


def system_info(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    env = os.environ if environ is None else environ
    return {
        "User": env.get("USER") or "Unknown",
        "Home": env.get("HOME") or "Unknown",
        "Desktop": env.get("XDG_CURRENT_DESKTOP") or "Unknown",
    }
