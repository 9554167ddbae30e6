"""
Handing files and folders to other desktop programs.
"""

from __future__ import annotations
import logging
import subprocess
import webbrowser
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from paths import ensure_directory

log = logging.getLogger("ummit.launcher")

# (name, argv builder) in the order they are tried
FOLDER_OPENERS: List[Tuple[str, Callable[[str], List[str]]]] = [
    ("xdg-open", lambda d: ["xdg-open", d]),
    ("nautilus", lambda d: ["nautilus", d]),
    ("thunar", lambda d: ["thunar", d]),
    ("dolphin", lambda d: ["dolphin", d]),
    ("kitty", lambda d: ["kitty", "--directory", d]),
    ("gnome-terminal", lambda d: ["gnome-terminal", "--working-directory", d]),
]


def spawn(argv: Sequence[str]) -> None:
    subprocess.Popen(
        list(argv),
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


def open_folder(
    directory: Path,
    openers: Sequence[Tuple[str, Callable[[str], List[str]]]] = FOLDER_OPENERS,
    run: Callable[[Sequence[str]], None] = spawn,
) -> Optional[str]:
    """Open ``directory`` with the first program that launches.

    Returns the name of that program, or ``None`` if nothing could be started.
    """
    log.info("Opening recordings folder: %s", directory)
    try:
        target = str(ensure_directory(directory))
    except OSError as e:
        log.error("Error creating directory %s: %s", directory, e)
        return None
    for name, argv in openers:
        try:
            run(argv(target))
        except OSError as e:
            log.info("%s failed (%s), trying next opener", name, e)
            continue
        return name
    log.error("All file managers and terminals failed for %s", target)
    return None


def open_file(path: Path, run: Callable[[Sequence[str]], None] = spawn) -> bool:
    try:
        run(["xdg-open", str(path)])
    except OSError as e:
        log.warning("cannot open %s: %s", path, e)
        return False
    return True


def open_url(url: str) -> bool:
    return webbrowser.open(url)
