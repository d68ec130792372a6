"""Wallpaper control through sway IPC."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

from autoredshift.backends.command import run_command
from autoredshift.backends.protocols import CommandRunner

logger: Final = logging.getLogger(__name__)


class SwayWallpaperBackend:
    """Sets the background of every sway output with ``swaymsg``."""

    def __init__(self, runner: CommandRunner = run_command) -> None:
        self._run = runner

    def set_wallpaper(self, image_path: Path) -> None:
        if not image_path.exists():
            logger.warning("Wallpaper %s does not exist", image_path)
        self._run(["swaymsg", "output", "*", "bg", str(image_path), "fill"])
