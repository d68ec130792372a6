"""Adapters for the external display and wallpaper services."""

from autoredshift.backends.gamma import (
    BrightnessctlBackend,
    WlrGammaBackend,
    create_display_backend,
)
from autoredshift.backends.protocols import DisplayBackend, WallpaperBackend
from autoredshift.backends.wallpaper import SwayWallpaperBackend

__all__ = [
    "BrightnessctlBackend",
    "DisplayBackend",
    "SwayWallpaperBackend",
    "WallpaperBackend",
    "WlrGammaBackend",
    "create_display_backend",
]
