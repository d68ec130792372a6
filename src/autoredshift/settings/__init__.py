"""Application settings management.

This package provides:
- AppConfig: User-configurable settings loaded from auto_redshift.toml
- Wallpapers: Per day-section wallpaper file names
- BrightnessBackend: Choice of brightness control mechanism
"""

from autoredshift.settings.user import AppConfig, BrightnessBackend, Wallpapers

__all__ = ["AppConfig", "BrightnessBackend", "Wallpapers"]
