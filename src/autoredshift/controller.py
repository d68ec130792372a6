# filepath: src/autoredshift/controller.py
"""Core controller for auto-redshift."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Final

import yaml

from autoredshift.backends.gamma import create_display_backend
from autoredshift.backends.protocols import (
    DisplayBackend,
    MockDisplayBackend,
    MockWallpaperBackend,
    WallpaperBackend,
)
from autoredshift.backends.wallpaper import SwayWallpaperBackend
from autoredshift.common.enums import DaySection
from autoredshift.errors import DisplayQueryError, ExternalCommandError
from autoredshift.evaluation.display import DisplaySettings, calculate_display_settings
from autoredshift.evaluation.time import MAX_REDSHIFT, TimeEvaluation, Waketime, evaluate_time
from autoredshift.settings.user import AppConfig
from autoredshift.utils.time import TimeUtils

TEST_CONFIG_YAML = """\
brightness_range: [0.5, 1.0]
temperature_range: [2500, 6500]
wallpapers:
  root: /tmp/wallpapers
  morning: morning.jpg
  day: day.jpg
  evening: evening.jpg
  night: night.jpg
"""

logger: Final = logging.getLogger(__name__)


@dataclass(frozen=True)
class TickOutcome:
    """What a single tick computed and did."""

    evaluation: TimeEvaluation
    settings: DisplaySettings
    applied: bool
    wallpaper: Path | None = None


class RedshiftController:
    """Main controller class for auto-redshift.

    This class ties the pure calculations to the outside world:
    - Evaluating the clock against the wake time
    - Deriving target temperature and brightness from the config ranges
    - Reading the currently applied gamma state
    - Applying new settings when they are dimmer and warmer (the ratchet)
    - Switching the wallpaper to match the day section

    Backends are injectable, which keeps the controller testable without
    a running compositor.
    """

    def __init__(
        self,
        config: AppConfig,
        display_backend: DisplayBackend | None = None,
        wallpaper_backend: WallpaperBackend | None = None,
        debug: bool = False,
    ):
        """Initialize the controller.

        Args:
            config: Loaded application config
            display_backend: Optional custom gamma backend
            wallpaper_backend: Optional custom wallpaper backend
            debug: Enable debug logging
        """
        # Configure logging
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            format="%(asctime)s [%(levelname)s] %(message)s",
        )

        self.config = config

        # Allow dependency injection or create defaults
        self.display_backend = display_backend or create_display_backend(
            config.brightness_backend
        )
        self.wallpaper_backend = wallpaper_backend or SwayWallpaperBackend()

    def settings_for(self, redshift: float) -> DisplaySettings:
        """Compute display settings for a redshift value using the config ranges."""
        return calculate_display_settings(
            redshift, self.config.brightness_range, self.config.temperature_range
        )

    def wallpaper_for(self, section: DaySection) -> Path:
        """Resolve the wallpaper file for a day section."""
        return self.config.wallpapers.path_for(section)

    def current_settings(self) -> DisplaySettings | None:
        """Read the applied temperature and brightness.

        Returns:
            Current DisplaySettings, or None if the service cannot tell
        """
        try:
            return DisplaySettings(
                temperature=self.display_backend.get_temperature(),
                brightness=self.display_backend.get_brightness(),
            )
        except DisplayQueryError as exc:
            logger.warning("Could not read current display state: %s", exc)
            return None

    def apply_settings(self, settings: DisplaySettings) -> None:
        """Push settings to the display backend.

        Raises:
            ExternalCommandError: If the backend rejects either value
        """
        self.display_backend.set_temperature(settings.temperature)
        self.display_backend.set_brightness(settings.brightness)
        logger.info(
            "Applied %.0fK, brightness %.2f", settings.temperature, settings.brightness
        )

    def apply_redshift(self, redshift: float) -> DisplaySettings:
        """Apply a literal redshift value right away, bypassing the ratchet.

        Used for manual calibration. The value is clamped to [0, MAX_REDSHIFT].

        Raises:
            ExternalCommandError: If the backend rejects either value
        """
        clamped = min(max(redshift, 0.0), MAX_REDSHIFT)
        if clamped != redshift:
            logger.warning("Redshift %.2f clamped to %.2f", redshift, clamped)
        settings = self.settings_for(clamped)
        self.apply_settings(settings)
        return settings

    def _ratchet(self, target: DisplaySettings) -> bool:
        current = self.current_settings()
        if current is not None and not (
            target.temperature < current.temperature and target.brightness < current.brightness
        ):
            logger.debug(
                "Target %.0fK/%.2f not below current %.0fK/%.2f → keeping current",
                target.temperature,
                target.brightness,
                current.temperature,
                current.brightness,
            )
            return False

        try:
            self.apply_settings(target)
        except ExternalCommandError as exc:
            logger.warning("Failed to apply display settings: %s", exc)
            return False
        return True

    def _switch_wallpaper(self, section: DaySection) -> Path | None:
        path = self.wallpaper_for(section)
        try:
            self.wallpaper_backend.set_wallpaper(path)
        except ExternalCommandError as exc:
            logger.warning("Failed to set %s wallpaper: %s", section, exc)
            return None
        logger.debug("Wallpaper set to %s", path)
        return path

    def tick(
        self,
        waketime: Waketime,
        n_hours: float = 4.0,
        wallpapers: bool = False,
        now: datetime | None = None,
    ) -> TickOutcome:
        """Run one evaluation cycle.

        This is the main workflow, orchestrating:
        1. Evaluating the current time against the wake time
        2. Calculating target display settings
        3. Applying them if they are dimmer and warmer than the current ones
        4. Switching the wallpaper if enabled

        Backend failures are logged and never propagate.

        Args:
            waketime: Wake time anchor
            n_hours: Length of the evening transition in hours
            wallpapers: Whether to switch the wallpaper
            now: Clock reading (default: current local time)

        Returns:
            TickOutcome describing the evaluation and the side effects
        """
        now = now or TimeUtils.now_localized()
        evaluation = evaluate_time(now.hour, now.minute, waketime, n_hours)
        settings = self.settings_for(evaluation.redshift)

        logger.info(
            "%s: %s, %d min since wake, redshift %.2f → %.0fK / %.2f",
            TimeUtils.format_datetime(now, "%H:%M"),
            evaluation.day_section,
            evaluation.minutes_since_wake,
            evaluation.redshift,
            settings.temperature,
            settings.brightness,
        )

        applied = False
        if evaluation.redshift != 0:
            applied = self._ratchet(settings)
        else:
            logger.debug("No redshift in the %s, display left as is", evaluation.day_section)

        wallpaper = self._switch_wallpaper(evaluation.day_section) if wallpapers else None

        return TickOutcome(
            evaluation=evaluation,
            settings=settings,
            applied=applied,
            wallpaper=wallpaper,
        )

    @classmethod
    def create_for_testing(
        cls,
        config: AppConfig | None = None,
        current_settings: tuple[float | None, float | None] = (6500.0, 1.0),
        display_backend: DisplayBackend | None = None,
        wallpaper_backend: WallpaperBackend | None = None,
    ) -> RedshiftController:
        """Create a RedshiftController wired to in-memory backends.

        Args:
            config: Config to use (TEST_CONFIG_YAML if None)
            current_settings: (temperature, brightness) reported by the mock backend
            display_backend: Custom display backend instead of the mock
            wallpaper_backend: Custom wallpaper backend instead of the mock

        Returns:
            RedshiftController instance configured for testing
        """
        if config is None:
            config = AppConfig.model_validate(yaml.safe_load(TEST_CONFIG_YAML))

        temperature, brightness = current_settings
        return cls(
            config,
            display_backend=display_backend
            or MockDisplayBackend(temperature=temperature, brightness=brightness),
            wallpaper_backend=wallpaper_backend or MockWallpaperBackend(),
        )
