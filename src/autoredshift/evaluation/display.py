# src/autoredshift/evaluation/display.py
"""Mapping from redshift intensity to concrete display settings."""

from __future__ import annotations

from dataclasses import dataclass

from autoredshift.evaluation.time import MAX_REDSHIFT


@dataclass(frozen=True)
class DisplaySettings:
    """Target gamma values for the display."""

    temperature: float
    brightness: float


def calculate_display_settings(
    redshift: float,
    brightness_range: tuple[float, float],
    temperature_range: tuple[int, int],
) -> DisplaySettings:
    """Interpolate display settings for a redshift value.

    Redshift 0 yields the upper end of both ranges (full daylight) and
    ``MAX_REDSHIFT`` the lower end. The redshift is not clamped here.

    Args:
        redshift: Intensity in [0, MAX_REDSHIFT]
        brightness_range: (night, day) brightness
        temperature_range: (night, day) color temperature in Kelvin

    Returns:
        DisplaySettings for the given intensity
    """
    brightness_step = (brightness_range[1] - brightness_range[0]) / MAX_REDSHIFT
    temperature_step = (temperature_range[1] - temperature_range[0]) / MAX_REDSHIFT

    temperature = temperature_range[1] - redshift * temperature_step
    brightness = brightness_range[1] - redshift * brightness_step

    return DisplaySettings(temperature=temperature, brightness=brightness)
