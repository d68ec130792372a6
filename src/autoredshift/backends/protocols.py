# src/autoredshift/backends/protocols.py
from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from autoredshift.errors import DisplayQueryError, ExternalCommandError

# Executes an argv and returns stdout; see backends.command.run_command
CommandRunner = Callable[[Sequence[str]], str]


@runtime_checkable
class DisplayBackend(Protocol):
    """Protocol defining the interface for gamma control services.

    Implementations query and set the color temperature and brightness
    currently applied to the screen. Queries raise ``DisplayQueryError``
    when the current state cannot be determined; setters raise
    ``ExternalCommandError`` when the service rejects the call.
    """

    def get_temperature(self) -> float:
        """Return the currently applied color temperature in Kelvin."""
        ...

    def get_brightness(self) -> float:
        """Return the currently applied brightness (1.0 is full)."""
        ...

    def set_temperature(self, value: float) -> None:
        """Apply a color temperature in Kelvin."""
        ...

    def set_brightness(self, value: float) -> None:
        """Apply a brightness value."""
        ...


@runtime_checkable
class WallpaperBackend(Protocol):
    """Protocol for setting the desktop background image."""

    def set_wallpaper(self, image_path: Path) -> None:
        """Show an image on all outputs, scaled to fill.

        Args:
            image_path: Absolute path to the image file
        """
        ...


class MockDisplayBackend:
    """In-memory implementation of DisplayBackend for testing.

    A current value of ``None`` makes the matching query fail the way an
    unreachable gamma service does.
    """

    def __init__(
        self,
        temperature: float | None = 6500.0,
        brightness: float | None = 1.0,
    ):
        self.temperature = temperature
        self.brightness = brightness
        self.set_calls: list[dict[str, object]] = []

    def get_temperature(self) -> float:
        if self.temperature is None:
            raise DisplayQueryError(["mock", "temperature.get"], "no current temperature")
        return self.temperature

    def get_brightness(self) -> float:
        if self.brightness is None:
            raise DisplayQueryError(["mock", "brightness.get"], "no current brightness")
        return self.brightness

    def set_temperature(self, value: float) -> None:
        self.set_calls.append({"property": "temperature", "value": value})
        self.temperature = value

    def set_brightness(self, value: float) -> None:
        self.set_calls.append({"property": "brightness", "value": value})
        self.brightness = value

    def reset_call_history(self) -> None:
        """Reset the call history for testing."""
        self.set_calls = []


class ErrorSimulatingDisplayBackend(MockDisplayBackend):
    """Display backend mock that can simulate service failures."""

    def __init__(self, fail_on_methods: list[str] | None = None, **kwargs: float | None):
        """Initialize with optional methods that should fail.

        Args:
            fail_on_methods: List of method names that should raise exceptions
        """
        super().__init__(**kwargs)
        self.fail_on_methods = fail_on_methods or []

    def _maybe_fail(self, method: str) -> None:
        if method not in self.fail_on_methods:
            return
        if method.startswith("get_"):
            raise DisplayQueryError(["mock", method], "Simulated gamma service failure")
        raise ExternalCommandError(["mock", method], "Simulated gamma service failure")

    def get_temperature(self) -> float:
        self._maybe_fail("get_temperature")
        return super().get_temperature()

    def get_brightness(self) -> float:
        self._maybe_fail("get_brightness")
        return super().get_brightness()

    def set_temperature(self, value: float) -> None:
        self._maybe_fail("set_temperature")
        super().set_temperature(value)

    def set_brightness(self, value: float) -> None:
        self._maybe_fail("set_brightness")
        super().set_brightness(value)


class MockWallpaperBackend:
    """Mock implementation of WallpaperBackend for testing."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.wallpaper_calls: list[Path] = []

    def set_wallpaper(self, image_path: Path) -> None:
        if self.fail:
            raise ExternalCommandError(["mock", "bg"], "Simulated wallpaper failure")
        self.wallpaper_calls.append(image_path)


def assert_settings_applied(
    mock_backend: MockDisplayBackend,
    expected_temperature: float,
    expected_brightness: float,
) -> bool:
    """Assert that the last applied settings match the expected values.

    Returns:
        True if the assertion passes, raises AssertionError otherwise
    """
    assert len(mock_backend.set_calls) > 0, "Display backend was not called"
    applied = {call["property"]: call["value"] for call in mock_backend.set_calls}
    assert applied.get("temperature") == expected_temperature, (
        f"Expected temperature {expected_temperature}, got {applied.get('temperature')}"
    )
    assert applied.get("brightness") == expected_brightness, (
        f"Expected brightness {expected_brightness}, got {applied.get('brightness')}"
    )
    return True
