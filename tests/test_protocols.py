from pathlib import Path

import pytest

from autoredshift.backends.protocols import (
    DisplayBackend,
    ErrorSimulatingDisplayBackend,
    MockDisplayBackend,
    MockWallpaperBackend,
    WallpaperBackend,
    assert_settings_applied,
)
from autoredshift.errors import DisplayQueryError, ExternalCommandError


class TestMockDisplayBackend:
    def test_satisfies_protocol(self):
        assert isinstance(MockDisplayBackend(), DisplayBackend)

    def test_set_calls_update_state(self):
        backend = MockDisplayBackend()
        backend.set_temperature(3000)
        backend.set_brightness(0.6)

        assert backend.get_temperature() == 3000
        assert backend.get_brightness() == 0.6
        assert [c["property"] for c in backend.set_calls] == ["temperature", "brightness"]

    def test_unknown_state_raises_query_error(self):
        backend = MockDisplayBackend(temperature=None, brightness=None)
        with pytest.raises(DisplayQueryError):
            backend.get_temperature()
        with pytest.raises(DisplayQueryError):
            backend.get_brightness()

    def test_reset_call_history(self):
        backend = MockDisplayBackend()
        backend.set_temperature(3000)
        backend.reset_call_history()
        assert backend.set_calls == []


class TestErrorSimulatingDisplayBackend:
    def test_failing_getter_raises_query_error(self):
        backend = ErrorSimulatingDisplayBackend(fail_on_methods=["get_brightness"])
        assert backend.get_temperature() == 6500.0
        with pytest.raises(DisplayQueryError):
            backend.get_brightness()

    def test_failing_setter_raises_command_error(self):
        backend = ErrorSimulatingDisplayBackend(fail_on_methods=["set_temperature"])
        with pytest.raises(ExternalCommandError) as excinfo:
            backend.set_temperature(3000)
        assert not isinstance(excinfo.value, DisplayQueryError)
        assert backend.set_calls == []


class TestMockWallpaperBackend:
    def test_records_paths(self):
        backend = MockWallpaperBackend()
        assert isinstance(backend, WallpaperBackend)
        backend.set_wallpaper(Path("/walls/day.jpg"))
        assert backend.wallpaper_calls == [Path("/walls/day.jpg")]

    def test_failure(self):
        with pytest.raises(ExternalCommandError):
            MockWallpaperBackend(fail=True).set_wallpaper(Path("/walls/day.jpg"))


class TestAssertionHelpers:
    def test_assert_settings_applied_success(self):
        backend = MockDisplayBackend()
        backend.set_temperature(4500)
        backend.set_brightness(0.75)
        assert assert_settings_applied(backend, 4500, 0.75) is True

    def test_assert_settings_applied_no_calls(self):
        with pytest.raises(AssertionError) as excinfo:
            assert_settings_applied(MockDisplayBackend(), 4500, 0.75)
        assert "was not called" in str(excinfo.value)

    def test_assert_settings_applied_wrong_value(self):
        backend = MockDisplayBackend()
        backend.set_temperature(4000)
        backend.set_brightness(0.75)
        with pytest.raises(AssertionError) as excinfo:
            assert_settings_applied(backend, 4500, 0.75)
        assert "Expected temperature" in str(excinfo.value)
