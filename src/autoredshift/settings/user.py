"""User-configurable settings loaded from the config file."""

from __future__ import annotations

import os
import re
import tomllib
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from autoredshift.common.enums import DaySection
from autoredshift.errors import ConfigLoadError

# Load environment variables from .env file(s)
load_dotenv()


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


def _check_ascending(value: tuple[Any, Any]) -> tuple[Any, Any]:
    low, high = value
    if high < low:
        raise ValueError(f"range must be ascending [low, high], got [{low}, {high}]")
    return value


class BrightnessBackend(str, Enum):
    """Which mechanism controls screen brightness."""

    WLR_GAMMA = "wlr_gamma"  # Software gamma via wlr_gamma_service (gdbus)
    BRIGHTNESSCTL = "brightnessctl"  # Hardware backlight via brightnessctl


class Wallpapers(BaseModel):
    """Wallpaper directory and one file name per day section."""

    model_config = ConfigDict(frozen=True)

    root: Path = Field(..., description="Directory holding the wallpapers")
    morning: str
    day: str
    evening: str
    night: str

    @field_validator("root")
    @classmethod
    def expand_root(cls, v: Path) -> Path:
        return v.expanduser()

    def filename_for(self, section: DaySection) -> str:
        """Return the configured file name for a day section."""
        if section is DaySection.MORNING:
            return self.morning
        if section is DaySection.DAY:
            return self.day
        if section is DaySection.EVENING:
            return self.evening
        return self.night

    def path_for(self, section: DaySection) -> Path:
        """Return the absolute wallpaper path for a day section."""
        return (self.root / self.filename_for(section)).absolute()


class AppConfig(BaseModel):
    """Settings read once at startup from ``auto_redshift.toml`` (or YAML).

    Ranges are two-element ``[low, high]`` arrays; the low end is applied
    at full night, the high end during the day.
    """

    model_config = ConfigDict(frozen=True)

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("~/.config/auto_redshift.toml"),
        Path("~/.config/auto_redshift.yaml"),
    ]
    CONFIG_ENV_VAR: ClassVar[str] = "AUTO_REDSHIFT_CONFIG"

    brightness_range: tuple[float, float] = Field(
        ..., description="Brightness [night, day], e.g. [0.5, 1.0]"
    )
    temperature_range: tuple[int, int] = Field(
        ..., description="Color temperature in Kelvin [night, day], e.g. [2500, 6500]"
    )
    brightness_backend: BrightnessBackend = Field(
        BrightnessBackend.WLR_GAMMA,
        description="Backend for brightness control (wlr_gamma or brightnessctl)",
    )
    wallpapers: Wallpapers

    # ---- validators ----
    @field_validator("brightness_range")
    @classmethod
    def validate_brightness(cls, v: tuple[float, float]) -> tuple[float, float]:
        if v[0] < 0:
            raise ValueError("brightness cannot be negative")
        return _check_ascending(v)

    @field_validator("temperature_range")
    @classmethod
    def validate_temperature(cls, v: tuple[int, int]) -> tuple[int, int]:
        if v[0] <= 0:
            raise ValueError("temperature must be positive")
        return _check_ascending(v)

    @classmethod
    def resolve_path(cls, path: Path | None = None) -> Path:
        """Pick the config file to read.

        An explicit path wins, then the ``AUTO_REDSHIFT_CONFIG`` environment
        variable, then the first existing default path. ``~`` is expanded.
        """
        if path is not None:
            return path.expanduser()

        env_path = os.environ.get(cls.CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path).expanduser()

        candidates = [p.expanduser() for p in cls.DEFAULT_CONFIG_PATHS]
        for candidate in candidates:
            if candidate.exists():
                return candidate
        return candidates[0]

    @classmethod
    def load(cls, path: Path | None = None) -> AppConfig:
        """Load configuration from a TOML or YAML file.

        Args:
            path: Path to config file (optional, see ``resolve_path``)

        Returns:
            Validated AppConfig object

        Raises:
            ConfigLoadError: If the file is missing, cannot be parsed or is invalid
        """
        path = cls.resolve_path(path)
        if not path.is_file():
            raise ConfigLoadError(f"Config file not found: {path}", str(path))

        try:
            raw = _interpolate_env(path.read_text(encoding="utf-8"))
            if path.suffix == ".toml":
                data = tomllib.loads(raw)
            else:
                data = yaml.safe_load(raw)
        except (OSError, tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
            raise ConfigLoadError(f"Unable to read config {path}: {exc}", str(path)) from exc

        if not isinstance(data, dict):
            raise ConfigLoadError(f"Config {path} must be a mapping of settings", str(path))

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise ConfigLoadError(f"Invalid configuration in {path}:\n{err}", str(path)) from err
