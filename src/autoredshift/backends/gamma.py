"""Gamma control through ``wlr_gamma_service`` and ``brightnessctl``."""

from __future__ import annotations

import logging
from typing import Final

from autoredshift.backends.command import run_command
from autoredshift.backends.protocols import CommandRunner, DisplayBackend
from autoredshift.errors import DisplayQueryError, ExternalCommandError
from autoredshift.settings.user import BrightnessBackend

logger: Final = logging.getLogger(__name__)

GAMMA_SERVICE: Final = "net.zoidplex.wlr_gamma_service"
GAMMA_OBJECT_PATH: Final = "/net/zoidplex/wlr_gamma_service"


def parse_gdbus_number(output: str) -> float:
    """Extract the number from a gdbus tuple reply such as ``(6500,)``.

    A GVariant type annotation (``(uint16 6500,)``) is tolerated.

    Raises:
        ValueError: If no number can be found
    """
    text = output.strip().strip("(),").strip()
    if not text:
        raise ValueError("empty reply")
    return float(text.split()[-1])


class WlrGammaBackend:
    """Display backend talking to wlr_gamma_service over the session bus."""

    def __init__(self, runner: CommandRunner = run_command) -> None:
        self._run = runner

    @staticmethod
    def _method(prop: str, action: str) -> list[str]:
        return [
            "gdbus",
            "call",
            "-e",
            "-d",
            GAMMA_SERVICE,
            "-o",
            GAMMA_OBJECT_PATH,
            "-m",
            f"{GAMMA_SERVICE}.{prop}.{action}",
        ]

    def _query(self, prop: str) -> float:
        command = self._method(prop, "get")
        try:
            output = self._run(command)
        except ExternalCommandError as exc:
            raise DisplayQueryError(command, exc.message, exc.stderr, exc) from exc

        logger.debug("%s.get replied %r", prop, output.strip())
        try:
            return parse_gdbus_number(output)
        except ValueError as exc:
            raise DisplayQueryError(
                command, f"unparsable reply {output.strip()!r}", original_error=exc
            ) from exc

    def get_temperature(self) -> float:
        return self._query("temperature")

    def get_brightness(self) -> float:
        return self._query("brightness")

    def set_temperature(self, value: float) -> None:
        self._run(self._method("temperature", "set") + [str(round(value))])

    def set_brightness(self, value: float) -> None:
        self._run(self._method("brightness", "set") + [str(round(value, 4))])


class BrightnessctlBackend(WlrGammaBackend):
    """Temperature through the gamma service, brightness through the backlight.

    Brightness is exchanged as a fraction (1.0 = 100 %) so the configured
    ``brightness_range`` means the same thing for both backends.
    """

    def get_brightness(self) -> float:
        command = ["brightnessctl", "-m", "info"]
        try:
            output = self._run(command)
        except ExternalCommandError as exc:
            raise DisplayQueryError(command, exc.message, exc.stderr, exc) from exc

        # device,class,current,percent%,max
        fields = output.strip().splitlines()[0].split(",") if output.strip() else []
        try:
            return float(fields[3].rstrip("%")) / 100
        except (IndexError, ValueError) as exc:
            raise DisplayQueryError(
                command, f"unparsable reply {output.strip()!r}", original_error=exc
            ) from exc

    def set_brightness(self, value: float) -> None:
        self._run(["brightnessctl", "-q", "set", f"{round(value * 100)}%"])


def create_display_backend(
    kind: BrightnessBackend = BrightnessBackend.WLR_GAMMA,
    runner: CommandRunner = run_command,
) -> DisplayBackend:
    """Create the display backend selected in the config.

    Args:
        kind: Configured brightness backend
        runner: Command runner (injectable for tests)

    Returns:
        A DisplayBackend implementation
    """
    if kind is BrightnessBackend.BRIGHTNESSCTL:
        return BrightnessctlBackend(runner)
    return WlrGammaBackend(runner)
