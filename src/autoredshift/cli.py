"""auto-redshift CLI application.

This module provides the command-line interface: the long-running
``start`` loop, a ``set`` command for manual calibration, a ``preview``
of the day's schedule and configuration utilities.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Final

import typer
import yaml
from pydantic import ValidationError

from autoredshift.controller import RedshiftController
from autoredshift.errors import ConfigLoadError, ExternalCommandError, WaketimeParseError
from autoredshift.evaluation.display import calculate_display_settings
from autoredshift.evaluation.time import MAX_REDSHIFT, MINUTES_PER_DAY, Waketime, evaluate_time
from autoredshift.scheduler import Scheduler
from autoredshift.settings.user import AppConfig

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Time-of-day screen redshift and wallpaper switcher", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "autoredshift.cli"

# Options for the commands
CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    dir_okay=False,
    help="Config file (default: $AUTO_REDSHIFT_CONFIG or ~/.config/auto_redshift.toml)",
)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
WAKETIME_ARGUMENT = typer.Argument(..., help='Wake time as "HH:MM"')
WALLPAPERS_OPTION = typer.Option(
    False, "--wallpapers", help="Cycle through wallpapers as day phases change"
)
N_HOURS_OPTION = typer.Option(
    4.0, "--n-hours", help="Hours of evening transition before full redshift"
)
ONCE_OPTION = typer.Option(False, "--once", "-1", help="Run one cycle then exit")
REDSHIFT_ARGUMENT = typer.Argument(..., help=f"Redshift intensity (0-{MAX_REDSHIFT:g})")
STEP_OPTION = typer.Option(30, "--step", min=1, help="Minutes between preview rows")
DST_ARGUMENT = typer.Argument(..., help="Output config.yaml")


def _load_config(ctx: typer.Context) -> AppConfig:
    try:
        return AppConfig.load(ctx.obj["config"])
    except ConfigLoadError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


def _parse_waketime(value: str) -> Waketime:
    try:
        return Waketime.parse(value)
    except WaketimeParseError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


def _check_n_hours(n_hours: float) -> float:
    if n_hours <= 0:
        raise typer.BadParameter("must be greater than 0", param_hint="--n-hours")
    return n_hours


def render_preview(
    config: AppConfig,
    waketime: Waketime,
    n_hours: float = 4.0,
    step_minutes: int = 30,
) -> list[str]:
    """Build the evaluation table for a full day starting at the wake time.

    Each row shows the clock time, day section, redshift and the
    resulting temperature and brightness.
    """
    rows: list[str] = []
    start = datetime(2000, 1, 1, waketime.hours, waketime.minutes)
    for offset in range(0, MINUTES_PER_DAY, step_minutes):
        ts = start + timedelta(minutes=offset)
        evaluation = evaluate_time(ts.hour, ts.minute, waketime, n_hours)
        settings = calculate_display_settings(
            evaluation.redshift, config.brightness_range, config.temperature_range
        )
        rows.append(
            f"{ts.hour:02}:{ts.minute:02} -> section={str(evaluation.day_section):8}, "
            f"redshift={evaluation.redshift:5.2f}, temp={settings.temperature:6.0f}K, "
            f"brightness={settings.brightness:.2f}"
        )
    return rows


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Adjust screen temperature, brightness and wallpaper by time since waking."""
    ctx.obj = {"config": config, "debug": debug}


@app.command()
def start(
    ctx: typer.Context,
    waketime: str = WAKETIME_ARGUMENT,
    wallpapers: bool = WALLPAPERS_OPTION,
    n_hours: float = N_HOURS_OPTION,
    once: bool = ONCE_OPTION,
) -> None:
    """Run the redshift loop every 30 minutes, aligned to the wake time."""
    n_hours = _check_n_hours(n_hours)
    wake = _parse_waketime(waketime)
    config = _load_config(ctx)

    controller = RedshiftController(config, debug=ctx.obj["debug"])
    scheduler = Scheduler(controller, wake, n_hours=n_hours, wallpapers=wallpapers)
    scheduler.run(once=once)


@app.command("set")
def set_redshift(
    ctx: typer.Context,
    redshift: float = REDSHIFT_ARGUMENT,
) -> None:
    """Apply a redshift value immediately (for calibration)."""
    config = _load_config(ctx)
    controller = RedshiftController(config, debug=ctx.obj["debug"])
    try:
        settings = controller.apply_redshift(redshift)
    except ExternalCommandError as exc:
        typer.secho(f"Failed to apply redshift: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"{settings.temperature:.0f}K, brightness {settings.brightness:.2f}")


@app.command()
def preview(
    ctx: typer.Context,
    waketime: str = WAKETIME_ARGUMENT,
    n_hours: float = N_HOURS_OPTION,
    step: int = STEP_OPTION,
) -> None:
    """Print the day's schedule without touching the display."""
    n_hours = _check_n_hours(n_hours)
    wake = _parse_waketime(waketime)
    config = _load_config(ctx)
    for row in render_preview(config, wake, n_hours, step):
        typer.echo(row)


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML or TOML config file against the schema."""
    try:
        AppConfig.load(file)
        typer.echo("✅ Config valid")
    except ConfigLoadError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@config_app.command("wizard")
def wizard(dst: Path = DST_ARGUMENT):
    """Interactive prompt to create a YAML config file."""
    typer.echo("Interactive config builder - press Enter for defaults.")

    while True:
        data: dict[str, Any] = {
            "brightness_range": [
                float(typer.prompt("Night brightness", default="0.5")),
                float(typer.prompt("Day brightness", default="1.0")),
            ],
            "temperature_range": [
                int(typer.prompt("Night temperature (K)", default="2500")),
                int(typer.prompt("Day temperature (K)", default="6500")),
            ],
            "brightness_backend": typer.prompt(
                "Brightness backend [wlr_gamma|brightnessctl]", default="wlr_gamma"
            ),
            "wallpapers": {
                "root": typer.prompt("Wallpaper directory", default="~/Pictures/wallpapers"),
                "morning": typer.prompt("Morning wallpaper", default="morning.jpg"),
                "day": typer.prompt("Day wallpaper", default="day.jpg"),
                "evening": typer.prompt("Evening wallpaper", default="evening.jpg"),
                "night": typer.prompt("Night wallpaper", default="night.jpg"),
            },
        }
        try:
            AppConfig.model_validate(data)
            break  # valid → exit loop
        except ValidationError as err:
            typer.secho("\nConfig error(s):", fg=typer.colors.RED, err=True)
            for e in err.errors():
                loc = ".".join(str(part) for part in e["loc"])
                typer.secho(f"  • {loc} - {e['msg']}", fg=typer.colors.RED, err=True)
            typer.echo("Please re-enter the values.\n")

    dst.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    typer.secho(f"Config written to {dst}", fg=typer.colors.GREEN)


def run() -> None:
    """Console-script entry point."""
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    run()
