"""Periodic loop driving the redshift controller."""

import logging
import time
from collections.abc import Callable
from datetime import datetime
from typing import Final

from autoredshift.controller import RedshiftController
from autoredshift.evaluation.time import Waketime
from autoredshift.scheduling.models import TickSettings
from autoredshift.utils.time import TimeUtils

logger: Final = logging.getLogger(__name__)

def minutes_until_aligned(
    current_minute: int,
    waketime: Waketime,
    settings: TickSettings | None = None,
) -> int:
    """Minutes to wait before the first aligned tick.

    Ticks are pinned to the minutes-of-hour ``(wake minute + offset) % interval``
    and that value plus one interval, so the schedule follows the wake time
    instead of drifting with the process start time.
    """
    settings = settings or TickSettings()
    interval = settings.interval_minutes

    first = (waketime.minutes + settings.offset_minutes) % interval
    second = first + interval

    if current_minute <= first and first != 0:
        return first - current_minute
    if current_minute <= second:
        return second - current_minute
    return first + 2 * interval - current_minute

class Scheduler:
    """Runs the controller on a fixed, wake-time-aligned cadence.

    The first tick happens immediately, the second on the next aligned
    minute and every following one a full interval later. A failing tick
    is logged and the loop carries on.
    """

    def __init__(
        self,
        controller: RedshiftController,
        waketime: Waketime,
        n_hours: float = 4.0,
        wallpapers: bool = False,
        tick_settings: TickSettings | None = None,
        clock: Callable[[], datetime] | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self.controller = controller
        self.waketime = waketime
        self.n_hours = n_hours
        self.wallpapers = wallpapers
        self.tick_settings = tick_settings or TickSettings()
        self.clock = clock or TimeUtils.now_localized
        self._sleep = sleep

    def sleep(self, seconds: float) -> None:
        (self._sleep or time.sleep)(seconds)

    def tick(self) -> None:
        """Run a single controller tick, isolating any failure."""
        try:
            self.controller.tick(
                self.waketime,
                n_hours=self.n_hours,
                wallpapers=self.wallpapers,
                now=self.clock(),
            )
        except Exception:
            logger.exception("Tick failed, will retry on the next cycle")

    def run(self, once: bool = False) -> None:
        """Run the loop until the process is terminated (or once)."""
        start_minute = self.clock().minute
        self.tick()
        if once:
            return

        wait_min = minutes_until_aligned(start_minute, self.waketime, self.tick_settings)
        logger.info(
            "Next tick in %d min (ticks aligned to wake time %s)", wait_min, self.waketime
        )
        self.sleep(wait_min * 60)

        interval = self.tick_settings.interval
        while True:
            self.tick()
            logger.debug(
                "Sleeping %s until %s",
                TimeUtils.format_duration(interval),
                TimeUtils.format_datetime(self.clock() + interval, "%H:%M"),
            )
            self.sleep(interval.total_seconds())
