"""Data models for the tick cadence."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class TickSettings:
    """Cadence of the redshift loop.

    Ticks land ``offset_minutes`` after the wake time's minute-of-hour
    (modulo the interval) so evaluations never sit exactly on a section
    boundary.
    """

    interval: timedelta = timedelta(minutes=30)
    offset_minutes: int = 1

    @property
    def interval_minutes(self) -> int:
        return int(self.interval.total_seconds() // 60)
