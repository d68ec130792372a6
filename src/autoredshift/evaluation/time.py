# src/autoredshift/evaluation/time.py
"""Classification of the current time relative to the wake time."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from autoredshift.common.enums import DaySection
from autoredshift.errors import WaketimeParseError

MINUTES_PER_DAY: Final = 24 * 60

# Section boundaries, in minutes after waking up
MORNING_END: Final = 150
DAY_END: Final = MORNING_END + 8 * 60
EVENING_END: Final = 16 * 60
MORNING_START: Final = 20 * 60

# Evening redshift stays at zero until this many minutes after waking
RAMP_EARLIEST: Final = 12 * 60
# Hour after waking at which the ramp must reach its maximum
RAMP_END_HOUR: Final = EVENING_END / 60

MAX_REDSHIFT: Final = 20.0

_WAKETIME_RE: Final = re.compile(r"(\d{1,2}):(\d{1,2})", re.ASCII)


class Waketime(BaseModel):
    """Time of day (24-hour) the user wakes up.

    Hours are 0 to 23 and minutes 0 to 59 inclusive.
    """

    model_config = ConfigDict(frozen=True)

    hours: int = Field(..., ge=0, le=23, description="Hour of waking (0-23)")
    minutes: int = Field(..., ge=0, le=59, description="Minute of waking (0-59)")

    @classmethod
    def parse(cls, value: str) -> Waketime:
        """Parse a "HH:MM" string.

        Args:
            value: Wake time as given on the command line

        Returns:
            Validated Waketime

        Raises:
            WaketimeParseError: If the string is malformed or out of range
        """
        match = _WAKETIME_RE.fullmatch(value.strip())
        if match is None:
            raise WaketimeParseError(value, "not of the form HH:MM")

        try:
            return cls(hours=int(match.group(1)), minutes=int(match.group(2)))
        except ValidationError as err:
            raise WaketimeParseError(
                value, "hours must be 0-23 and minutes 0-59"
            ) from err

    @property
    def minute_of_day(self) -> int:
        """Minutes elapsed since midnight at wake time."""
        return self.hours * 60 + self.minutes

    def __str__(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}"


@dataclass(frozen=True)
class TimeEvaluation:
    """Result of evaluating a clock reading against the wake time."""

    minutes_since_wake: int
    day_section: DaySection
    redshift: float


def classify(minutes_since_wake: int) -> DaySection:
    """Map minutes since waking to a day section."""
    if minutes_since_wake > MORNING_START or minutes_since_wake <= MORNING_END:
        return DaySection.MORNING
    if minutes_since_wake <= DAY_END:
        return DaySection.DAY
    if minutes_since_wake <= EVENING_END:
        return DaySection.EVENING
    return DaySection.NIGHT


def _evening_redshift(minutes_since_wake: int, n_hours: float) -> float:
    if minutes_since_wake <= RAMP_EARLIEST:
        return 0.0

    ramp_start_hour = RAMP_END_HOUR - n_hours
    redshift = (minutes_since_wake / 60.0 - ramp_start_hour) * (MAX_REDSHIFT / n_hours)
    # Short transitions put the ramp start after RAMP_EARLIEST
    return max(0.0, min(redshift, MAX_REDSHIFT))


def evaluate_time(
    current_hour: int,
    current_minute: int,
    waketime: Waketime,
    n_hours: float,
) -> TimeEvaluation:
    """Evaluate the current time against the wake time.

    The clock is re-anchored so that 0 is the moment of waking, the result
    is classified into a day section and a redshift intensity in
    ``[0, MAX_REDSHIFT]`` is derived from it. Redshift is zero in the
    morning and during the day, maximal at night, and ramps up linearly
    during the last ``n_hours`` of the evening.

    Args:
        current_hour: Hour of the clock reading (0-23)
        current_minute: Minute of the clock reading (0-59)
        waketime: Wake time anchor
        n_hours: Length of the evening transition in hours, must be > 0

    Returns:
        A fresh TimeEvaluation

    Raises:
        ValueError: If n_hours is not positive
    """
    if n_hours <= 0:
        raise ValueError(f"n_hours must be positive, got {n_hours}")

    now_minutes = current_hour * 60 + current_minute
    minutes_since_wake = (now_minutes - waketime.minute_of_day) % MINUTES_PER_DAY

    day_section = classify(minutes_since_wake)

    if day_section is DaySection.NIGHT:
        redshift = MAX_REDSHIFT
    elif day_section is DaySection.EVENING:
        redshift = _evening_redshift(minutes_since_wake, n_hours)
    else:
        redshift = 0.0

    return TimeEvaluation(
        minutes_since_wake=minutes_since_wake,
        day_section=day_section,
        redshift=redshift,
    )
