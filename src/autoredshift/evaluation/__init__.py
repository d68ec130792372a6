"""Pure time and display-settings calculations."""

from autoredshift.evaluation.display import DisplaySettings, calculate_display_settings
from autoredshift.evaluation.time import (
    MAX_REDSHIFT,
    TimeEvaluation,
    Waketime,
    evaluate_time,
)

__all__ = [
    "MAX_REDSHIFT",
    "DisplaySettings",
    "TimeEvaluation",
    "Waketime",
    "calculate_display_settings",
    "evaluate_time",
]
