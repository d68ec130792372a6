"""Common utility functions and helpers for the autoredshift package."""

from autoredshift.utils.time import TimeUtils

__all__ = ["TimeUtils"]
