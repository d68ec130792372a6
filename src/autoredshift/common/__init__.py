"""Shared enumerations."""

from autoredshift.common.enums import DaySection

__all__ = ["DaySection"]
