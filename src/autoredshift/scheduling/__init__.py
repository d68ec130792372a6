"""Scheduling models for auto-redshift."""

from autoredshift.scheduling.models import TickSettings

__all__ = ["TickSettings"]
