"""Persistence of past calculations."""

from nominamx.history.store import MAX_ENTRIES, CalculationHistory

__all__ = ["MAX_ENTRIES", "CalculationHistory"]
