"""
Service-level exceptions.

This module contains exceptions that can be raised by the period history
and record store services. The calculation services never raise them.
"""

class CycleDataError(Exception):
    """Base exception for period and symptom data errors."""
    pass

class InvalidPeriodError(CycleDataError):
    """Raised when a period record has an invalid shape (e.g. end before start)."""
    pass

class PeriodNotFoundError(CycleDataError):
    """Raised when a period record id is not in the history."""
    pass

class RecordStoreError(Exception):
    """Raised when the record store cannot read or write a record."""
    pass
