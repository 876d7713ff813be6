"""
Shared calendar arithmetic for cycle-related services.

These utilities are used across multiple service modules to convert a
reference period start, a cycle length and a period length into the day of
cycle and phase for any date. They hold no state and never read the clock.
"""
from typing import Iterable, List
from datetime import date

from src.models.period import PeriodRecord
from src.models.phase import CyclePhase
from src.services.constants import FOLLICULAR_END_DAY, OVULATORY_END_DAY

def days_between(start: date, end: date) -> int:
    """Signed number of days from start to end."""
    return (end - start).days

def get_sorted_records(records: Iterable[PeriodRecord], reverse: bool = False) -> List[PeriodRecord]:
    """
    Sort period records by start date.

    Args:
        records: Period records in any order
        reverse: Whether to sort in reverse order (newest first)

    Returns:
        New list of records sorted by start date

    Example:
        >>> oldest_first = get_sorted_records(records)
        >>> newest_first = get_sorted_records(records, reverse=True)
    """
    return sorted(records, key=lambda x: x.start_date, reverse=reverse)

def calculate_cycle_day(reference_start: date, cycle_length: int, on_date: date) -> int:
    """
    Calculate the day of the cycle for a date, treating every cycle as
    recurring with the same length from the reference start.

    The result is always within [1, cycle_length], including for dates
    before the reference start and dates arbitrarily far in the future.

    Args:
        reference_start: Start date of a known period (day 1)
        cycle_length: Cycle length in days, must be positive
        on_date: Date to calculate the cycle day for

    Returns:
        Day number in the cycle (1-based)

    Example:
        >>> calculate_cycle_day(date(2024, 1, 1), 28, date(2024, 1, 29))
        1
        >>> calculate_cycle_day(date(2024, 1, 1), 28, date(2023, 12, 31))
        28
    """
    offset = days_between(reference_start, on_date)
    return ((offset % cycle_length) + cycle_length) % cycle_length + 1

def determine_phase(cycle_day: int, cycle_length: int, period_length: int) -> CyclePhase:
    """
    Determine the cycle phase for a cycle day.

    Boundaries are fixed days independent of the cycle length:
      - Menstrual: days 1 to period_length
      - Follicular: after the period through day 13
      - Ovulatory: days 14 to 17
      - Luteal: day 18 to the end of the cycle

    A period length of 13 days or more leaves no follicular days.

    Args:
        cycle_day: Current day in the cycle (1-based)
        cycle_length: Cycle length in days
        period_length: Period length in days

    Returns:
        Phase for the cycle day

    Example:
        >>> determine_phase(15, 28, 5)
        <CyclePhase.OVULATORY: 'ovulatory'>
    """
    if cycle_day <= period_length:
        return CyclePhase.MENSTRUAL
    elif cycle_day <= FOLLICULAR_END_DAY:
        return CyclePhase.FOLLICULAR
    elif cycle_day <= OVULATORY_END_DAY:
        return CyclePhase.OVULATORY
    return CyclePhase.LUTEAL

def calculate_phase_progress(cycle_day: int, cycle_length: int, period_length: int) -> float:
    """
    Calculate how far through its phase a cycle day is.

    Args:
        cycle_day: Current day in the cycle (1-based)
        cycle_length: Cycle length in days
        period_length: Period length in days

    Returns:
        Fraction of the current phase elapsed, between 0 and 1
    """
    phase = determine_phase(cycle_day, cycle_length, period_length)

    if phase == CyclePhase.MENSTRUAL:
        progress = cycle_day / period_length
    elif phase == CyclePhase.FOLLICULAR:
        progress = (cycle_day - period_length) / (FOLLICULAR_END_DAY - period_length)
    elif phase == CyclePhase.OVULATORY:
        start = max(period_length, FOLLICULAR_END_DAY)
        progress = (cycle_day - start) / (OVULATORY_END_DAY - start)
    else:
        start = max(period_length, OVULATORY_END_DAY)
        # cycle_day may exceed cycle_length when called with an arbitrary day
        span = max(cycle_length - start, cycle_day - start)
        progress = (cycle_day - start) / span

    return min(max(progress, 0.0), 1.0)
