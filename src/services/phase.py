"""
Service module for phase display details and the lunar stand-in phase.

Users in perimenopause or later no longer have a reliable cycle to anchor on,
so their phase-specific content follows the moon phase and its equivalent
cycle phase instead.

Typical usage:
    >>> details = get_phase_details(CyclePhase.LUTEAL)
    >>> moon = get_moon_phase(date(2024, 1, 25))
    >>> phase = get_moon_phase_cycle_equivalent(moon)
"""
from datetime import date

from src.models.phase import CyclePhase, MoonPhase
from src.services.constants import (
    PHASE_INFO,
    PHASE_TYPICAL_SYMPTOMS,
    PHASE_TRANSITIONS,
    MOON_PHASE_INFO,
    MOON_PHASE_BOUNDARIES,
    LUNAR_REFERENCE_DATE,
    LUNAR_REFERENCE_DAY_FRACTION,
    LUNAR_CYCLE_DAYS
)

def get_phase_details(phase: CyclePhase) -> dict:
    """
    Get display information for a phase.

    Args:
        phase: Cycle phase

    Returns:
        Dictionary containing:
        {
            "name": str,
            "description": str,
            "energy": str,
            "superpower": str,
            "typical_symptoms": List[str],
            "next_phase": CyclePhase
        }

    Example:
        >>> details = get_phase_details(CyclePhase.FOLLICULAR)
        >>> print(details["energy"])
        Rising & Creative
    """
    return {
        **PHASE_INFO[phase],
        "typical_symptoms": list(PHASE_TYPICAL_SYMPTOMS[phase]),
        "next_phase": PHASE_TRANSITIONS[phase]
    }

def calculate_moon_age(on_date: date) -> float:
    """Days since the most recent new moon, at the start of on_date."""
    days_since_new_moon = (on_date - LUNAR_REFERENCE_DATE).days - LUNAR_REFERENCE_DAY_FRACTION
    return days_since_new_moon % LUNAR_CYCLE_DAYS

def get_moon_phase(on_date: date) -> MoonPhase:
    """
    Determine the moon phase for a date.

    The lunar cycle is divided into eight phases by moon age.

    Example:
        >>> get_moon_phase(date(2000, 1, 7))
        <MoonPhase.NEW_MOON: 'new_moon'>
    """
    moon_age = calculate_moon_age(on_date)
    for upper_bound, moon_phase in MOON_PHASE_BOUNDARIES:
        if moon_age < upper_bound:
            return moon_phase
    return MoonPhase.WANING_CRESCENT

def get_moon_phase_cycle_equivalent(moon_phase: MoonPhase) -> CyclePhase:
    """Map a moon phase to the cycle phase whose energy it corresponds to."""
    return MOON_PHASE_INFO[moon_phase]["cycle_phase"]
