"""
Service module for period predictions and cycle analysis.

This module projects future periods, ovulation days and fertile windows from
the most recent logged period, treating every future cycle as recurring with
the same length. It also builds the cycle snapshot shown for a given day.
"today" is always passed in by the caller.

Typical usage:
    records = store.list_periods(user_id)
    snapshot = analyze_cycle(records, config, today)
    upcoming = predict_upcoming_cycles(records, config, today, count=3)
"""
from typing import List, Optional
from datetime import date, timedelta

from aws_lambda_powertools import Logger

from src.models.period import PeriodRecord, CycleConfiguration, PredictionBasis
from src.models.phase import CyclePhase, CycleSnapshot, FertileWindow, PredictedCycle
from src.services.constants import (
    LUTEAL_PHASE_LENGTH,
    FERTILE_DAYS_BEFORE_OVULATION,
    FERTILE_DAYS_AFTER_OVULATION,
    DEFAULT_UPCOMING_CYCLES,
    MOON_LIFE_STAGES
)
from src.services.history import get_period_for_date
from src.services.phase import get_moon_phase, get_moon_phase_cycle_equivalent
from src.services.statistics import calculate_cycle_statistics, get_effective_lengths
from src.services.utils import (
    get_sorted_records,
    days_between,
    calculate_cycle_day,
    determine_phase,
    calculate_phase_progress
)

logger = Logger()

def is_predicted_period_day(
    anchor: date,
    cycle_length: int,
    period_length: int,
    target_date: date
) -> bool:
    """
    Check if a date falls on a predicted period day.

    Args:
        anchor: Start date of the most recent logged period
        cycle_length: Effective cycle length in days
        period_length: Effective period length in days
        target_date: Date to check

    Returns:
        True if the date is within the first period_length days of its cycle
    """
    return calculate_cycle_day(anchor, cycle_length, target_date) <= period_length

def calculate_next_period_date(anchor: date, cycle_length: int, today: date) -> date:
    """
    Calculate the next predicted period start on or after today.

    The result is anchor + k * cycle_length for the smallest integer k that
    does not fall before today, so it is today itself when a predicted cycle
    starts today.

    Example:
        >>> calculate_next_period_date(date(2024, 1, 1), 28, date(2024, 1, 30))
        datetime.date(2024, 2, 26)
    """
    elapsed = days_between(anchor, today)
    cycles = -(-elapsed // cycle_length)  # ceiling division
    return anchor + timedelta(days=cycles * cycle_length)

def calculate_days_until_next_period(anchor: date, cycle_length: int, today: date) -> int:
    """Days from today to the next predicted period start (0 if it starts today)."""
    return days_between(today, calculate_next_period_date(anchor, cycle_length, today))

def get_current_cycle_start(anchor: date, cycle_length: int, today: date) -> date:
    """Start date of the predicted cycle that contains today."""
    elapsed = days_between(anchor, today)
    return anchor + timedelta(days=(elapsed // cycle_length) * cycle_length)

def calculate_ovulation_day(cycle_start: date, cycle_length: int) -> date:
    """
    Estimate ovulation as 14 days before the next predicted period.

    Example:
        >>> calculate_ovulation_day(date(2024, 1, 1), 28)
        datetime.date(2024, 1, 15)
    """
    return cycle_start + timedelta(days=cycle_length - LUTEAL_PHASE_LENGTH)

def calculate_fertile_window(cycle_start: date, cycle_length: int) -> FertileWindow:
    """
    Calculate the fertile window of a cycle.

    The window runs from 5 days before the estimated ovulation day through
    1 day after it.
    """
    ovulation = calculate_ovulation_day(cycle_start, cycle_length)
    return FertileWindow(
        start=ovulation - timedelta(days=FERTILE_DAYS_BEFORE_OVULATION),
        end=ovulation + timedelta(days=FERTILE_DAYS_AFTER_OVULATION)
    )

def get_prediction_basis(
    records: List[PeriodRecord],
    config: CycleConfiguration
) -> Optional[PredictionBasis]:
    """
    Build the anchor and effective lengths used by predictions.

    Args:
        records: Period records in any order
        config: User configuration

    Returns:
        PredictionBasis, or None when no period has been logged yet
    """
    if not records:
        return None

    stats = calculate_cycle_statistics(records, config)
    cycle_length, period_length = get_effective_lengths(stats, config)
    anchor = get_sorted_records(records, reverse=True)[0].start_date

    return PredictionBasis(
        anchor=anchor,
        cycle_length=cycle_length,
        period_length=period_length,
        stats=stats
    )

def predict_upcoming_cycles(
    records: List[PeriodRecord],
    config: CycleConfiguration,
    today: date,
    count: int = DEFAULT_UPCOMING_CYCLES
) -> List[PredictedCycle]:
    """
    Project the next cycles starting with the next predicted period.

    Args:
        records: Period records in any order
        config: User configuration
        today: Current date
        count: Number of cycles to project

    Returns:
        List of predicted cycles, empty when there is no history

    Example:
        >>> for cycle in predict_upcoming_cycles(records, config, today):
        ...     print(f"{cycle.start_date} - {cycle.end_date}")
    """
    basis = get_prediction_basis(records, config)
    if basis is None:
        return []

    next_start = calculate_next_period_date(basis.anchor, basis.cycle_length, today)
    predictions = []
    for i in range(count):
        start = next_start + timedelta(days=i * basis.cycle_length)
        predictions.append(PredictedCycle(
            start_date=start,
            end_date=start + timedelta(days=basis.period_length - 1),
            ovulation_day=calculate_ovulation_day(start, basis.cycle_length),
            fertile_window=calculate_fertile_window(start, basis.cycle_length)
        ))
    return predictions

def is_date_in_period(
    records: List[PeriodRecord],
    config: CycleConfiguration,
    target_date: date,
    today: date
) -> bool:
    """
    Check if a date is within a logged period or the predicted period of
    the current cycle.
    """
    if get_period_for_date(records, target_date) is not None:
        return True

    basis = get_prediction_basis(records, config)
    if basis is None:
        return False

    cycle_start = get_current_cycle_start(basis.anchor, basis.cycle_length, today)
    period_end = cycle_start + timedelta(days=basis.period_length - 1)
    return cycle_start <= target_date <= period_end

def is_date_in_fertile_window(
    records: List[PeriodRecord],
    config: CycleConfiguration,
    target_date: date,
    today: date
) -> bool:
    """Check if a date is within the fertile window of the current cycle."""
    basis = get_prediction_basis(records, config)
    if basis is None:
        return False

    cycle_start = get_current_cycle_start(basis.anchor, basis.cycle_length, today)
    return calculate_fertile_window(cycle_start, basis.cycle_length).contains(target_date)

def is_date_ovulation(
    records: List[PeriodRecord],
    config: CycleConfiguration,
    target_date: date,
    today: date
) -> bool:
    """Check if a date is the estimated ovulation day of the current cycle."""
    basis = get_prediction_basis(records, config)
    if basis is None:
        return False

    cycle_start = get_current_cycle_start(basis.anchor, basis.cycle_length, today)
    return calculate_ovulation_day(cycle_start, basis.cycle_length) == target_date

def analyze_cycle(
    records: List[PeriodRecord],
    config: CycleConfiguration,
    today: date
) -> CycleSnapshot:
    """
    Analyze the cycle state for a day.

    Args:
        records: Period records in any order
        config: User configuration
        today: Date to analyze

    Returns:
        CycleSnapshot with the day of cycle, phase, predictions and, for
        perimenopause and later life stages, the moon phase stand-in

    Example:
        >>> snapshot = analyze_cycle(records, config, date(2024, 1, 30))
        >>> print(f"Day {snapshot.day_of_cycle}, {snapshot.phase.value} phase")
        >>> print(f"Next period in {snapshot.days_until_next_period} days")
    """
    moon_phase = None
    moon_equivalent = None
    if config.life_stage in MOON_LIFE_STAGES:
        moon_phase = get_moon_phase(today)
        moon_equivalent = get_moon_phase_cycle_equivalent(moon_phase)

    basis = get_prediction_basis(records, config)
    if basis is None:
        logger.info("No period history, using default cycle snapshot")
        return CycleSnapshot(
            target_date=today,
            day_of_cycle=1,
            phase=CyclePhase.FOLLICULAR,
            phase_progress=0.0,
            cycle_length=config.cycle_length,
            period_length=config.period_length,
            life_stage=config.life_stage,
            moon_phase=moon_phase,
            moon_phase_equivalent=moon_equivalent
        )

    cycle_length = basis.cycle_length
    period_length = basis.period_length
    cycle_day = calculate_cycle_day(basis.anchor, cycle_length, today)
    cycle_start = get_current_cycle_start(basis.anchor, cycle_length, today)
    fertile_window = calculate_fertile_window(cycle_start, cycle_length)
    ovulation_day = calculate_ovulation_day(cycle_start, cycle_length)

    snapshot = CycleSnapshot(
        target_date=today,
        day_of_cycle=cycle_day,
        phase=determine_phase(cycle_day, cycle_length, period_length),
        phase_progress=calculate_phase_progress(cycle_day, cycle_length, period_length),
        cycle_length=cycle_length,
        period_length=period_length,
        current_cycle_start=cycle_start,
        next_period_date=calculate_next_period_date(basis.anchor, cycle_length, today),
        days_until_next_period=calculate_days_until_next_period(basis.anchor, cycle_length, today),
        ovulation_day=ovulation_day,
        fertile_window=fertile_window,
        is_period_day=(
            get_period_for_date(records, today) is not None
            or is_predicted_period_day(basis.anchor, cycle_length, period_length, today)
        ),
        is_fertile_day=fertile_window.contains(today),
        is_ovulation_day=ovulation_day == today,
        life_stage=config.life_stage,
        moon_phase=moon_phase,
        moon_phase_equivalent=moon_equivalent
    )

    logger.info(
        "Analyzed cycle",
        extra={
            "anchor": str(basis.anchor),
            "day_of_cycle": snapshot.day_of_cycle,
            "phase": snapshot.phase.value,
            "days_until_next_period": snapshot.days_until_next_period
        }
    )
    return snapshot
