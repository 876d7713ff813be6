"""
Statistics calculation service for period history.

This module provides functionality for calculating cycle statistics,
including average cycle and period lengths, cycle length variation and
irregularity detection.
"""
import math
from typing import List, Optional, Tuple
from statistics import mean
from aws_lambda_powertools import Logger
from src.models.period import (
    PeriodRecord,
    CycleConfiguration,
    CycleStats,
    CycleLengthVariation
)
from src.services.constants import (
    TYPICAL_CYCLE_RANGE,
    MAX_REGULAR_CYCLE_SPREAD,
    MIN_CYCLES_FOR_AVERAGE
)
from src.services.utils import get_sorted_records, days_between

logger = Logger()

def derive_cycle_lengths(records: List[PeriodRecord]) -> List[Optional[int]]:
    """
    Derive the cycle length of each record from its predecessor.

    Args:
        records: Period records sorted by start date (oldest first)

    Returns:
        Cycle length for each record, None for the earliest one and for a
        record sharing its start date with the previous one
    """
    cycle_lengths: List[Optional[int]] = []
    for i, record in enumerate(records):
        if i == 0:
            cycle_lengths.append(None)
            continue
        gap = days_between(records[i-1].start_date, record.start_date)
        cycle_lengths.append(gap if gap > 0 else None)
    return cycle_lengths

def is_irregular_cycle(variation: CycleLengthVariation, last_cycle_length: Optional[int]) -> bool:
    """
    Check the irregularity rule.

    A history is irregular when the spread between shortest and longest
    cycle exceeds 7 days, or when the most recent cycle falls outside the
    typical 21-35 day range.
    """
    if variation.spread > MAX_REGULAR_CYCLE_SPREAD:
        return True
    if last_cycle_length is None:
        return False
    low, high = TYPICAL_CYCLE_RANGE
    return not (low <= last_cycle_length <= high)

def calculate_cycle_statistics(
    records: List[PeriodRecord],
    config: Optional[CycleConfiguration] = None
) -> CycleStats:
    """
    Calculate overall cycle statistics from the period history.

    Args:
        records: Period records in any order
        config: User configuration supplying fallbacks for thin history

    Returns:
        CycleStats with:
        - total_cycles_tracked: Records with a defined cycle length
        - average_cycle_length / average_period_length: Unrounded means
        - cycle_length_variation: Shortest and longest cycle
        - last_cycle_length / last_period_length: From the most recent record
        - is_irregular: Irregularity flag

    Example:
        >>> stats = calculate_cycle_statistics(records, config)
        >>> if not stats.has_enough_data:
        ...     print("Not enough data yet")
    """
    config = config or CycleConfiguration()
    sorted_records = get_sorted_records(records)
    logger.info(f"Analyzing {len(sorted_records)} period records")

    if not sorted_records:
        return CycleStats(
            total_cycles_tracked=0,
            average_cycle_length=config.cycle_length,
            average_period_length=config.period_length,
            cycle_length_variation=CycleLengthVariation(
                min=config.cycle_length,
                max=config.cycle_length
            ),
            is_irregular=False
        )

    all_cycle_lengths = derive_cycle_lengths(sorted_records)
    cycle_lengths = [length for length in all_cycle_lengths if length is not None]
    period_lengths = [record.derived_period_length for record in sorted_records]

    if cycle_lengths:
        average_cycle_length = mean(cycle_lengths)
        variation = CycleLengthVariation(min=min(cycle_lengths), max=max(cycle_lengths))
    else:
        average_cycle_length = config.cycle_length
        variation = CycleLengthVariation(min=config.cycle_length, max=config.cycle_length)

    last_cycle_length = all_cycle_lengths[-1]
    is_irregular = is_irregular_cycle(variation, last_cycle_length)

    logger.info(
        "Calculated cycle statistics",
        extra={
            "cycles_tracked": len(cycle_lengths),
            "average_cycle_length": average_cycle_length,
            "min_cycle_length": variation.min,
            "max_cycle_length": variation.max,
            "is_irregular": is_irregular
        }
    )

    return CycleStats(
        total_cycles_tracked=len(cycle_lengths),
        average_cycle_length=average_cycle_length,
        average_period_length=mean(period_lengths),
        cycle_length_variation=variation,
        last_cycle_length=last_cycle_length,
        last_period_length=period_lengths[-1],
        is_irregular=is_irregular
    )

def round_days(value: float) -> int:
    """Round a day count half up."""
    return int(math.floor(value + 0.5))

def get_effective_lengths(stats: CycleStats, config: CycleConfiguration) -> Tuple[int, int]:
    """
    Choose the cycle and period lengths used for predictions.

    Averages are used once at least two cycles are tracked; before that the
    configured defaults apply.

    Returns:
        Tuple of (cycle length, period length) in whole days
    """
    if stats.total_cycles_tracked >= MIN_CYCLES_FOR_AVERAGE:
        return (
            max(1, round_days(stats.average_cycle_length)),
            max(1, round_days(stats.average_period_length))
        )
    return config.cycle_length, config.period_length
