"""
Service module for period history changes.

This module implements the calling-layer side of logging periods: creating,
ending, editing and deleting period records. Inputs are validated here so the
calculation services can assume well-formed records. Every operation returns
a new list and re-derives the cycle lengths, since inserting or removing a
period changes the cycle length of the record that follows it.

Typical usage:
    records = log_period_start(records, date(2024, 3, 1), config, today)
    records = log_period_end(records, period_id, date(2024, 3, 5))
    records = delete_period_entry(records, period_id)
"""
from typing import List, Optional
from datetime import date, timedelta

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from src.models.period import PeriodRecord, CycleConfiguration
from src.services.exceptions import InvalidPeriodError, PeriodNotFoundError
from src.services.statistics import derive_cycle_lengths
from src.services.utils import get_sorted_records

logger = Logger()

EDITABLE_FIELDS = {"start_date", "end_date", "notes", "period_length"}

def recompute_cycle_lengths(records: List[PeriodRecord]) -> List[PeriodRecord]:
    """
    Re-derive every record's cycle length from its predecessor.

    Args:
        records: Period records in any order

    Returns:
        New list of records sorted by start date (oldest first)
    """
    sorted_records = get_sorted_records(records)
    cycle_lengths = derive_cycle_lengths(sorted_records)
    return [
        record.model_copy(update={"cycle_length": cycle_length})
        for record, cycle_length in zip(sorted_records, cycle_lengths)
    ]

def find_period(records: List[PeriodRecord], period_id: str) -> PeriodRecord:
    """
    Find a period record by id.

    Raises:
        PeriodNotFoundError: If no record has the id
    """
    for record in records:
        if record.id == period_id:
            return record
    raise PeriodNotFoundError(f"Period {period_id} not found")

def log_period_start(
    records: List[PeriodRecord],
    start_date: date,
    config: CycleConfiguration,
    today: date,
    notes: Optional[str] = None
) -> List[PeriodRecord]:
    """
    Log the start of a period.

    The new record uses the configured period length until an end date is
    logged. Logging a start date that already exists leaves the history
    unchanged.

    Args:
        records: Current period records
        start_date: First day of the period
        config: User configuration
        today: Current date
        notes: Optional notes

    Returns:
        Updated records sorted by start date

    Raises:
        InvalidPeriodError: If start_date is in the future
    """
    if start_date > today:
        raise InvalidPeriodError(f"Period start {start_date} is after today ({today})")

    if any(record.start_date == start_date for record in records):
        logger.info("Period already logged for start date", extra={"start_date": str(start_date)})
        return recompute_cycle_lengths(records)

    new_record = PeriodRecord(
        start_date=start_date,
        period_length=config.period_length,
        notes=notes
    )
    logger.info("Logged period start", extra={"period_id": new_record.id, "start_date": str(start_date)})
    return recompute_cycle_lengths([*records, new_record])

def log_period_end(
    records: List[PeriodRecord],
    period_id: str,
    end_date: date
) -> List[PeriodRecord]:
    """
    Log the end of a period and derive its length.

    Raises:
        PeriodNotFoundError: If the period id is unknown
        InvalidPeriodError: If end_date is before the period start
    """
    return update_period_entry(records, period_id, end_date=end_date)

def update_period_entry(
    records: List[PeriodRecord],
    period_id: str,
    today: Optional[date] = None,
    **changes
) -> List[PeriodRecord]:
    """
    Update the editable fields of a period record.

    Args:
        records: Current period records
        period_id: Id of the record to update
        today: Current date, required to validate a new start_date
        **changes: New values for start_date, end_date, notes or period_length

    Returns:
        Updated records sorted by start date

    Raises:
        PeriodNotFoundError: If the period id is unknown
        InvalidPeriodError: If the changes produce an invalid record
    """
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise InvalidPeriodError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

    record = find_period(records, period_id)
    new_start = changes.get("start_date", record.start_date)

    if today is not None and new_start > today:
        raise InvalidPeriodError(f"Period start {new_start} is after today ({today})")
    if any(other.id != period_id and other.start_date == new_start for other in records):
        raise InvalidPeriodError(f"A period already starts on {new_start}")

    try:
        updated = PeriodRecord(**{**record.model_dump(), **changes})
    except ValidationError as e:
        raise InvalidPeriodError(str(e)) from e

    if updated.end_date is not None:
        updated = updated.model_copy(update={"period_length": updated.derived_period_length})

    logger.info(
        "Updated period entry",
        extra={"period_id": period_id, "fields": sorted(changes)}
    )
    return recompute_cycle_lengths([updated if r.id == period_id else r for r in records])

def delete_period_entry(records: List[PeriodRecord], period_id: str) -> List[PeriodRecord]:
    """
    Delete a period record.

    Raises:
        PeriodNotFoundError: If the period id is unknown
    """
    find_period(records, period_id)
    logger.info("Deleted period entry", extra={"period_id": period_id})
    return recompute_cycle_lengths([r for r in records if r.id != period_id])

def get_period_for_date(records: List[PeriodRecord], target_date: date) -> Optional[PeriodRecord]:
    """
    Find the logged period covering a date.

    A period without an end date covers its stored period length.
    """
    for record in records:
        end = record.start_date + timedelta(days=record.derived_period_length - 1)
        if record.start_date <= target_date <= end:
            return record
    return None

def get_period_history(
    records: List[PeriodRecord],
    periods: Optional[int] = None
) -> List[PeriodRecord]:
    """
    Get the period history, newest first, with cycle lengths re-derived.

    Args:
        records: Period records in any order
        periods: Optional number of most recent periods to return

    Example:
        >>> for period in get_period_history(records, periods=3):
        ...     print(f"{period.start_date} ({period.cycle_length} day cycle)")
    """
    history = list(reversed(recompute_cycle_lengths(records)))
    if periods is not None:
        history = history[:periods]
    return history
