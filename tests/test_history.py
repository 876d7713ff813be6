"""Tests for period history changes."""
from datetime import date

import pytest
from src.models.period import PeriodRecord, CycleConfiguration
from src.services.exceptions import InvalidPeriodError, PeriodNotFoundError
from src.services.history import (
    recompute_cycle_lengths,
    find_period,
    log_period_start,
    log_period_end,
    update_period_entry,
    delete_period_entry,
    get_period_for_date,
    get_period_history
)
from src.services.utils import calculate_cycle_day

TODAY = date(2024, 3, 15)

def test_log_period_start_adds_record(regular_records, default_config):
    updated = log_period_start(regular_records, date(2024, 3, 14), default_config, TODAY, notes="light")

    assert len(updated) == 4
    new_record = updated[-1]
    assert new_record.start_date == date(2024, 3, 14)
    assert new_record.end_date is None
    assert new_record.period_length == default_config.period_length
    assert new_record.cycle_length == 19
    assert new_record.notes == "light"
    # input list is not modified
    assert len(regular_records) == 3

def test_logged_start_is_day_one(regular_records, default_config):
    start = date(2024, 3, 14)
    updated = log_period_start(regular_records, start, default_config, TODAY)
    assert calculate_cycle_day(start, 27, start) == 1
    assert updated[-1].start_date == start

def test_log_period_start_uses_configured_length(regular_records):
    config = CycleConfiguration(cycle_length=30, period_length=7)
    updated = log_period_start(regular_records, TODAY, config, TODAY)
    assert updated[-1].period_length == 7

def test_log_period_start_rejects_future_date(regular_records, default_config):
    with pytest.raises(InvalidPeriodError):
        log_period_start(regular_records, date(2024, 3, 16), default_config, TODAY)

def test_log_period_start_ignores_duplicate(regular_records, default_config):
    updated = log_period_start(regular_records, date(2024, 1, 29), default_config, TODAY)

    assert [r.id for r in updated] == ["p1", "p2", "p3"]

def test_inserting_earlier_period_recomputes_follower(regular_records, default_config):
    """Backfilling a period changes the cycle length of the next one."""
    updated = log_period_start(regular_records, date(2024, 1, 15), default_config, TODAY)

    assert [r.cycle_length for r in updated] == [None, 14, 14, 26]

def test_recompute_cycle_lengths_sorts_records():
    records = [
        PeriodRecord(id="b", start_date=date(2024, 2, 1), cycle_length=3),
        PeriodRecord(id="a", start_date=date(2024, 1, 1), cycle_length=3)
    ]
    updated = recompute_cycle_lengths(records)

    assert [r.id for r in updated] == ["a", "b"]
    assert [r.cycle_length for r in updated] == [None, 31]
    # originals untouched
    assert records[0].cycle_length == 3

def test_log_period_end_derives_length(default_config):
    records = log_period_start([], date(2024, 3, 1), default_config, TODAY)
    period_id = records[0].id

    updated = log_period_end(records, period_id, date(2024, 3, 7))

    assert updated[0].end_date == date(2024, 3, 7)
    assert updated[0].period_length == 7

def test_log_period_end_before_start(regular_records):
    with pytest.raises(InvalidPeriodError):
        log_period_end(regular_records, "p3", date(2024, 2, 20))

def test_log_period_end_unknown_period(regular_records):
    with pytest.raises(PeriodNotFoundError):
        log_period_end(regular_records, "missing", date(2024, 2, 20))

def test_update_period_entry_moves_start(regular_records):
    updated = update_period_entry(regular_records, "p2", start_date=date(2024, 1, 27), end_date=date(2024, 1, 31))

    moved = find_period(updated, "p2")
    assert moved.start_date == date(2024, 1, 27)
    assert moved.period_length == 5
    assert moved.cycle_length == 26
    assert find_period(updated, "p3").cycle_length == 28

def test_update_period_entry_notes(regular_records):
    updated = update_period_entry(regular_records, "p1", notes="heavy flow")
    assert find_period(updated, "p1").notes == "heavy flow"
    assert find_period(regular_records, "p1").notes is None

def test_update_period_entry_rejects_unknown_fields(regular_records):
    with pytest.raises(InvalidPeriodError):
        update_period_entry(regular_records, "p1", cycle_length=40)
    with pytest.raises(InvalidPeriodError):
        update_period_entry(regular_records, "p1", id="other")

def test_update_period_entry_rejects_duplicate_start(regular_records):
    with pytest.raises(InvalidPeriodError):
        update_period_entry(regular_records, "p1", start_date=date(2024, 2, 24), end_date=date(2024, 2, 28))

def test_update_period_entry_rejects_future_start(regular_records):
    with pytest.raises(InvalidPeriodError):
        update_period_entry(regular_records, "p3", today=TODAY, start_date=date(2024, 3, 20), end_date=None)

def test_update_period_entry_rejects_invalid_length(regular_records):
    with pytest.raises(InvalidPeriodError):
        update_period_entry(regular_records, "p1", end_date=None, period_length=0)

def test_delete_period_entry(regular_records):
    updated = delete_period_entry(regular_records, "p2")

    assert [r.id for r in updated] == ["p1", "p3"]
    assert find_period(updated, "p3").cycle_length == 54

def test_delete_period_entry_unknown(regular_records):
    with pytest.raises(PeriodNotFoundError):
        delete_period_entry(regular_records, "missing")

def test_get_period_for_date(regular_records):
    assert get_period_for_date(regular_records, date(2024, 1, 31)).id == "p2"
    assert get_period_for_date(regular_records, date(2024, 2, 3)) is None

def test_get_period_for_date_without_end_uses_stored_length():
    records = [PeriodRecord(id="open", start_date=date(2024, 3, 1), period_length=4)]
    assert get_period_for_date(records, date(2024, 3, 4)).id == "open"
    assert get_period_for_date(records, date(2024, 3, 5)) is None

def test_get_period_history_newest_first(regular_records):
    history = get_period_history(regular_records)

    assert [r.id for r in history] == ["p3", "p2", "p1"]
    assert [r.cycle_length for r in history] == [26, 28, None]
    assert [r.id for r in get_period_history(regular_records, periods=2)] == ["p3", "p2"]
