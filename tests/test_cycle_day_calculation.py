"""Tests for cycle day and phase calculation."""
from datetime import date, timedelta

import pytest
from src.models.period import PeriodRecord
from src.models.phase import CyclePhase
from src.services.utils import (
    calculate_cycle_day,
    determine_phase,
    calculate_phase_progress,
    get_sorted_records,
    days_between
)

def test_cycle_day_on_reference_start_is_one():
    """The logged start date is always day 1."""
    start = date(2024, 3, 1)
    assert calculate_cycle_day(start, 28, start) == 1

def test_cycle_day_wraps_to_next_cycle():
    """Test the day after a full cycle starts a new cycle."""
    start = date(2024, 1, 1)
    assert calculate_cycle_day(start, 28, date(2024, 1, 28)) == 28
    assert calculate_cycle_day(start, 28, date(2024, 1, 29)) == 1
    assert calculate_cycle_day(start, 28, date(2024, 2, 1)) == 4

def test_cycle_day_before_reference_start():
    """Dates before the reference start count backwards from the cycle end."""
    start = date(2024, 1, 1)
    assert calculate_cycle_day(start, 28, date(2023, 12, 31)) == 28
    assert calculate_cycle_day(start, 28, date(2023, 12, 4)) == 1
    assert calculate_cycle_day(start, 30, date(2023, 12, 25)) == 24

@pytest.mark.parametrize("cycle_length", [1, 7, 21, 28, 35, 45])
def test_cycle_day_always_in_range(cycle_length):
    """Test the cycle day stays within [1, cycle_length] for any offset."""
    start = date(2024, 6, 15)
    for offset in range(-400, 400, 7):
        day = calculate_cycle_day(start, cycle_length, start + timedelta(days=offset))
        assert 1 <= day <= cycle_length

def test_cycle_day_far_future():
    start = date(2020, 1, 1)
    target = start + timedelta(days=28 * 500 + 9)
    assert calculate_cycle_day(start, 28, target) == 10

def test_phase_boundaries():
    """Test the fixed day boundaries 13 and 17."""
    assert determine_phase(1, 28, 5) == CyclePhase.MENSTRUAL
    assert determine_phase(5, 28, 5) == CyclePhase.MENSTRUAL
    assert determine_phase(6, 28, 5) == CyclePhase.FOLLICULAR
    assert determine_phase(13, 28, 5) == CyclePhase.FOLLICULAR
    assert determine_phase(14, 28, 5) == CyclePhase.OVULATORY
    assert determine_phase(17, 28, 5) == CyclePhase.OVULATORY
    assert determine_phase(18, 28, 5) == CyclePhase.LUTEAL
    assert determine_phase(28, 28, 5) == CyclePhase.LUTEAL

def test_phase_boundaries_do_not_scale_with_cycle_length():
    """A 35 day cycle uses the same ovulatory days as a 28 day cycle."""
    assert determine_phase(14, 35, 5) == CyclePhase.OVULATORY
    assert determine_phase(18, 35, 5) == CyclePhase.LUTEAL
    assert determine_phase(35, 35, 5) == CyclePhase.LUTEAL

def test_long_period_collapses_follicular_phase():
    """Test a period of 13+ days leaves no follicular days."""
    phases = {determine_phase(day, 28, 13) for day in range(1, 29)}
    assert CyclePhase.FOLLICULAR not in phases
    assert determine_phase(13, 28, 13) == CyclePhase.MENSTRUAL
    assert determine_phase(14, 28, 13) == CyclePhase.OVULATORY

@pytest.mark.parametrize("cycle_length,period_length", [(17, 5), (21, 3), (28, 5), (35, 7), (40, 12)])
def test_phases_partition_cycle(cycle_length, period_length):
    """Every cycle day maps to exactly one phase, in order."""
    phases = [determine_phase(day, cycle_length, period_length) for day in range(1, cycle_length + 1)]
    order = [CyclePhase.MENSTRUAL, CyclePhase.FOLLICULAR, CyclePhase.OVULATORY, CyclePhase.LUTEAL]

    assert phases.count(CyclePhase.MENSTRUAL) == period_length
    assert phases.count(CyclePhase.FOLLICULAR) == 13 - period_length
    assert phases.count(CyclePhase.OVULATORY) == 4
    assert phases.count(CyclePhase.LUTEAL) == cycle_length - 17
    assert [order.index(p) for p in phases] == sorted(order.index(p) for p in phases)

def test_phase_progress():
    """Test progress through each phase."""
    assert calculate_phase_progress(1, 28, 5) == pytest.approx(0.2)
    assert calculate_phase_progress(5, 28, 5) == pytest.approx(1.0)
    assert calculate_phase_progress(9, 28, 5) == pytest.approx(0.5)
    assert calculate_phase_progress(15, 28, 5) == pytest.approx(0.5)
    assert calculate_phase_progress(28, 28, 5) == pytest.approx(1.0)
    assert calculate_phase_progress(21, 30, 5) == pytest.approx(4 / 13)

def test_phase_progress_stays_bounded():
    for day in range(1, 41):
        assert 0.0 <= calculate_phase_progress(day, 30, 15) <= 1.0

def test_get_sorted_records():
    records = [
        PeriodRecord(id="b", start_date=date(2024, 2, 1)),
        PeriodRecord(id="a", start_date=date(2024, 1, 1)),
        PeriodRecord(id="c", start_date=date(2024, 3, 1))
    ]
    assert [r.id for r in get_sorted_records(records)] == ["a", "b", "c"]
    assert [r.id for r in get_sorted_records(records, reverse=True)] == ["c", "b", "a"]

def test_days_between_is_signed():
    assert days_between(date(2024, 1, 1), date(2024, 1, 29)) == 28
    assert days_between(date(2024, 1, 29), date(2024, 1, 1)) == -28
