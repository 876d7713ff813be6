"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import date, timedelta
from typing import List

from src.models.period import PeriodRecord, CycleConfiguration
from src.models.phase import CyclePhase
from src.models.symptom import SymptomLogEntry, SymptomSeverity

@pytest.fixture
def default_config() -> CycleConfiguration:
    """Create the default 28/5 day configuration."""
    return CycleConfiguration(cycle_length=28, period_length=5)

@pytest.fixture
def regular_records() -> List[PeriodRecord]:
    """Periods on Jan 1, Jan 29 and Feb 24 (cycles of 28 and 26 days)."""
    return [
        PeriodRecord(id="p1", start_date=date(2024, 1, 1), end_date=date(2024, 1, 5)),
        PeriodRecord(id="p2", start_date=date(2024, 1, 29), end_date=date(2024, 2, 2)),
        PeriodRecord(id="p3", start_date=date(2024, 2, 24), end_date=date(2024, 2, 28))
    ]

@pytest.fixture
def irregular_records(regular_records) -> List[PeriodRecord]:
    """Regular history followed by a 40 day cycle."""
    return regular_records + [
        PeriodRecord(id="p4", start_date=date(2024, 4, 4), end_date=date(2024, 4, 8))
    ]

@pytest.fixture
def luteal_symptom_log() -> List[SymptomLogEntry]:
    """Ten luteal days logged, bloating on six of them and cramps on two."""
    start = date(2024, 3, 10)
    entries = []
    for i in range(10):
        day = start + timedelta(days=i)
        entries.append(SymptomLogEntry(
            date=day,
            symptom_id="fatigue",
            severity=SymptomSeverity.MILD,
            cycle_phase=CyclePhase.LUTEAL
        ))
        if i < 6:
            entries.append(SymptomLogEntry(
                date=day,
                symptom_id="bloating",
                severity=SymptomSeverity.SEVERE if i % 2 else SymptomSeverity.MODERATE,
                cycle_phase=CyclePhase.LUTEAL
            ))
        if i in (1, 8):
            entries.append(SymptomLogEntry(
                date=day,
                symptom_id="cramps",
                severity=SymptomSeverity.MODERATE,
                cycle_phase=CyclePhase.LUTEAL
            ))
    return entries
