"""
Symptom log model definitions.
"""
from enum import Enum
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field

from src.models.phase import CyclePhase

class SymptomSeverity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"

class SymptomLogEntry(BaseModel):
    """
    One symptom observed on one day.

    cycle_phase is captured when the symptom is logged and is never
    recomputed from later period history.
    """
    date: date
    symptom_id: str = Field(..., min_length=1)
    severity: SymptomSeverity = SymptomSeverity.MODERATE
    cycle_phase: Optional[CyclePhase] = None
    cycle_day: Optional[int] = Field(None, ge=1)
    notes: Optional[str] = None

    @property
    def key(self) -> tuple:
        """Identity of the entry in the log."""
        return (self.date, self.symptom_id)

class SymptomLikelihood(BaseModel):
    """
    Likelihood of a symptom within one phase, as a percentage.
    """
    symptom_id: str
    phase: CyclePhase
    likelihood: float  # 0-100
    occurrence_count: int
    total_days_in_phase: int
    average_severity: float  # 1 = mild, 2 = moderate, 3 = severe
    last_logged: date

class SymptomCount(BaseModel):
    symptom_id: str
    count: int
    last_logged: date

class SymptomPattern(BaseModel):
    """Occurrence statistics for a symptom in one phase."""
    symptom_id: str
    phase: CyclePhase
    occurrence_count: int
    total_days_in_phase: int
    average_severity: float

    @property
    def frequency(self) -> float:
        return self.occurrence_count / self.total_days_in_phase
