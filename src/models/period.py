"""
Period record and cycle configuration models.
"""
from datetime import date
from typing import Optional
from uuid import uuid4
from pydantic import BaseModel, Field, model_validator

from src.models.phase import LifeStage

DEFAULT_CYCLE_LENGTH = 28
DEFAULT_PERIOD_LENGTH = 5

class PeriodRecord(BaseModel):
    """
    Represents one logged menstrual period.

    cycle_length is the gap in days from the previous period start and is
    None for the earliest record.
    """
    id: str = Field(default_factory=lambda: uuid4().hex)
    start_date: date
    end_date: Optional[date] = None
    period_length: int = Field(DEFAULT_PERIOD_LENGTH, gt=0)
    cycle_length: Optional[int] = Field(None, gt=0)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_end_date(self) -> "PeriodRecord":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    @property
    def derived_period_length(self) -> int:
        """Period length from the end date when known, else the stored value."""
        if self.end_date is not None:
            return (self.end_date - self.start_date).days + 1
        return self.period_length

class CycleConfiguration(BaseModel):
    """
    User-level cycle defaults set during onboarding or in settings.

    Values outside the typical 21-35 day range are accepted; irregularity
    is reported by the statistics, not rejected here.
    """
    cycle_length: int = Field(DEFAULT_CYCLE_LENGTH, gt=0)
    period_length: int = Field(DEFAULT_PERIOD_LENGTH, gt=0)
    life_stage: LifeStage = LifeStage.REGULAR

class CycleLengthVariation(BaseModel):
    """Shortest and longest tracked cycle."""
    min: int
    max: int

    @property
    def spread(self) -> int:
        return self.max - self.min

class CycleStats(BaseModel):
    """
    Statistics derived from the period history.

    Always computed from the current records; never stored.
    """
    total_cycles_tracked: int
    average_cycle_length: float
    average_period_length: float
    cycle_length_variation: CycleLengthVariation
    last_cycle_length: Optional[int] = None
    last_period_length: Optional[int] = None
    is_irregular: bool

    @property
    def has_enough_data(self) -> bool:
        """Check if enough cycles are tracked to trust the averages."""
        return self.total_cycles_tracked >= 2

class PredictionBasis(BaseModel):
    """
    Inputs for projecting future cycles: the most recent period start and
    the effective cycle and period lengths.
    """
    anchor: date
    cycle_length: int = Field(..., gt=0)
    period_length: int = Field(..., gt=0)
    stats: CycleStats
