"""
Phase model definitions for menstrual cycle phases and predictions.
"""
from enum import Enum
from datetime import date
from typing import Optional
from pydantic import BaseModel

class CyclePhase(str, Enum):
    """
    Menstrual cycle phases.
    """
    MENSTRUAL = "menstrual"
    FOLLICULAR = "follicular"
    OVULATORY = "ovulatory"
    LUTEAL = "luteal"

class LifeStage(str, Enum):
    """
    Reproductive life stages. Non-regular stages follow the moon phase.
    """
    REGULAR = "regular"
    PERIMENOPAUSE = "perimenopause"
    MENOPAUSE = "menopause"
    POSTMENOPAUSE = "postmenopause"

class MoonPhase(str, Enum):
    NEW_MOON = "new_moon"
    WAXING_CRESCENT = "waxing_crescent"
    FIRST_QUARTER = "first_quarter"
    WAXING_GIBBOUS = "waxing_gibbous"
    FULL_MOON = "full_moon"
    WANING_GIBBOUS = "waning_gibbous"
    LAST_QUARTER = "last_quarter"
    WANING_CRESCENT = "waning_crescent"

class FertileWindow(BaseModel):
    """Inclusive range of days with elevated conception likelihood."""
    start: date
    end: date

    def contains(self, target_date: date) -> bool:
        return self.start <= target_date <= self.end

class PredictedCycle(BaseModel):
    """
    A projected future cycle.
    """
    start_date: date
    end_date: date  # Last predicted period day
    ovulation_day: date
    fertile_window: FertileWindow

class CycleSnapshot(BaseModel):
    """
    Represents the state of the cycle on a given day.
    """
    target_date: date
    day_of_cycle: int
    phase: CyclePhase
    phase_progress: float
    cycle_length: int
    period_length: int
    current_cycle_start: Optional[date] = None
    next_period_date: Optional[date] = None
    days_until_next_period: Optional[int] = None
    ovulation_day: Optional[date] = None
    fertile_window: Optional[FertileWindow] = None
    is_period_day: bool = False
    is_fertile_day: bool = False
    is_ovulation_day: bool = False
    life_stage: LifeStage = LifeStage.REGULAR
    moon_phase: Optional[MoonPhase] = None
    moon_phase_equivalent: Optional[CyclePhase] = None

    @property
    def has_history(self) -> bool:
        """Check if the snapshot is anchored on a logged period."""
        return self.current_cycle_start is not None
