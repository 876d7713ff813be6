"""
Constants and shared data for cycle-related services.

Phase boundaries are fixed cycle days, not scaled by the cycle length.
"""
from datetime import date
from typing import Dict, List
from src.models.phase import CyclePhase, LifeStage, MoonPhase
from src.models.symptom import SymptomSeverity

FOLLICULAR_END_DAY = 13
OVULATORY_END_DAY = 17

# Ovulation is estimated 14 days before the next predicted period
LUTEAL_PHASE_LENGTH = 14
FERTILE_DAYS_BEFORE_OVULATION = 5
FERTILE_DAYS_AFTER_OVULATION = 1

TYPICAL_CYCLE_RANGE = (21, 35)
MAX_REGULAR_CYCLE_SPREAD = 7
MIN_CYCLES_FOR_AVERAGE = 2

DEFAULT_UPCOMING_CYCLES = 3
DEFAULT_COMMON_SYMPTOMS_LIMIT = 5
PREDICTED_SYMPTOM_THRESHOLD = 30.0

SEVERITY_VALUES: Dict[SymptomSeverity, int] = {
    SymptomSeverity.MILD: 1,
    SymptomSeverity.MODERATE: 2,
    SymptomSeverity.SEVERE: 3
}

MOON_LIFE_STAGES = {
    LifeStage.PERIMENOPAUSE,
    LifeStage.MENOPAUSE,
    LifeStage.POSTMENOPAUSE
}

PHASE_INFO = {
    CyclePhase.MENSTRUAL: {
        "name": "Menstrual",
        "description": "Inner Winter - A time for rest, reflection, and gentle self-care.",
        "energy": "Low & Inward",
        "superpower": "Deep intuition & self-awareness"
    },
    CyclePhase.FOLLICULAR: {
        "name": "Follicular",
        "description": "Inner Spring - Fresh energy emerges. Perfect for new beginnings.",
        "energy": "Rising & Creative",
        "superpower": "New ideas & fresh perspectives"
    },
    CyclePhase.OVULATORY: {
        "name": "Ovulatory",
        "description": "Inner Summer - Peak energy and social magnetism.",
        "energy": "High & Outward",
        "superpower": "Communication & connection"
    },
    CyclePhase.LUTEAL: {
        "name": "Luteal",
        "description": "Inner Autumn - Time to complete tasks and turn inward.",
        "energy": "Winding Down",
        "superpower": "Focus & attention to detail"
    }
}

PHASE_TYPICAL_SYMPTOMS: Dict[CyclePhase, List[str]] = {
    CyclePhase.MENSTRUAL: [
        "cramps",
        "backache",
        "fatigue",
        "headache",
        "low_energy",
        "mood_swings"
    ],
    CyclePhase.FOLLICULAR: [
        "high_energy",
        "happy",
        "confident",
        "glowing_skin"
    ],
    CyclePhase.OVULATORY: [
        "libido_high",
        "high_energy",
        "breast_tenderness",
        "confident"
    ],
    CyclePhase.LUTEAL: [
        "bloating",
        "cravings",
        "irritability",
        "breast_tenderness",
        "fatigue",
        "acne"
    ]
}

PHASE_TRANSITIONS = {
    CyclePhase.MENSTRUAL: CyclePhase.FOLLICULAR,
    CyclePhase.FOLLICULAR: CyclePhase.OVULATORY,
    CyclePhase.OVULATORY: CyclePhase.LUTEAL,
    CyclePhase.LUTEAL: CyclePhase.MENSTRUAL
}

# Known new moon: January 6, 2000 18:14 UTC
LUNAR_REFERENCE_DATE = date(2000, 1, 6)
LUNAR_REFERENCE_DAY_FRACTION = (18 * 60 + 14) / (24 * 60)
LUNAR_CYCLE_DAYS = 29.53058867

# Upper bound of moon age (days) for each phase, in order
MOON_PHASE_BOUNDARIES = [
    (1.85, MoonPhase.NEW_MOON),
    (7.38, MoonPhase.WAXING_CRESCENT),
    (9.23, MoonPhase.FIRST_QUARTER),
    (14.77, MoonPhase.WAXING_GIBBOUS),
    (16.61, MoonPhase.FULL_MOON),
    (22.15, MoonPhase.WANING_GIBBOUS),
    (23.99, MoonPhase.LAST_QUARTER)
]

MOON_PHASE_INFO = {
    MoonPhase.NEW_MOON: {
        "name": "New Moon",
        "description": "A time for rest, reflection, and setting intentions.",
        "energy": "Inward & Restorative",
        "cycle_phase": CyclePhase.MENSTRUAL
    },
    MoonPhase.WAXING_CRESCENT: {
        "name": "Waxing Crescent",
        "description": "Fresh energy emerges. Plant seeds for new beginnings.",
        "energy": "Rising & Hopeful",
        "cycle_phase": CyclePhase.FOLLICULAR
    },
    MoonPhase.FIRST_QUARTER: {
        "name": "First Quarter",
        "description": "Take action on your intentions. Build momentum.",
        "energy": "Active & Determined",
        "cycle_phase": CyclePhase.FOLLICULAR
    },
    MoonPhase.WAXING_GIBBOUS: {
        "name": "Waxing Gibbous",
        "description": "Refine and adjust. Trust the process.",
        "energy": "Building & Refining",
        "cycle_phase": CyclePhase.OVULATORY
    },
    MoonPhase.FULL_MOON: {
        "name": "Full Moon",
        "description": "Peak energy and illumination. Celebrate your progress.",
        "energy": "High & Radiant",
        "cycle_phase": CyclePhase.OVULATORY
    },
    MoonPhase.WANING_GIBBOUS: {
        "name": "Waning Gibbous",
        "description": "Share your wisdom. Practice gratitude.",
        "energy": "Generous & Grateful",
        "cycle_phase": CyclePhase.LUTEAL
    },
    MoonPhase.LAST_QUARTER: {
        "name": "Last Quarter",
        "description": "Release what no longer serves you. Forgive and let go.",
        "energy": "Releasing & Clearing",
        "cycle_phase": CyclePhase.LUTEAL
    },
    MoonPhase.WANING_CRESCENT: {
        "name": "Waning Crescent",
        "description": "Rest and surrender. Prepare for renewal.",
        "energy": "Restful & Surrendering",
        "cycle_phase": CyclePhase.MENSTRUAL
    }
}
