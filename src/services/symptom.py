"""
Symptom likelihood estimation from the symptom log.

Likelihoods are occurrence frequencies over logged days, expressed as
percentages. Each entry keeps the phase captured when it was logged.

Typical usage:
    likely = estimate_symptom_likelihood(entries, CyclePhase.LUTEAL, limit=3)
    for item in likely:
        print(f"{item.symptom_id}: {item.likelihood:.0f}%")
"""
from collections import defaultdict
from typing import Dict, List, Optional, Set
from datetime import date
from statistics import mean

from aws_lambda_powertools import Logger

from src.models.phase import CyclePhase
from src.models.symptom import (
    SymptomLogEntry,
    SymptomLikelihood,
    SymptomCount,
    SymptomPattern
)
from src.services.constants import SEVERITY_VALUES, DEFAULT_COMMON_SYMPTOMS_LIMIT

logger = Logger()

def _group_by_symptom(entries: List[SymptomLogEntry]) -> Dict[str, List[SymptomLogEntry]]:
    groups: Dict[str, List[SymptomLogEntry]] = defaultdict(list)
    for entry in entries:
        groups[entry.symptom_id].append(entry)
    return groups

def _ranking_key(likelihood: float, last_logged: date, symptom_id: str) -> tuple:
    # Higher likelihood first, then most recent occurrence, then id
    return (-likelihood, -last_logged.toordinal(), symptom_id)

def estimate_symptom_likelihood(
    entries: List[SymptomLogEntry],
    phase: CyclePhase,
    limit: Optional[int] = None,
    min_likelihood: float = 0.0
) -> List[SymptomLikelihood]:
    """
    Estimate how likely each symptom is during a phase.

    likelihood = days the symptom was logged in the phase
                 / days with any symptom logged in the phase * 100

    Args:
        entries: Full symptom log
        phase: Phase to estimate for
        limit: Maximum number of symptoms to return (all when None)
        min_likelihood: Drop symptoms below this percentage

    Returns:
        Symptoms sorted by likelihood (ties go to the most recently logged),
        empty when nothing was logged in the phase

    Example:
        >>> # 10 luteal days logged, bloating on 6 of them
        >>> result = estimate_symptom_likelihood(entries, CyclePhase.LUTEAL, limit=1)
        >>> result[0].likelihood
        60.0
    """
    phase_entries = get_entries_for_phase(entries, phase)
    logged_days: Set[date] = {e.date for e in phase_entries}
    total_days = len(logged_days)

    if total_days == 0:
        logger.debug("No symptoms logged in phase", extra={"phase": phase.value})
        return []

    results = []
    for symptom_id, group in _group_by_symptom(phase_entries).items():
        occurrence_days = {e.date for e in group}
        likelihood = len(occurrence_days) / total_days * 100
        if likelihood < min_likelihood:
            continue
        results.append(SymptomLikelihood(
            symptom_id=symptom_id,
            phase=phase,
            likelihood=likelihood,
            occurrence_count=len(occurrence_days),
            total_days_in_phase=total_days,
            average_severity=mean(SEVERITY_VALUES[e.severity] for e in group),
            last_logged=max(occurrence_days)
        ))

    results.sort(key=lambda r: _ranking_key(r.likelihood, r.last_logged, r.symptom_id))
    if limit is not None:
        results = results[:limit]
    return results

def get_most_common_symptoms(
    entries: List[SymptomLogEntry],
    limit: int = DEFAULT_COMMON_SYMPTOMS_LIMIT
) -> List[SymptomCount]:
    """
    Get the most frequently logged symptoms across all phases.

    Args:
        entries: Full symptom log
        limit: Maximum number of symptoms to return

    Returns:
        Symptoms sorted by number of logged days (ties go to the most recent)
    """
    counts = []
    for symptom_id, group in _group_by_symptom(entries).items():
        days = {e.date for e in group}
        counts.append(SymptomCount(symptom_id=symptom_id, count=len(days), last_logged=max(days)))

    counts.sort(key=lambda c: _ranking_key(c.count, c.last_logged, c.symptom_id))
    return counts[:limit]

def get_symptom_patterns(entries: List[SymptomLogEntry]) -> List[SymptomPattern]:
    """
    Get occurrence statistics for every symptom in every phase it was
    logged in. Entries without a captured phase are ignored.

    Returns:
        Patterns sorted by frequency within their phase, highest first
    """
    days_per_phase: Dict[CyclePhase, Set[date]] = defaultdict(set)
    for entry in entries:
        if entry.cycle_phase is not None:
            days_per_phase[entry.cycle_phase].add(entry.date)

    patterns = []
    for phase, days in days_per_phase.items():
        phase_entries = get_entries_for_phase(entries, phase)
        for symptom_id, group in _group_by_symptom(phase_entries).items():
            patterns.append(SymptomPattern(
                symptom_id=symptom_id,
                phase=phase,
                occurrence_count=len({e.date for e in group}),
                total_days_in_phase=len(days),
                average_severity=mean(SEVERITY_VALUES[e.severity] for e in group)
            ))

    return sorted(patterns, key=lambda p: (-p.frequency, p.phase.value, p.symptom_id))

def log_symptom(entries: List[SymptomLogEntry], entry: SymptomLogEntry) -> List[SymptomLogEntry]:
    """
    Add a symptom entry, replacing any entry for the same date and symptom.

    Returns:
        New log sorted newest first
    """
    updated = [e for e in entries if e.key != entry.key]
    updated.append(entry)
    return sorted(updated, key=lambda e: (e.date, e.symptom_id), reverse=True)

def get_entries_for_phase(entries: List[SymptomLogEntry], phase: CyclePhase) -> List[SymptomLogEntry]:
    return [e for e in entries if e.cycle_phase == phase]
