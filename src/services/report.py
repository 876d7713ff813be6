"""
Plain-text cycle history report, for sharing with a healthcare provider.
"""
from typing import List
from datetime import date

from src.models.period import PeriodRecord, CycleConfiguration
from src.services.cycle import predict_upcoming_cycles
from src.services.history import get_period_history
from src.services.statistics import calculate_cycle_statistics, round_days

IRREGULAR_NOTE = [
    "NOTE: Irregular cycles detected. Cycle lengths vary by more than 7 days",
    "or fall outside the typical 21-35 day range. This may be related to",
    "conditions such as PCOS, stress, or hormonal changes. Please consult",
    "a healthcare provider for personalized guidance."
]

def _format_date(value: date) -> str:
    return f"{value:%b} {value.day}, {value.year}"

def generate_cycle_report(
    records: List[PeriodRecord],
    config: CycleConfiguration,
    today: date
) -> str:
    """
    Generate the cycle history report.

    Args:
        records: Period records in any order
        config: User configuration
        today: Report date

    Returns:
        Formatted report string
    """
    stats = calculate_cycle_statistics(records, config)
    variation = stats.cycle_length_variation

    report = [
        "CYCLE HISTORY REPORT",
        f"Generated: {today:%A}, {_format_date(today)}",
        "",
        "=== CYCLE STATISTICS ===",
        f"Total Cycles Tracked: {stats.total_cycles_tracked}",
        f"Average Cycle Length: {round_days(stats.average_cycle_length)} days",
        f"Average Period Length: {round_days(stats.average_period_length)} days",
        f"Cycle Variation: {variation.min}-{variation.max} days",
        f"Cycle Regularity: {'IRREGULAR' if stats.is_irregular else 'REGULAR'}",
        ""
    ]

    if stats.is_irregular:
        report.extend([*IRREGULAR_NOTE, ""])

    if not stats.has_enough_data:
        report.extend(["Not enough data yet: log at least 3 periods for reliable averages.", ""])

    history = get_period_history(records)
    report.append("=== PERIOD HISTORY ===")
    for index, period in enumerate(history):
        report.append(f"Period {len(history) - index}:")
        report.append(f"  Start: {_format_date(period.start_date)}")
        if period.end_date:
            report.append(f"  End: {_format_date(period.end_date)}")
        report.append(f"  Period Length: {period.derived_period_length} days")
        if period.cycle_length is not None:
            report.append(f"  Cycle Length: {period.cycle_length} days")
        if period.notes:
            report.append(f"  Notes: {period.notes}")
        report.append("")

    upcoming = predict_upcoming_cycles(records, config, today, count=1)
    if upcoming:
        report.extend([
            "=== NEXT PREDICTED PERIOD ===",
            f"Start: {_format_date(upcoming[0].start_date)}",
            (f"Fertile Window: {_format_date(upcoming[0].fertile_window.start)} - "
             f"{_format_date(upcoming[0].fertile_window.end)}")
        ])

    return "\n".join(report).rstrip() + "\n"
