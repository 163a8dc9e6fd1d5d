"""Report Generation - Pure functions for summarising exercise history.

All functions are pure: same input always produces same output, no side effects.
"""

from .models import ExerciseRecord, ExerciseTotals, HistorySummary


def calculate_totals(records: list[ExerciseRecord]) -> tuple[int, int, int]:
    """Calculate session count, minutes and calories for a list of records.

    Args:
        records: Records to total

    Returns:
        Tuple of (sessions, minutes, calories)
    """
    total_minutes = sum(r.duration_minutes for r in records)
    total_calories = sum(r.calories_burned for r in records)

    return len(records), total_minutes, total_calories


def summarize_records(records: list[ExerciseRecord]) -> HistorySummary:
    """Summarise the full history, overall and per exercise.

    Exercises are listed in the order they first appear in the history.

    Args:
        records: All stored records in insertion order

    Returns:
        HistorySummary with overall and per-exercise totals
    """
    grouped: dict[str, list[ExerciseRecord]] = {}
    for record in records:
        grouped.setdefault(record.exercise_name, []).append(record)

    by_exercise = []
    for name, group in grouped.items():
        sessions, minutes, calories = calculate_totals(group)
        by_exercise.append(ExerciseTotals(
            exercise_name=name,
            sessions=sessions,
            total_minutes=minutes,
            total_calories=calories,
        ))

    sessions, minutes, calories = calculate_totals(records)

    return HistorySummary(
        sessions=sessions,
        total_minutes=minutes,
        total_calories=calories,
        by_exercise=by_exercise,
    )
