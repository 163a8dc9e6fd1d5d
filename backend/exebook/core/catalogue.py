"""Exercise catalogue - static MET reference data."""

from typing import Optional

from .models import ExerciseKind


EXERCISE_CATALOGUE: tuple[ExerciseKind, ...] = (
    ExerciseKind(name="Running", met_value=8.0),
    ExerciseKind(name="Gym", met_value=6.0),
    ExerciseKind(name="Swimming", met_value=7.0),
    ExerciseKind(name="Yoga", met_value=3.0),
    ExerciseKind(name="Cycling", met_value=5.5),
)


def find_exercise(name: str) -> Optional[ExerciseKind]:
    """Look up a catalogue entry by name, ignoring case."""
    wanted = name.strip().lower()
    for kind in EXERCISE_CATALOGUE:
        if kind.name.lower() == wanted:
            return kind
    return None
