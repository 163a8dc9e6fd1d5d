"""Record Operations - Pure functions for building and editing record lists.

All functions are pure: inputs are never mutated, new lists are returned.
"""

from typing import Callable, Optional

from pydantic import ValidationError

from .calories import estimate_calories
from .errors import InvalidInput
from .models import ExerciseKind, ExerciseRecord, UserProfile


RecordMutator = Callable[[ExerciseRecord], ExerciseRecord]


def create_record(
    profile: UserProfile,
    kind: ExerciseKind,
    duration_minutes: int,
    training_details: str = "",
    image_data: Optional[bytes] = None,
) -> ExerciseRecord:
    """Estimate calories and build a new record.

    Args:
        profile: User biometrics
        kind: The chosen exercise
        duration_minutes: Session length in minutes
        training_details: Free-text notes
        image_data: Optional compressed photo

    Returns:
        A new ExerciseRecord with a fresh id and timestamp

    Raises:
        InvalidInput: If the calorie estimate or record validation fails
    """
    calories = estimate_calories(profile, kind.met_value, duration_minutes)
    try:
        return ExerciseRecord(
            exercise_name=kind.name,
            duration_minutes=duration_minutes,
            calories_burned=calories,
            image_data=image_data,
            training_details=training_details,
        )
    except ValidationError as e:
        raise InvalidInput(f"Invalid record: {e.errors()[0]['msg']}") from None


def with_training_details(text: str) -> RecordMutator:
    """Return a mutator that replaces only the training details."""

    def mutate(record: ExerciseRecord) -> ExerciseRecord:
        return record.model_copy(update={"training_details": text})

    return mutate


def replace_record(
    records: list[ExerciseRecord], record_id: str, mutator: RecordMutator
) -> tuple[list[ExerciseRecord], bool]:
    """Apply mutator to the first record with record_id, keeping its position.

    Everything except training_details carries over from
    the original record.

    Returns:
        Tuple of (new list, whether a record was replaced)
    """
    for i, record in enumerate(records):
        if record.id == record_id:
            updated = mutator(record).model_copy(
                update={
                    "id": record.id,
                    "exercise_name": record.exercise_name,
                    "duration_minutes": record.duration_minutes,
                    "calories_burned": record.calories_burned,
                    "image_data": record.image_data,
                    "timestamp": record.timestamp,
                }
            )
            return records[:i] + [updated] + records[i + 1:], True
    return list(records), False


def remove_record(
    records: list[ExerciseRecord], record_id: str
) -> tuple[list[ExerciseRecord], int]:
    """Drop every record with record_id.

    Returns:
        Tuple of (new list, number of records removed)
    """
    kept = [r for r in records if r.id != record_id]
    return kept, len(records) - len(kept)
