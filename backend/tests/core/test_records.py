"""Unit tests for record operations and the exercise catalogue."""

import pytest

from exebook.core.catalogue import EXERCISE_CATALOGUE, find_exercise
from exebook.core.errors import InvalidInput
from exebook.core.models import ExerciseKind, ExerciseRecord, Gender, UserProfile
from exebook.core.records import (
    create_record,
    remove_record,
    replace_record,
    with_training_details,
)


PROFILE = UserProfile(age=30, gender=Gender.MALE, height_cm=180, weight_kg=80)
RUNNING = ExerciseKind(name="Running", met_value=8.0)


def make_records(count: int) -> list[ExerciseRecord]:
    return [
        ExerciseRecord(exercise_name=f"Ex{i}", duration_minutes=10 + i, calories_burned=i)
        for i in range(count)
    ]


class TestCatalogue:
    """Tests for the exercise catalogue."""

    def test_contents(self):
        """Catalogue lists the five supported exercises."""
        assert [(k.name, k.met_value) for k in EXERCISE_CATALOGUE] == [
            ("Running", 8.0),
            ("Gym", 6.0),
            ("Swimming", 7.0),
            ("Yoga", 3.0),
            ("Cycling", 5.5),
        ]

    def test_find_ignores_case(self):
        """Lookup is case-insensitive."""
        assert find_exercise("swimming").met_value == 7.0

    def test_find_unknown(self):
        """Unknown names return None."""
        assert find_exercise("Curling") is None


class TestCreateRecord:
    """Tests for create_record."""

    def test_calories_computed(self):
        """Record carries the estimated calories."""
        record = create_record(PROFILE, RUNNING, 30, "Tempo run")
        assert record.exercise_name == "Running"
        assert record.duration_minutes == 30
        assert record.calories_burned == 320
        assert record.training_details == "Tempo run"

    def test_photo_attached(self):
        """Photo bytes are kept as-is."""
        record = create_record(PROFILE, RUNNING, 10, image_data=b"\x89PNG")
        assert record.image_data == b"\x89PNG"

    def test_invalid_duration_creates_nothing(self):
        """Invalid duration raises before a record exists."""
        with pytest.raises(InvalidInput):
            create_record(PROFILE, RUNNING, 0)


class TestReplaceRecord:
    """Tests for replace_record."""

    def test_preserves_position(self):
        """Updated record stays at the same index."""
        records = make_records(3)
        updated, replaced = replace_record(records, records[1].id, with_training_details("new"))

        assert replaced is True
        assert [r.id for r in updated] == [r.id for r in records]
        assert updated[1].training_details == "new"
        assert updated[1].calories_burned == records[1].calories_burned

    def test_input_not_mutated(self):
        """Original list and record are untouched."""
        records = make_records(2)
        replace_record(records, records[0].id, with_training_details("changed"))
        assert records[0].training_details == ""

    def test_immutable_fields_kept(self):
        """Mutators cannot change anything but the notes."""
        records = make_records(1)

        def tamper(record):
            return record.model_copy(update={"calories_burned": 9999, "training_details": "x"})

        updated, _ = replace_record(records, records[0].id, tamper)
        assert updated[0].calories_burned == records[0].calories_burned
        assert updated[0].training_details == "x"

    def test_missing_id(self):
        """Unknown id leaves the list unchanged."""
        records = make_records(2)
        updated, replaced = replace_record(records, "nope", with_training_details("x"))
        assert replaced is False
        assert updated == records


class TestRemoveRecord:
    """Tests for remove_record."""

    def test_removes_middle(self):
        """Removing the middle keeps first and last in order."""
        records = make_records(3)
        kept, removed = remove_record(records, records[1].id)
        assert removed == 1
        assert [r.id for r in kept] == [records[0].id, records[2].id]

    def test_removes_all_duplicates(self):
        """Every record sharing the id is removed."""
        records = make_records(2)
        duplicate = records[0].model_copy()
        kept, removed = remove_record(records + [duplicate], records[0].id)
        assert removed == 2
        assert [r.id for r in kept] == [records[1].id]

    def test_missing_id(self):
        """Unknown id removes nothing."""
        kept, removed = remove_record(make_records(2), "nope")
        assert removed == 0
        assert len(kept) == 2
