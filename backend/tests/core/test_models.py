"""Unit tests for data models - validation, defaults and document format."""

import base64

import pytest
from pydantic import ValidationError

from exebook.core.models import (
    AppSettings,
    ExerciseKind,
    ExerciseRecord,
    Gender,
    StoredRecord,
    UserProfile,
)


class TestUserProfile:
    """Tests for UserProfile model."""

    def test_valid_profile(self):
        """Valid profile is created successfully."""
        profile = UserProfile(age=30, gender="male", height_cm=180, weight_kg=80)
        assert profile.gender is Gender.MALE

    def test_negative_weight_rejected(self):
        """Non-positive biometrics are rejected."""
        with pytest.raises(ValidationError):
            UserProfile(age=30, gender="male", height_cm=180, weight_kg=-5)

    def test_infinite_height_rejected(self):
        """Infinite biometrics are rejected."""
        with pytest.raises(ValidationError):
            UserProfile(age=30, gender="male", height_cm=float("inf"), weight_kg=80)

    def test_unknown_gender_rejected(self):
        """Only the two supported genders validate."""
        with pytest.raises(ValidationError):
            UserProfile(age=30, gender="other", height_cm=180, weight_kg=80)


class TestExerciseKind:
    """Tests for ExerciseKind model."""

    def test_zero_met_rejected(self):
        """MET must be positive."""
        with pytest.raises(ValidationError):
            ExerciseKind(name="Sitting", met_value=0)

    def test_nan_met_rejected(self):
        """MET must be finite."""
        with pytest.raises(ValidationError):
            ExerciseKind(name="Running", met_value=float("nan"))


class TestExerciseRecord:
    """Tests for ExerciseRecord model."""

    def test_defaults(self):
        """Defaults are set correctly."""
        record = ExerciseRecord(exercise_name="Yoga", duration_minutes=45, calories_burned=135)
        assert record.id is not None  # Auto-generated UUID
        assert record.image_data is None
        assert record.training_details == ""
        assert record.timestamp.tzinfo is not None

    def test_unique_ids(self):
        """Each record gets its own id."""
        ids = {
            ExerciseRecord(exercise_name="Gym", duration_minutes=1, calories_burned=0).id
            for _ in range(50)
        }
        assert len(ids) == 50

    def test_zero_duration_rejected(self):
        """Duration must be positive."""
        with pytest.raises(ValidationError):
            ExerciseRecord(exercise_name="Gym", duration_minutes=0, calories_burned=10)

    def test_negative_calories_rejected(self):
        """Calories cannot be negative."""
        with pytest.raises(ValidationError):
            ExerciseRecord(exercise_name="Gym", duration_minutes=10, calories_burned=-1)

    def test_document_keys(self):
        """JSON dump uses the stored document's key names."""
        record = ExerciseRecord(
            exercise_name="Running",
            duration_minutes=30,
            calories_burned=320,
            image_data=b"\xff\xd8jpeg",
            training_details="Intervals",
        )
        data = record.model_dump(mode="json", by_alias=True)

        assert set(data) == {
            "id", "name", "duration", "calories", "imageData", "timestamp", "trainingDetails",
        }
        assert data["imageData"] == base64.b64encode(b"\xff\xd8jpeg").decode("ascii")
        assert data["trainingDetails"] == "Intervals"

    def test_missing_image_omitted(self):
        """Records without a photo leave imageData out of the document."""
        record = ExerciseRecord(exercise_name="Yoga", duration_minutes=20, calories_burned=60)
        data = record.model_dump(mode="json", by_alias=True, exclude_none=True)
        assert "imageData" not in data

    def test_parse_document_entry(self):
        """A stored entry parses back into a record."""
        record = ExerciseRecord.model_validate({
            "id": "3f2c1d9e-0000-4000-8000-000000000001",
            "name": "Swimming",
            "duration": 40,
            "calories": 373,
            "imageData": base64.b64encode(b"photo").decode("ascii"),
            "timestamp": "2024-05-01T07:30:00+00:00",
            "trainingDetails": "",
        })
        assert record.exercise_name == "Swimming"
        assert record.image_data == b"photo"
        assert record.timestamp.year == 2024

    def test_stored_record_requires_id_and_timestamp(self):
        """Entries read back from the document never get a fresh id or time."""
        entry = {"name": "Gym", "duration": 10, "calories": 50}
        with pytest.raises(ValidationError):
            StoredRecord.model_validate({**entry, "timestamp": "2024-05-01T07:30:00+00:00"})
        with pytest.raises(ValidationError):
            StoredRecord.model_validate({**entry, "id": "abc"})

    def test_bad_base64_rejected(self):
        """Image text that is not base64 fails validation."""
        with pytest.raises(ValidationError):
            ExerciseRecord.model_validate({
                "name": "Gym", "duration": 10, "calories": 50, "imageData": "not base64!",
            })


class TestAppSettings:
    """Tests for AppSettings model."""

    def test_defaults(self):
        """Defaults match the first-run state."""
        settings = AppSettings()
        assert settings.profile is None
        assert settings.workout_days == 3
        assert settings.workout_time == "18:00"
        assert settings.has_seen_onboarding is False

    def test_workout_days_range(self):
        """Workout days must be 1-7."""
        with pytest.raises(ValidationError):
            AppSettings(workout_days=8)

    def test_workout_time_format(self):
        """Workout time must be HH:MM."""
        with pytest.raises(ValidationError):
            AppSettings(workout_time="6pm")
