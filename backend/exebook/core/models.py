"""Core Data Models - Pydantic models for type safety.

Records serialize with the camelCase keys of the on-disk document
(name, duration, calories, imageData, timestamp, trainingDetails).
"""

import base64
import re
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Gender(str, Enum):
    """Selects the BMR formula branch."""

    MALE = "male"
    FEMALE = "female"


class UserProfile(BaseModel):
    """Biometrics used for calorie estimation."""

    model_config = ConfigDict(frozen=True)

    age: int = Field(gt=0, description="Age in years")
    gender: Gender
    height_cm: float = Field(gt=0, allow_inf_nan=False, description="Height in centimetres")
    weight_kg: float = Field(gt=0, allow_inf_nan=False, description="Weight in kilograms")


class ExerciseKind(BaseModel):
    """A catalogue entry pairing an exercise with its MET value."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    met_value: float = Field(gt=0, allow_inf_nan=False, description="Metabolic equivalent of task")


class ExerciseRecord(BaseModel):
    """A single logged exercise session."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    exercise_name: str = Field(alias="name", description="Exercise name, free text")
    duration_minutes: int = Field(gt=0, alias="duration")
    calories_burned: int = Field(ge=0, alias="calories", description="Fixed at creation")
    image_data: Optional[bytes] = Field(default=None, alias="imageData")
    timestamp: datetime = Field(default_factory=_utcnow)
    training_details: str = Field(default="", alias="trainingDetails")

    @field_validator("image_data", mode="before")
    @classmethod
    def _decode_image(cls, value):
        # The document stores images as base64 text
        if isinstance(value, str):
            return base64.b64decode(value, validate=True)
        return value

    @field_serializer("image_data", when_used="json-unless-none")
    def _encode_image(self, value: bytes) -> str:
        return base64.b64encode(value).decode("ascii")


class StoredRecord(ExerciseRecord):
    """A record read back from the document.

    id and timestamp must be present; they are never generated on read.
    """

    id: str = Field(min_length=1)
    timestamp: datetime


class ExerciseTotals(BaseModel):
    """Totals for one exercise name in the history."""

    exercise_name: str
    sessions: int = Field(ge=0)
    total_minutes: int = Field(ge=0)
    total_calories: int = Field(ge=0)


class HistorySummary(BaseModel):
    """Overview of all logged sessions."""

    sessions: int = Field(ge=0)
    total_minutes: int = Field(ge=0)
    total_calories: int = Field(ge=0)
    by_exercise: list[ExerciseTotals] = Field(default_factory=list)


_WORKOUT_TIME = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class AppSettings(BaseModel):
    """Per-user preferences kept alongside the records."""

    profile: Optional[UserProfile] = None
    workout_days: int = Field(default=3, ge=1, le=7, description="Workout days per week")
    workout_time: str = Field(default="18:00", description="Preferred workout time (HH:MM)")
    has_seen_onboarding: bool = False
    updated_at: datetime = Field(default_factory=_utcnow)

    @field_validator("workout_time")
    @classmethod
    def _check_workout_time(cls, value: str) -> str:
        if not _WORKOUT_TIME.match(value):
            raise ValueError("workout_time must be HH:MM")
        return value
