"""MCP Server - Tool definitions for logging and reviewing exercise sessions.

Each tool is a thin wrapper over the core calculations and the local stores.
"""

import base64
import binascii
import logging

from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from ..core.calories import parse_profile
from ..core.catalogue import EXERCISE_CATALOGUE, find_exercise
from ..core.errors import InvalidInput, WriteError
from ..core.models import AppSettings, ExerciseKind, ExerciseRecord
from ..core.records import create_record, with_training_details
from ..core.reports import summarize_records
from .record_store import RecordStore, SettingsStore, StoreConfig


logger = logging.getLogger(__name__)

mcp = FastMCP(
    "exebook",
    instructions="""ExeBook - Personal exercise logbook.

Use these tools to record the user's biometrics, log exercise sessions with
their estimated calorie burn, and review the session history.

On first use, call setup_profile with the user's age, gender, height and weight.
Use list_exercises to see which exercises can be logged.""",
)

# Lazy-initialized stores
_record_store: RecordStore | None = None
_settings_store: SettingsStore | None = None


def get_record_store() -> RecordStore:
    """Get or create the record store."""
    global _record_store
    if _record_store is None:
        _record_store = RecordStore(StoreConfig.from_env())
    return _record_store


def get_settings_store() -> SettingsStore:
    """Get or create the settings store."""
    global _settings_store
    if _settings_store is None:
        _settings_store = SettingsStore(StoreConfig.from_env())
    return _settings_store


def _record_to_dict(record: ExerciseRecord, include_image: bool = False) -> dict:
    data = {
        "id": record.id,
        "name": record.exercise_name,
        "duration": record.duration_minutes,
        "calories": record.calories_burned,
        "timestamp": record.timestamp.isoformat(),
        "training_details": record.training_details,
        "has_photo": record.image_data is not None,
    }
    if include_image and record.image_data is not None:
        data["image_base64"] = base64.b64encode(record.image_data).decode("ascii")
    return data


# ==================== Profile Tools ====================


@mcp.tool()
def setup_profile(
    age: str,
    gender: str,
    height_cm: str,
    weight_kg: str,
    workout_days: int | None = None,
    workout_time: str | None = None,
) -> dict:
    """Save the user's biometrics and workout preferences.

    Args:
        age: Age in years (e.g., "30")
        gender: "Male" or "Female"
        height_cm: Height in centimetres (e.g., "180")
        weight_kg: Weight in kilograms (e.g., "80")
        workout_days: Optional workout days per week (1-7)
        workout_time: Optional preferred workout time as HH:MM

    Returns:
        The stored profile, or an error message
    """
    try:
        profile = parse_profile(age, gender, height_cm, weight_kg)
    except InvalidInput as e:
        return {"error": str(e)}

    store = get_settings_store()
    updates: dict = {"profile": profile}
    if workout_days is not None:
        updates["workout_days"] = workout_days
    if workout_time is not None:
        updates["workout_time"] = workout_time

    current = store.load()
    try:
        settings = AppSettings.model_validate({**current.model_dump(), **updates})
    except ValidationError as e:
        return {"error": f"Invalid preferences: {e.errors()[0]['msg']}"}

    try:
        store.save(settings)
    except WriteError:
        return {"error": "Failed to save profile. Please try again."}

    return get_profile()


@mcp.tool()
def get_profile() -> dict:
    """Retrieve the user's profile and preferences.

    Returns:
        Dictionary with profile fields, or error message if not set up
    """
    settings = get_settings_store().load()
    if settings.profile is None:
        return {"error": "No profile found. Please use setup_profile first."}

    return {
        "age": settings.profile.age,
        "gender": settings.profile.gender.value,
        "height_cm": settings.profile.height_cm,
        "weight_kg": settings.profile.weight_kg,
        "workout_days": settings.workout_days,
        "workout_time": settings.workout_time,
        "has_seen_onboarding": settings.has_seen_onboarding,
    }


@mcp.tool()
def complete_onboarding() -> str:
    """Mark the introduction as seen so it is not shown again."""
    store = get_settings_store()
    settings = store.load().model_copy(update={"has_seen_onboarding": True})
    try:
        store.save(settings)
    except WriteError:
        return "Failed to save onboarding state. Please try again."
    return "Onboarding complete."


# ==================== Exercise Tools ====================


@mcp.tool()
def list_exercises() -> list[dict]:
    """List the exercises that can be logged with their MET values."""
    return [{"name": k.name, "met": k.met_value} for k in EXERCISE_CATALOGUE]


@mcp.tool()
def log_exercise(
    exercise_name: str,
    duration_minutes: int,
    training_details: str = "",
    photo_base64: str | None = None,
) -> dict:
    """Log an exercise session and estimate the calories burned.

    Args:
        exercise_name: One of the names from list_exercises (e.g., "Running")
        duration_minutes: Session length in minutes
        training_details: Optional notes (e.g., "Bench Press: 4 sets x 8 reps")
        photo_base64: Optional base64-encoded photo

    Returns:
        The created record, or an error message
    """
    settings = get_settings_store().load()
    if settings.profile is None:
        return {"error": "No profile found. Please use setup_profile first."}

    kind: ExerciseKind | None = find_exercise(exercise_name)
    if kind is None:
        return {"error": f"Unknown exercise: {exercise_name}"}

    image_data = None
    if photo_base64:
        try:
            image_data = base64.b64decode(photo_base64, validate=True)
        except binascii.Error:
            return {"error": "Photo must be base64-encoded."}

    try:
        record = create_record(
            settings.profile, kind, duration_minutes, training_details, image_data
        )
    except InvalidInput as e:
        return {"error": str(e)}

    try:
        get_record_store().append(record)
    except WriteError:
        return {"error": "Failed to save record. The session was not saved."}

    logger.info("Logged %s: %d min, %d kcal", record.exercise_name, record.duration_minutes, record.calories_burned)
    return {"record": _record_to_dict(record)}


@mcp.tool()
def update_training_details(record_id: str, training_details: str) -> dict:
    """Replace the training notes of a logged session.

    Args:
        record_id: The ID of the record to update
        training_details: New notes

    Returns:
        The updated record, or an error message
    """
    store = get_record_store()
    try:
        updated = store.update(record_id, with_training_details(training_details))
    except WriteError:
        return {"error": "Failed to save changes. Please try again."}

    if not updated:
        return {"error": "Record not found."}

    record = store.get(record_id)
    return {"record": _record_to_dict(record) if record else None}


@mcp.tool()
def delete_record(record_id: str) -> dict:
    """Delete a logged session.

    Args:
        record_id: The ID of the record to delete

    Returns:
        Confirmation and remaining record count
    """
    store = get_record_store()
    try:
        removed = store.delete(record_id)
    except WriteError:
        return {"error": "Failed to delete record. Please try again."}

    return {"success": removed, "records_remaining": len(store.load())}


# ==================== Query Tools ====================


@mcp.tool()
def list_records() -> list[dict]:
    """List all logged sessions, oldest first."""
    return [_record_to_dict(r) for r in get_record_store().load()]


@mcp.tool()
def get_record(record_id: str) -> dict:
    """Get one logged session including its photo.

    Args:
        record_id: The ID of the record

    Returns:
        The record with image_base64 when a photo is attached
    """
    record = get_record_store().get(record_id)
    if record is None:
        return {"error": "Record not found."}
    return _record_to_dict(record, include_image=True)


@mcp.tool()
def get_history_summary() -> dict:
    """Summarise all sessions overall and per exercise."""
    return summarize_records(get_record_store().load()).model_dump()
