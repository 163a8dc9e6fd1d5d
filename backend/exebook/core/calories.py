"""Calorie Calculations - Pure functions for exercise energy math.

All functions are pure: same input always produces same output, no side effects.
"""

import math

from pydantic import ValidationError

from .errors import InvalidInput
from .models import Gender, UserProfile


def parse_gender(value: str) -> Gender:
    """Parse a gender label such as "Male" or "female".

    Args:
        value: Gender label from the profile provider

    Returns:
        The matching Gender

    Raises:
        InvalidInput: If the label is not one of the supported genders
    """
    try:
        return Gender(str(value).strip().lower())
    except ValueError:
        raise InvalidInput(f"Unsupported gender: {value!r}") from None


def parse_profile(age: str, gender: str, height: str, weight: str) -> UserProfile:
    """Build a UserProfile from the string fields a form collects.

    Args:
        age: Age in years, integer text
        gender: Gender label
        height: Height in centimetres
        weight: Weight in kilograms

    Returns:
        Validated UserProfile

    Raises:
        InvalidInput: If any field is unparseable or not positive
    """
    try:
        age_value = int(str(age).strip())
        height_value = float(str(height).strip())
        weight_value = float(str(weight).strip())
    except ValueError as e:
        raise InvalidInput(f"Profile fields must be numeric: {e}") from None

    try:
        return UserProfile(
            age=age_value,
            gender=parse_gender(gender),
            height_cm=height_value,
            weight_kg=weight_value,
        )
    except ValidationError as e:
        raise InvalidInput(f"Invalid profile: {e.errors()[0]['msg']}") from None


def _positive(value) -> bool:
    # NaN and infinity fail too
    return math.isfinite(value) and value > 0


def _check_profile(profile: UserProfile) -> None:
    if not all(_positive(v) for v in (profile.age, profile.height_cm, profile.weight_kg)):
        raise InvalidInput("Age, height and weight must be positive")
    if not isinstance(profile.gender, Gender):
        raise InvalidInput(f"Unsupported gender: {profile.gender!r}")


def calculate_bmr(profile: UserProfile) -> float:
    """Calculate basal metabolic rate (Harris-Benedict).

    Args:
        profile: User biometrics

    Returns:
        Estimated resting calories per day
    """
    _check_profile(profile)
    if profile.gender is Gender.MALE:
        return 66 + 13.7 * profile.weight_kg + 5 * profile.height_cm - 6.8 * profile.age
    return 655 + 9.6 * profile.weight_kg + 1.8 * profile.height_cm - 4.7 * profile.age


def estimate_calories(profile: UserProfile, met_value: float, duration_minutes: int) -> int:
    """Estimate calories burned during an exercise session.

    Uses MET * weight (kg) * hours. BMR is evaluated for the same profile
    but does not contribute to the session figure.

    Args:
        profile: User biometrics
        met_value: MET value of the exercise
        duration_minutes: Session length in minutes

    Returns:
        Calories burned, truncated to an integer

    Raises:
        InvalidInput: If any input is not a positive finite number
    """
    _check_profile(profile)
    if not _positive(duration_minutes):
        raise InvalidInput("Duration must be positive")
    if not _positive(met_value):
        raise InvalidInput("MET value must be positive")

    time_hours = duration_minutes / 60
    calculate_bmr(profile)
    calories = met_value * profile.weight_kg * time_hours
    return int(calories)
