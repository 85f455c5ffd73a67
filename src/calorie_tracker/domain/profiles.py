"""Domain models for user nutrition profiles."""

import math
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator


class Gender(StrEnum):
    """Gender values accepted by the profile form."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(StrEnum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class Goal(StrEnum):
    """Weight goal."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


_BODY_METRIC_FIELDS = ("weight", "height", "age", "gender")


class NutritionProfile(BaseModel):
    """Body metrics and goal for a single user.

    Values read from the store are normalised on the way in: non-positive or
    non-numeric metrics and unknown enum values become ``None`` instead of
    failing validation.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    email: str = ""
    full_name: str | None = None
    weight: float | None = None
    height: float | None = None
    age: int | None = None
    gender: Gender | None = None
    activity_level: ActivityLevel | None = None
    goal: Goal | None = None
    daily_calorie_target: int | None = None

    @field_validator("email", mode="before")
    @classmethod
    def _email_or_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("weight", "height", mode="before")
    @classmethod
    def _positive_real_or_none(cls, value: object) -> float | None:
        number = _as_number(value)
        if number is None or number <= 0:
            return None
        return number

    @field_validator("age", mode="before")
    @classmethod
    def _positive_int_or_none(cls, value: object) -> int | None:
        number = _as_number(value)
        if number is None or number <= 0 or number != int(number):
            return None
        return int(number)

    @field_validator("gender", "activity_level", "goal", mode="before")
    @classmethod
    def _known_choice_or_none(cls, value: object, info: ValidationInfo) -> object:
        if value is None or value == "":
            return None
        enum_type = _CHOICE_FIELDS[info.field_name]
        try:
            return enum_type(value)
        except ValueError:
            return None

    @field_validator("daily_calorie_target", mode="before")
    @classmethod
    def _int_or_none(cls, value: object) -> int | None:
        number = _as_number(value)
        if number is None:
            return None
        return int(number)

    @property
    def has_body_metrics(self) -> bool:
        """Return True when weight, height, age and gender are all set."""
        return all(getattr(self, name) is not None for name in _BODY_METRIC_FIELDS)


class ProfileUpdate(BaseModel):
    """Editable profile fields submitted by the profile form."""

    full_name: str | None = None
    weight: float | None = None
    height: float | None = None
    age: int | None = None
    gender: Gender | None = None
    activity_level: ActivityLevel | None = None
    goal: Goal | None = None


_CHOICE_FIELDS: dict[str, type[StrEnum]] = {
    "gender": Gender,
    "activity_level": ActivityLevel,
    "goal": Goal,
}


def _as_number(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None
