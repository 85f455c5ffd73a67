"""Domain models for logged food entries."""

from collections.abc import Mapping
from datetime import UTC, datetime
from enum import StrEnum
from typing import Annotated
from uuid import UUID

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from calorie_tracker.errors import ParseError


class MealType(StrEnum):
    """Meal category attached to a logged entry."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


def _strip_non_blank(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise ValueError("food_name must not be blank")
    return stripped


FoodName = Annotated[str, AfterValidator(_strip_non_blank)]


class FoodEstimate(BaseModel):
    """Structured nutrition estimate returned by the food-recognition service."""

    food_name: FoodName
    calories: float = Field(ge=0.0)
    protein: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    fat: float = Field(ge=0.0)
    fiber: float | None = Field(default=None, ge=0.0)
    sugar: float | None = Field(default=None, ge=0.0)
    sodium: float | None = Field(default=None, ge=0.0)
    serving_size: str = ""
    confidence_score: float | None = Field(default=None, ge=0.0, le=1.0)


class FoodEntry(BaseModel):
    """One logged meal with its nutrition facts.

    Calories are stored as estimated and are not checked against the macros.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    user_id: UUID
    food_name: FoodName
    calories: float = Field(ge=0.0)
    protein: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    fat: float = Field(ge=0.0)
    fiber: float | None = Field(default=None, ge=0.0)
    sugar: float | None = Field(default=None, ge=0.0)
    sodium: float | None = Field(default=None, ge=0.0)
    serving_size: str = ""
    meal_type: MealType
    image_url: str | None = None
    confidence_score: float | None = Field(default=None, ge=0.0, le=1.0)
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @classmethod
    def from_estimate(  # noqa: PLR0913
        cls,
        *,
        entry_id: UUID,
        user_id: UUID,
        estimate: FoodEstimate,
        meal_type: MealType,
        created_at: datetime,
        image_url: str | None = None,
    ) -> "FoodEntry":
        """Build an entry from an accepted recognition estimate."""
        return cls(
            id=entry_id,
            user_id=user_id,
            meal_type=meal_type,
            image_url=image_url,
            created_at=created_at,
            **estimate.model_dump(),
        )


def parse_food_entry(row: Mapping[str, object]) -> FoodEntry:
    """Parse a store row into a FoodEntry, raising ParseError when malformed."""
    try:
        return FoodEntry.model_validate(dict(row))
    except ValidationError as exc:
        fields = ", ".join(
            ".".join(str(part) for part in error["loc"]) for error in exc.errors()
        )
        raise ParseError(
            f"Malformed food entry ({fields})", record_id=row.get("id")
        ) from exc
