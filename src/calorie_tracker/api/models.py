"""Request and response models for the HTTP API."""

from datetime import date

from pydantic import BaseModel

from calorie_tracker.domain.entries import FoodEstimate, MealType


class EntryCreate(BaseModel):
    """Accepted recognition estimate to be logged."""

    estimate: FoodEstimate
    meal_type: MealType
    image_url: str | None = None


class TotalsResponse(BaseModel):
    calories: float
    protein: float
    carbs: float
    fat: float


class DashboardResponse(BaseModel):
    """Today's totals and progress toward the calorie target."""

    day: date
    totals: TotalsResponse
    target_calories: int
    progress: float
    remaining_calories: float
    over_target_calories: float
    skipped_entries: int
