"""Food history search and meal-type filtering."""

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from calorie_tracker.domain.entries import FoodEntry, MealType
from calorie_tracker.services.entries import FoodEntryRepository

DEFAULT_HISTORY_LIMIT = 50


def filter_entries(
    entries: Iterable[FoodEntry],
    search_text: str | None = None,
    meal_type: MealType | str | None = None,
) -> list[FoodEntry]:
    """Filter entries by food-name substring and meal type, keeping order.

    Matching is a case-insensitive substring test on the food name. Either
    filter is ignored when empty. An unknown meal type matches nothing.
    """
    needle = search_text.lower() if search_text else None
    wanted = None
    if meal_type:
        try:
            wanted = MealType(meal_type)
        except ValueError:
            return []
    return [
        entry
        for entry in entries
        if (needle is None or needle in entry.food_name.lower())
        and (wanted is None or entry.meal_type is wanted)
    ]


@dataclass
class HistoryService:
    """Service for the food history view."""

    repository: FoodEntryRepository
    limit: int = DEFAULT_HISTORY_LIMIT

    def get_history(
        self,
        user_id: UUID,
        search_text: str | None = None,
        meal_type: MealType | str | None = None,
        limit: int | None = None,
    ) -> list[FoodEntry]:
        """Return recent entries, newest first, matching the filters."""
        resolved_limit = self.limit if limit is None else limit
        if resolved_limit < 1:
            raise ValueError(f"History limit must be positive, got {resolved_limit}")
        entries = self.repository.list_recent_entries(user_id, resolved_limit)
        return filter_entries(entries, search_text, meal_type)
