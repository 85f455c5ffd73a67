"""Food entry logging service."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID, uuid4

from calorie_tracker.domain.entries import FoodEntry, FoodEstimate, MealType

_logger = logging.getLogger(__name__)


class FoodEntryRepository(Protocol):
    """Persistence interface for food entries."""

    def list_entry_rows(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[Mapping[str, object]]:
        """Return raw entry rows created in [start, end)."""

    def list_recent_entries(self, user_id: UUID, limit: int) -> list[FoodEntry]:
        """Return the most recent entries, newest first."""

    def create_entry(self, entry: FoodEntry) -> FoodEntry:
        """Persist a new entry and return the stored version."""

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry owned by the user; return True if a row was removed."""


@dataclass
class FoodEntryService:
    """Service that turns accepted estimates into logged entries."""

    repository: FoodEntryRepository

    def accept_estimate(  # noqa: PLR0913
        self,
        user_id: UUID,
        estimate: FoodEstimate,
        meal_type: MealType,
        now: datetime,
        image_url: str | None = None,
    ) -> FoodEntry:
        """Create and persist an entry from an accepted estimate."""
        entry = FoodEntry.from_estimate(
            entry_id=uuid4(),
            user_id=user_id,
            estimate=estimate,
            meal_type=meal_type,
            created_at=now,
            image_url=image_url,
        )
        stored = self.repository.create_entry(entry)
        _logger.info(
            "Logged %s for %s: %s kcal (%s)",
            stored.meal_type,
            user_id,
            stored.calories,
            stored.food_name,
        )
        return stored

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Forward an entry deletion to the store."""
        return self.repository.delete_entry(user_id, entry_id)
