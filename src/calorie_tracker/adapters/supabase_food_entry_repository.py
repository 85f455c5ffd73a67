"""Supabase repository for logged food entries."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.domain.entries import FoodEntry, parse_food_entry
from calorie_tracker.errors import ParseError, StoreError
from calorie_tracker.services.entries import FoodEntryRepository

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseFoodEntryRepository(FoodEntryRepository):
    """Supabase implementation for food entry queries."""

    client: Client

    def list_entry_rows(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[Mapping[str, object]]:
        """Return raw entry rows created in the time range."""
        response = (
            self.client.table("food_entries")
            .select("*")
            .eq("user_id", str(user_id))
            .gte("created_at", start.isoformat())
            .lt("created_at", end.isoformat())
            .execute()
        )
        return list(response.data or [])

    def list_recent_entries(self, user_id: UUID, limit: int) -> list[FoodEntry]:
        """Return recent entries, newest first, dropping malformed rows."""
        response = (
            self.client.table("food_entries")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        entries: list[FoodEntry] = []
        for row in response.data or []:
            try:
                entries.append(parse_food_entry(row))
            except ParseError as exc:
                _logger.warning("Skipping food entry %s: %s", exc.record_id, exc)
        return entries

    def create_entry(self, entry: FoodEntry) -> FoodEntry:
        """Insert an entry row and return the stored entry."""
        response = (
            self.client.table("food_entries")
            .insert(entry.model_dump(mode="json"))
            .execute()
        )
        if not response.data:
            raise StoreError("Failed to create food entry in Supabase")
        return parse_food_entry(response.data[0])

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry owned by the user."""
        response = (
            self.client.table("food_entries")
            .delete()
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)
