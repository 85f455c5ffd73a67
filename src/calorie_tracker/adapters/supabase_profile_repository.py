"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.domain.profiles import NutritionProfile
from calorie_tracker.errors import StoreError
from calorie_tracker.services.profiles import ProfileRepository

_PROFILE_COLUMNS = (
    "id, email, full_name, weight, height, age, gender, activity_level, goal, "
    "daily_calorie_target"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, user_id: UUID) -> NutritionProfile | None:
        """Return the profile row for a user, if present."""
        response = (
            self.client.table("profiles")
            .select(_PROFILE_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return NutritionProfile.model_validate(response.data[0])

    def upsert_profile(self, profile: NutritionProfile) -> NutritionProfile:
        """Insert or update the profile row."""
        payload = profile.model_dump(mode="json")
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = self.client.table("profiles").upsert(payload).execute()
        if not response.data:
            raise StoreError("Failed to save profile in Supabase")
        return NutritionProfile.model_validate(response.data[0])
