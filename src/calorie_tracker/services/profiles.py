"""Profile lifecycle: load-or-default and edit-and-save."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.profiles import NutritionProfile, ProfileUpdate
from calorie_tracker.services.targets import compute_daily_calorie_target

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for nutrition profiles."""

    def get_profile(self, user_id: UUID) -> NutritionProfile | None:
        """Return the stored profile for a user, if present."""

    def upsert_profile(self, profile: NutritionProfile) -> NutritionProfile:
        """Insert or replace a profile and return the stored version."""


def with_calorie_target(profile: NutritionProfile) -> NutritionProfile:
    """Return a copy of the profile with its derived target refreshed."""
    return profile.model_copy(
        update={"daily_calorie_target": compute_daily_calorie_target(profile)}
    )


@dataclass
class ProfileService:
    """Application service for profile reads and saves."""

    repository: ProfileRepository

    def get_profile(self, user_id: UUID, email: str = "") -> NutritionProfile:
        """Return the stored profile or an unsaved empty one."""
        existing = self.repository.get_profile(user_id)
        if existing is not None:
            return existing
        return NutritionProfile(id=user_id, email=email)

    def save_profile(
        self, user_id: UUID, changes: ProfileUpdate, email: str = ""
    ) -> NutritionProfile:
        """Apply edits, recompute the calorie target and persist the profile."""
        current = self.get_profile(user_id, email=email)
        merged = NutritionProfile.model_validate(
            {
                **current.model_dump(),
                **changes.model_dump(exclude_unset=True),
            }
        )
        saved = self.repository.upsert_profile(with_calorie_target(merged))
        _logger.info(
            "Saved profile %s with daily target %s",
            user_id,
            saved.daily_calorie_target,
        )
        return saved
