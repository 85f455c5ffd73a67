"""Shared test fixtures."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.entries import FoodEntry, MealType, parse_food_entry
from calorie_tracker.domain.profiles import NutritionProfile
from calorie_tracker.errors import ParseError
from calorie_tracker.services.entries import FoodEntryRepository, FoodEntryService
from calorie_tracker.services.history import HistoryService
from calorie_tracker.services.profiles import ProfileRepository, ProfileService
from calorie_tracker.services.recognition import RecognitionClient, RecognitionService
from calorie_tracker.services.stats import StatsService

FIXED_NOW = datetime(2024, 5, 14, 12, 30, tzinfo=UTC)


def make_entry(  # noqa: PLR0913
    *,
    user_id: UUID,
    food_name: str = "Grilled Chicken Salad",
    calories: float = 350,
    protein: float = 35,
    carbs: float = 12,
    fat: float = 18,
    meal_type: MealType = MealType.LUNCH,
    created_at: datetime = FIXED_NOW,
) -> FoodEntry:
    return FoodEntry(
        id=uuid4(),
        user_id=user_id,
        food_name=food_name,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        serving_size="1 bowl",
        meal_type=meal_type,
        created_at=created_at,
    )


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, NutritionProfile] = field(default_factory=dict)
    upserts: list[NutritionProfile] = field(default_factory=list)

    def get_profile(self, user_id: UUID) -> NutritionProfile | None:
        return self.profiles.get(user_id)

    def upsert_profile(self, profile: NutritionProfile) -> NutritionProfile:
        self.profiles[profile.id] = profile
        self.upserts.append(profile)
        return profile


@dataclass
class InMemoryFoodEntryRepository(FoodEntryRepository):
    """In-memory food entry repository holding raw store rows."""

    rows: list[dict[str, object]] = field(default_factory=list)

    def add(self, entry: FoodEntry) -> None:
        self.rows.append(entry.model_dump(mode="json"))

    def list_entry_rows(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[Mapping[str, object]]:
        return [row for row in self.rows if row.get("user_id") == str(user_id)]

    def list_recent_entries(self, user_id: UUID, limit: int) -> list[FoodEntry]:
        entries = []
        for row in self.rows:
            if row.get("user_id") != str(user_id):
                continue
            try:
                entries.append(parse_food_entry(row))
            except ParseError:
                continue
        entries.sort(key=lambda entry: entry.created_at, reverse=True)
        return entries[:limit]

    def create_entry(self, entry: FoodEntry) -> FoodEntry:
        self.add(entry)
        return entry

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        before = len(self.rows)
        self.rows = [
            row
            for row in self.rows
            if not (row.get("id") == str(entry_id) and row.get("user_id") == str(user_id))
        ]
        return len(self.rows) < before


@dataclass
class FakeRecognitionClient(RecognitionClient):
    """Fake recognition client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "food_name": "Grilled Chicken Salad",
            "calories": 350,
            "protein": 35,
            "carbs": 12,
            "fat": 18,
            "fiber": 4,
            "sugar": None,
            "sodium": 420,
            "serving_size": "1 bowl",
            "confidence_score": 0.82,
        }
    )
    calls: list[dict[str, object]] = field(default_factory=list)

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.calls.append({"model": model, "image_data_url": image_data_url})
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
        openai_api_key="openai-key",
    )


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def entry_repository() -> InMemoryFoodEntryRepository:
    return InMemoryFoodEntryRepository()


@pytest.fixture
def recognition_client() -> FakeRecognitionClient:
    return FakeRecognitionClient()


@pytest.fixture
def container(
    settings: Settings,
    profile_repository: InMemoryProfileRepository,
    entry_repository: InMemoryFoodEntryRepository,
    recognition_client: FakeRecognitionClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        profile_service=ProfileService(profile_repository),
        stats_service=StatsService(
            entry_repository=entry_repository,
            profile_repository=profile_repository,
        ),
        history_service=HistoryService(entry_repository),
        entry_service=FoodEntryService(entry_repository),
        recognition_service=RecognitionService(
            client=recognition_client,
            model=settings.openai_model,
            reasoning_effort=settings.openai_reasoning_effort,
            store=settings.openai_store,
        ),
        close_resources=close_resources,
        clock=lambda: FIXED_NOW,
    )
