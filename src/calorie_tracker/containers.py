"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from supabase import create_client

from calorie_tracker.adapters.openai_recognition_client import OpenAIRecognitionClient
from calorie_tracker.adapters.supabase_food_entry_repository import (
    SupabaseFoodEntryRepository,
)
from calorie_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from calorie_tracker.config import Settings
from calorie_tracker.services.entries import FoodEntryService
from calorie_tracker.services.history import HistoryService
from calorie_tracker.services.profiles import ProfileService
from calorie_tracker.services.recognition import RecognitionService
from calorie_tracker.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    stats_service: StatsService
    history_service: HistoryService
    entry_service: FoodEntryService
    recognition_service: RecognitionService
    close_resources: Callable[[], Awaitable[None]]
    clock: Callable[[], datetime] = field(default=lambda: datetime.now(tz=UTC))


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    entry_repository = SupabaseFoodEntryRepository(supabase_client)
    openai_client = OpenAIRecognitionClient.create(resolved_settings.openai_api_key)
    recognition_service = RecognitionService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=ProfileService(profile_repository),
        stats_service=StatsService(
            entry_repository=entry_repository,
            profile_repository=profile_repository,
        ),
        history_service=HistoryService(
            entry_repository, limit=resolved_settings.history_limit
        ),
        entry_service=FoodEntryService(entry_repository),
        recognition_service=recognition_service,
        close_resources=close_resources,
    )
