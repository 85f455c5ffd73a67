"""Daily nutrition aggregation and progress against the calorie target."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, tzinfo
from uuid import UUID

from calorie_tracker.domain.entries import FoodEntry, parse_food_entry
from calorie_tracker.domain.stats import (
    AggregationResult,
    DailyDashboard,
    DailyProgress,
    NutritionTotals,
)
from calorie_tracker.errors import ParseError
from calorie_tracker.services.entries import FoodEntryRepository
from calorie_tracker.services.profiles import ProfileRepository
from calorie_tracker.services.targets import DEFAULT_CALORIE_TARGET

# The day window stops at 23:59:59 local time; the final second is excluded.
_DAY_START = time(0, 0, 0)
_DAY_END = time(23, 59, 59)

_logger = logging.getLogger(__name__)


def day_window(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """Return the half-open [start, end) window for a local calendar day."""
    start = datetime.combine(day, _DAY_START, tzinfo=tz)
    end = datetime.combine(day, _DAY_END, tzinfo=tz)
    return start, end


def today_window(now: datetime, tz: tzinfo) -> tuple[datetime, datetime]:
    """Return the day window containing ``now`` in the given timezone."""
    return day_window(now.astimezone(tz).date(), tz)


def aggregate(
    entries: Iterable[FoodEntry], window_start: datetime, window_end: datetime
) -> NutritionTotals:
    """Sum calories and macros of entries created within the window."""
    calories = protein = carbs = fat = 0.0
    for entry in entries:
        if not window_start <= entry.created_at < window_end:
            continue
        calories += entry.calories
        protein += entry.protein
        carbs += entry.carbs
        fat += entry.fat
    return NutritionTotals(calories=calories, protein=protein, carbs=carbs, fat=fat)


def aggregate_rows(
    rows: Iterable[Mapping[str, object]], window_start: datetime, window_end: datetime
) -> AggregationResult:
    """Parse raw store rows and aggregate them, skipping malformed rows."""
    entries: list[FoodEntry] = []
    skipped = 0
    for row in rows:
        try:
            entries.append(parse_food_entry(row))
        except ParseError as exc:
            skipped += 1
            _logger.warning("Skipping food entry %s: %s", exc.record_id, exc)
    return AggregationResult(
        totals=aggregate(entries, window_start, window_end), skipped=skipped
    )


def compute_progress(calories: float, target: int) -> DailyProgress:
    """Return progress ratio and remaining calories for a target."""
    progress = calories / target if target > 0 else 0.0
    return DailyProgress(
        target=target,
        progress=progress,
        remaining=max(0.0, target - calories),
        over_target=max(0.0, calories - target),
    )


@dataclass
class StatsService:
    """Service that builds the daily dashboard from stored data."""

    entry_repository: FoodEntryRepository
    profile_repository: ProfileRepository

    def get_dashboard(
        self, user_id: UUID, now: datetime, tz: tzinfo
    ) -> DailyDashboard:
        """Return today's totals and calorie progress in the user's timezone."""
        start, end = today_window(now, tz)
        rows = self.entry_repository.list_entry_rows(
            user_id, start.astimezone(UTC), end.astimezone(UTC)
        )
        result = aggregate_rows(rows, start, end)
        profile = self.profile_repository.get_profile(user_id)
        target = (
            profile.daily_calorie_target
            if profile is not None and profile.daily_calorie_target
            else DEFAULT_CALORIE_TARGET
        )
        return DailyDashboard(
            day=start.date(),
            totals=result.totals,
            progress=compute_progress(result.totals.calories, target),
            skipped=result.skipped,
        )
