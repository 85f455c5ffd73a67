"""Domain models for nutrition statistics."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class NutritionTotals:
    """Summed calories and macros."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


@dataclass(frozen=True)
class AggregationResult:
    """Totals over parsed rows plus the number of rows that failed to parse."""

    totals: NutritionTotals
    skipped: int = 0


@dataclass(frozen=True)
class DailyProgress:
    """Calorie progress against the daily target."""

    target: int
    progress: float
    remaining: float
    over_target: float


@dataclass(frozen=True)
class DailyDashboard:
    """Everything the dashboard shows for one day."""

    day: date
    totals: NutritionTotals
    progress: DailyProgress
    skipped: int
