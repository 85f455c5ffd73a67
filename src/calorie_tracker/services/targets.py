"""Daily calorie target calculation (Mifflin-St Jeor)."""

import math
from types import MappingProxyType

from calorie_tracker.domain.profiles import ActivityLevel, Gender, Goal, NutritionProfile

DEFAULT_CALORIE_TARGET = 2000
GOAL_ADJUSTMENT_KCAL = 500

ACTIVITY_MULTIPLIERS = MappingProxyType(
    {
        ActivityLevel.SEDENTARY: 1.2,
        ActivityLevel.LIGHT: 1.375,
        ActivityLevel.MODERATE: 1.55,
        ActivityLevel.ACTIVE: 1.725,
        ActivityLevel.VERY_ACTIVE: 1.9,
    }
)
DEFAULT_ACTIVITY_MULTIPLIER = ACTIVITY_MULTIPLIERS[ActivityLevel.SEDENTARY]

_MALE_CONSTANT = 5
# "other" shares the female constant.
_NON_MALE_CONSTANT = -161

_GOAL_ADJUSTMENTS = MappingProxyType(
    {
        Goal.LOSE: -GOAL_ADJUSTMENT_KCAL,
        Goal.MAINTAIN: 0,
        Goal.GAIN: GOAL_ADJUSTMENT_KCAL,
    }
)


def compute_daily_calorie_target(profile: NutritionProfile) -> int:
    """Return the daily calorie target for a profile.

    Profiles missing any of weight, height, age or gender get the default
    target. The goal adjustment is applied without clamping, so a very low
    maintenance value can produce a non-positive target.
    """
    if not profile.has_body_metrics:
        return DEFAULT_CALORIE_TARGET

    bmr = basal_metabolic_rate(
        weight_kg=profile.weight,
        height_cm=profile.height,
        age_years=profile.age,
        gender=profile.gender,
    )
    multiplier = (
        ACTIVITY_MULTIPLIERS[profile.activity_level]
        if profile.activity_level is not None
        else DEFAULT_ACTIVITY_MULTIPLIER
    )
    target = _round_half_up(bmr * multiplier)
    if profile.goal is not None:
        target += _GOAL_ADJUSTMENTS[profile.goal]
    return target


def basal_metabolic_rate(
    *, weight_kg: float, height_cm: float, age_years: int, gender: Gender
) -> float:
    """Mifflin-St Jeor BMR in kcal/day."""
    constant = _MALE_CONSTANT if gender is Gender.MALE else _NON_MALE_CONSTANT
    return 10 * weight_kg + 6.25 * height_cm - 5 * age_years + constant


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
