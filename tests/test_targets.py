"""Tests for daily calorie target calculation."""

from uuid import uuid4

import pytest

from calorie_tracker.domain.profiles import ActivityLevel, Gender, Goal, NutritionProfile
from calorie_tracker.services.targets import (
    ACTIVITY_MULTIPLIERS,
    DEFAULT_CALORIE_TARGET,
    basal_metabolic_rate,
    compute_daily_calorie_target,
)


def _profile(**overrides: object) -> NutritionProfile:
    values: dict[str, object] = {
        "id": uuid4(),
        "weight": 70,
        "height": 175,
        "age": 25,
        "gender": "male",
        "activity_level": "sedentary",
        "goal": "maintain",
    }
    values.update(overrides)
    return NutritionProfile(**values)


def test_male_sedentary_maintain_rounds_half_up() -> None:
    assert compute_daily_calorie_target(_profile()) == 2129


@pytest.mark.parametrize(("goal", "expected"), [("lose", 1629), ("gain", 2629)])
def test_goal_adjusts_by_500(goal: str, expected: int) -> None:
    assert compute_daily_calorie_target(_profile(goal=goal)) == expected


def test_missing_goal_and_activity_use_defaults() -> None:
    profile = _profile(goal=None, activity_level=None)

    assert compute_daily_calorie_target(profile) == 2129


@pytest.mark.parametrize("missing", ["weight", "height", "age", "gender"])
def test_missing_body_metric_returns_default(missing: str) -> None:
    profile = _profile(**{missing: None})

    assert compute_daily_calorie_target(profile) == DEFAULT_CALORIE_TARGET


def test_empty_profile_returns_default() -> None:
    assert compute_daily_calorie_target(NutritionProfile(id=uuid4())) == 2000


def test_female_moderate() -> None:
    profile = _profile(
        weight=60, height=165, age=30, gender="female", activity_level="moderate"
    )

    # (600 + 1031.25 - 150 - 161) * 1.55 = 2046.39
    assert compute_daily_calorie_target(profile) == 2046


def test_other_gender_uses_female_constant() -> None:
    female = _profile(gender="female", activity_level="light")
    other = _profile(gender="other", activity_level="light")

    assert compute_daily_calorie_target(other) == compute_daily_calorie_target(female)


def test_very_active_male() -> None:
    profile = _profile(weight=80, height=180, age=40, activity_level="very_active")

    assert compute_daily_calorie_target(profile) == 3287


def test_lose_goal_is_not_clamped() -> None:
    profile = _profile(
        weight=30, height=100, age=100, gender="female", goal="lose"
    )

    assert compute_daily_calorie_target(profile) == -183


def test_invalid_metrics_fall_back_to_default() -> None:
    profile = _profile(weight=0, height="tall")

    assert compute_daily_calorie_target(profile) == DEFAULT_CALORIE_TARGET


def test_basal_metabolic_rate_constants() -> None:
    male = basal_metabolic_rate(
        weight_kg=70, height_cm=175, age_years=25, gender=Gender.MALE
    )
    female = basal_metabolic_rate(
        weight_kg=70, height_cm=175, age_years=25, gender=Gender.FEMALE
    )

    assert male == 1773.75
    assert male - female == 166


def test_activity_multipliers_are_read_only() -> None:
    assert set(ACTIVITY_MULTIPLIERS) == set(ActivityLevel)
    with pytest.raises(TypeError):
        ACTIVITY_MULTIPLIERS[ActivityLevel.ACTIVE] = 2.0  # type: ignore[index]


def test_goal_enum_covers_adjustments() -> None:
    for goal in Goal:
        assert isinstance(compute_daily_calorie_target(_profile(goal=goal)), int)
