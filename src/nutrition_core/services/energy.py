"""Daily energy budget from a normalized profile."""

import logging
import math

from nutrition_core.domain.profile import (
    DIET_GOAL_MODIFIERS,
    ActivityLevel,
    DietGoalObjective,
    Objective,
    Profile,
    Sex,
    WeightDirection,
)

MALE_BMR_OFFSET = 5.0
FEMALE_BMR_OFFSET = -161.0
KCAL_PER_KG = 7700
DAYS_PER_WEEK = 7
MIN_DAILY_CALORIES = 1200

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

_logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def calculate_bmr(
    profile: Profile, other_sex_offset: float = FEMALE_BMR_OFFSET
) -> float:
    """Return basal metabolic rate using Mifflin-St Jeor."""
    if profile.sex is Sex.MALE:
        offset = MALE_BMR_OFFSET
    elif profile.sex is Sex.FEMALE:
        offset = FEMALE_BMR_OFFSET
    else:
        offset = other_sex_offset
    return (
        10 * profile.weight_kg + 6.25 * profile.height_cm - 5 * profile.age + offset
    )


def calculate_tdee(bmr: float, activity_level: ActivityLevel) -> float:
    """Return total daily energy expenditure for an activity level."""
    return bmr * ACTIVITY_MULTIPLIERS[activity_level]


def calorie_delta(objective: Objective) -> float:
    """Return the daily kcal adjustment requested by an objective."""
    if isinstance(objective, DietGoalObjective):
        return float(DIET_GOAL_MODIFIERS[objective.goal])
    daily = objective.weekly_rate_kg * KCAL_PER_KG / DAYS_PER_WEEK
    if objective.direction is WeightDirection.LOSE:
        return -daily
    if objective.direction is WeightDirection.GAIN:
        return daily
    return 0.0


def calculate_daily_calories(
    profile: Profile, other_sex_offset: float = FEMALE_BMR_OFFSET
) -> int:
    """Return the daily calorie target, never below the safety floor."""
    bmr = calculate_bmr(profile, other_sex_offset)
    tdee = calculate_tdee(bmr, profile.activity_level)
    delta = calorie_delta(profile.objective)
    target = max(MIN_DAILY_CALORIES, round_half_up(tdee + delta))
    _logger.debug(
        "Energy budget: bmr=%.1f tdee=%.1f delta=%.1f target=%s",
        bmr,
        tdee,
        delta,
        target,
    )
    return target
