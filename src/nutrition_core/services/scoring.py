"""Daily health score from logged meals versus goals.

The score is the sum of five capped sub-scores, each derived from ratios so
that scaling both the meals and the goals leaves it unchanged:

- calorie balance (25)
- protein adequacy (25)
- macro balance by weight (25)
- variety and meal frequency (15)
- identification confidence (10)

Score bands: 80+ Excellent, 60+ Good, 40+ Fair, otherwise Needs Improvement.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from nutrition_core.domain.goals import NutritionGoals
from nutrition_core.domain.meals import (
    Confidence,
    DailySummary,
    MacroTotals,
    MealAnalysis,
)
from nutrition_core.errors import InvalidGoals
from nutrition_core.services.goals import GoalsService
from nutrition_core.services.meals import MealService

MAX_SCORE = 100

_CALORIE_BANDS = ((0.8, 1.1, 25), (0.6, 1.3, 15), (0.4, 1.5, 8))
_PROTEIN_BANDS = ((0.9, 1.5, 25), (0.7, 1.8, 18), (0.5, float("inf"), 10))
_PROTEIN_PCT_BANDS = ((15, 40, 10), (10, 45, 5))
_CARBS_PCT_BANDS = ((35, 60, 8), (25, 70, 4))
_FAT_PCT_BANDS = ((15, 40, 7), (10, 45, 3))
_MEAL_COUNT_BONUS = ((3, 5), (2, 3))
_DISTINCT_FOOD_BONUS = ((8, 10), (5, 7), (3, 4))
_CONFIDENCE_BONUS = ((0.8, 10), (0.5, 6), (0.3, 3))

_LABELS = ((80, "Excellent"), (60, "Good"), (40, "Fair"))


def _banded(value: float, bands: Sequence[tuple[float, float, int]]) -> int:
    for low, high, points in bands:
        if low <= value <= high:
            return points
    return 0


def _threshold(value: float, thresholds: Sequence[tuple[float, int]]) -> int:
    for minimum, points in thresholds:
        if value >= minimum:
            return points
    return 0


def total_macros(meals: Sequence[MealAnalysis]) -> MacroTotals:
    """Sum calories and macros over meals."""
    return MacroTotals(
        calories=sum(meal.calories for meal in meals),
        protein=sum(meal.protein for meal in meals),
        carbs=sum(meal.carbs for meal in meals),
        fat=sum(meal.fat for meal in meals),
    )


def calorie_balance_points(total_calories: float, goal_calories: float) -> int:
    return _banded(total_calories / goal_calories, _CALORIE_BANDS)


def protein_adequacy_points(total_protein: float, goal_protein: float) -> int:
    return _banded(total_protein / goal_protein, _PROTEIN_BANDS)


def macro_balance_points(protein: float, carbs: float, fat: float) -> int:
    """Score the share of each macro in total macro grams."""
    total = protein + carbs + fat
    if total <= 0:
        return 0
    return (
        _banded(protein / total * 100, _PROTEIN_PCT_BANDS)
        + _banded(carbs / total * 100, _CARBS_PCT_BANDS)
        + _banded(fat / total * 100, _FAT_PCT_BANDS)
    )


def variety_points(meals: Sequence[MealAnalysis]) -> int:
    distinct_foods = {food for meal in meals for food in meal.foods}
    return _threshold(len(meals), _MEAL_COUNT_BONUS) + _threshold(
        len(distinct_foods), _DISTINCT_FOOD_BONUS
    )


def confidence_points(meals: Sequence[MealAnalysis]) -> int:
    if not meals:
        return 0
    high = sum(1 for meal in meals if meal.confidence is Confidence.HIGH)
    return _threshold(high / len(meals), _CONFIDENCE_BONUS)


def calculate_health_score(
    meals: Sequence[MealAnalysis], goals: NutritionGoals
) -> int:
    """Return a 0-100 health score for one day's meals."""
    if not meals:
        return 0
    if goals.calories <= 0 or goals.protein <= 0:
        raise InvalidGoals("Calorie and protein goals must be positive")

    totals = total_macros(meals)
    score = (
        calorie_balance_points(totals.calories, goals.calories)
        + protein_adequacy_points(totals.protein, goals.protein)
        + macro_balance_points(totals.protein, totals.carbs, totals.fat)
        + variety_points(meals)
        + confidence_points(meals)
    )
    return min(MAX_SCORE, max(0, score))


def health_score_label(score: int) -> str:
    """Return a human-readable label for a score."""
    for minimum, label in _LABELS:
        if score >= minimum:
            return label
    return "Needs Improvement"


def summarize_day(
    day: date, meals: Sequence[MealAnalysis], goals: NutritionGoals
) -> DailySummary:
    """Build totals, remaining targets, and the score for a day."""
    totals = total_macros(meals)
    score = calculate_health_score(meals, goals)
    return DailySummary(
        day=day,
        meal_count=len(meals),
        totals=totals,
        remaining=MacroTotals(
            calories=goals.calories - totals.calories,
            protein=goals.protein - totals.protein,
            carbs=goals.carbs - totals.carbs,
            fat=goals.fat - totals.fat,
        ),
        score=score,
        label=health_score_label(score),
        meals=list(meals),
    )


@dataclass
class ScoringService:
    """Service that scores a user's day against their goals."""

    meal_service: MealService
    goals_service: GoalsService

    def get_daily_summary(
        self, user_id: UUID, day: date, timezone_name: str
    ) -> DailySummary:
        """Return the summary for a calendar day in the user's timezone."""
        goals = self.goals_service.get_goals(user_id)
        if goals is None:
            raise InvalidGoals("No nutrition goals set", {"user_id": str(user_id)})
        meals = self.meal_service.list_day(user_id, day, timezone_name)
        return summarize_day(day, meals, goals)
