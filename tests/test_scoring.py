"""Tests for the daily health score."""

from dataclasses import replace
from datetime import date

import pytest

from nutrition_core.domain.goals import NutritionGoals
from nutrition_core.domain.meals import Confidence
from nutrition_core.errors import InvalidGoals
from nutrition_core.services.scoring import (
    calculate_health_score,
    calorie_balance_points,
    confidence_points,
    health_score_label,
    macro_balance_points,
    protein_adequacy_points,
    summarize_day,
    variety_points,
)
from tests.conftest import make_meal

GOALS = NutritionGoals(calories=2000, protein=150, carbs=250, fat=65)


def _balanced_day():  # type: ignore[no-untyped-def]
    return [
        make_meal(["oats", "banana"], calories=500, protein=40, carbs=50, fat=15),
        make_meal(["chicken", "rice"], calories=600, protein=45, carbs=60, fat=20),
        make_meal(["salmon", "broccoli"], calories=600, protein=45, carbs=60, fat=25),
        make_meal(["oats", "rice"], calories=300, protein=20, carbs=30, fat=10),
    ]


def test_balanced_day_scores_exact_total() -> None:
    meals = _balanced_day()

    assert calorie_balance_points(2000, GOALS.calories) == 25
    assert protein_adequacy_points(150, GOALS.protein) == 25
    assert macro_balance_points(150, 200, 70) == 25
    assert variety_points(meals) == 5 + 7
    assert confidence_points(meals) == 10
    assert calculate_health_score(meals, GOALS) == 97


def test_empty_day_scores_zero() -> None:
    assert calculate_health_score([], GOALS) == 0
    assert calculate_health_score([], NutritionGoals(0, 0, 0, 0)) == 0


def test_scaling_meals_and_goals_keeps_score() -> None:
    meals = _balanced_day()
    doubled_meals = [
        replace(
            meal,
            calories=meal.calories * 2,
            protein=meal.protein * 2,
            carbs=meal.carbs * 2,
            fat=meal.fat * 2,
        )
        for meal in meals
    ]
    doubled_goals = NutritionGoals(
        calories=GOALS.calories * 2,
        protein=GOALS.protein * 2,
        carbs=GOALS.carbs * 2,
        fat=GOALS.fat * 2,
    )

    assert calculate_health_score(doubled_meals, doubled_goals) == (
        calculate_health_score(meals, GOALS)
    )


@pytest.mark.parametrize(
    ("total", "points"),
    [
        (1600, 25),
        (2200, 25),
        (1599, 15),
        (1200, 15),
        (2600, 15),
        (2601, 8),
        (800, 8),
        (3000, 8),
        (799, 0),
        (3001, 0),
    ],
)
def test_calorie_bands(total: float, points: int) -> None:
    assert calorie_balance_points(total, 2000) == points


@pytest.mark.parametrize(
    ("total", "points"),
    [
        (90, 25),
        (150, 25),
        (70, 18),
        (180, 18),
        (181, 10),
        (500, 10),
        (50, 10),
        (49, 0),
    ],
)
def test_protein_bands(total: float, points: int) -> None:
    assert protein_adequacy_points(total, 100) == points


def test_macro_balance_partial_and_zero() -> None:
    assert macro_balance_points(0, 0, 0) == 0
    # protein 10%, carbs 80%, fat 10%
    assert macro_balance_points(10, 80, 10) == 5 + 0 + 3
    # protein 50%, carbs 25%, fat 25%
    assert macro_balance_points(50, 25, 25) == 0 + 4 + 7


def test_zero_macro_meals_skip_macro_block() -> None:
    meals = [make_meal(["water"], calories=0, protein=0, carbs=0, fat=0)]

    assert calculate_health_score(meals, GOALS) == 10


def test_variety_counts_union_of_foods() -> None:
    single = [make_meal(["a", "b", "c"])]
    two = [make_meal(["a", "b"]), make_meal(["b", "c", "d", "e"])]
    many = [make_meal([str(i) for i in range(8)]) for _ in range(3)]

    assert variety_points(single) == 4
    assert variety_points(two) == 3 + 7
    assert variety_points(many) == 5 + 10


@pytest.mark.parametrize(
    ("high", "other", "points"),
    [(4, 1, 10), (1, 1, 6), (3, 7, 3), (1, 4, 0)],
)
def test_confidence_share(high: int, other: int, points: int) -> None:
    meals = [make_meal(confidence=Confidence.HIGH) for _ in range(high)] + [
        make_meal(confidence=Confidence.MEDIUM) for _ in range(other)
    ]

    assert confidence_points(meals) == points


def test_score_stays_within_bounds() -> None:
    wild = [make_meal(["x"], calories=10_000, protein=1, carbs=1000, fat=1)]

    score = calculate_health_score(wild, GOALS)

    assert 0 <= score <= 100


def test_non_positive_goals_are_rejected() -> None:
    with pytest.raises(InvalidGoals):
        calculate_health_score(_balanced_day(), NutritionGoals(0, 150, 250, 65))


@pytest.mark.parametrize(
    ("score", "label"),
    [
        (100, "Excellent"),
        (80, "Excellent"),
        (79, "Good"),
        (60, "Good"),
        (40, "Fair"),
        (39, "Needs Improvement"),
        (0, "Needs Improvement"),
    ],
)
def test_labels(score: int, label: str) -> None:
    assert health_score_label(score) == label


def test_summarize_day_reports_remaining() -> None:
    meals = [make_meal(calories=500, protein=30, carbs=50, fat=15)]

    summary = summarize_day(date(2024, 1, 10), meals, GOALS)

    assert summary.meal_count == 1
    assert summary.totals.calories == 500
    assert summary.remaining.calories == 1500
    assert summary.remaining.protein == 120
    assert summary.remaining.carbs == 200
    assert summary.remaining.fat == 50
    assert summary.label == health_score_label(summary.score)
