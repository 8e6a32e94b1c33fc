"""Nutrition goal domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroTargets:
    """Daily macronutrient targets in grams."""

    protein: int
    carbs: int
    fat: int


@dataclass(frozen=True)
class NutritionGoals:
    """Daily calorie and macro targets for a user."""

    calories: int
    protein: int
    carbs: int
    fat: int

    def to_dict(self) -> dict[str, int]:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }
