"""Macro allocation and goal derivation."""

from dataclasses import dataclass

from nutrition_core.domain.goals import MacroTargets, NutritionGoals
from nutrition_core.domain.profile import Objective, Orientation, Profile
from nutrition_core.services.energy import (
    FEMALE_BMR_OFFSET,
    calculate_daily_calories,
    round_half_up,
)

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9


@dataclass(frozen=True)
class MacroRatios:
    """Percent of calories from each macro."""

    protein: int
    carbs: int
    fat: int


MACRO_RATIOS: dict[Orientation, MacroRatios] = {
    Orientation.NEUTRAL: MacroRatios(protein=30, carbs=40, fat=30),
    Orientation.GAIN: MacroRatios(protein=35, carbs=45, fat=20),
    Orientation.LOSS: MacroRatios(protein=40, carbs=30, fat=30),
}


def _grams(calories: int, percent: int, kcal_per_gram: int) -> int:
    return round_half_up(calories * percent / 100 / kcal_per_gram)


def allocate_macros(calories: int, objective: Objective) -> MacroTargets:
    """Split a calorie target into gram targets for the objective."""
    ratios = MACRO_RATIOS[objective.orientation]
    return MacroTargets(
        protein=_grams(calories, ratios.protein, KCAL_PER_GRAM_PROTEIN),
        carbs=_grams(calories, ratios.carbs, KCAL_PER_GRAM_CARBS),
        fat=_grams(calories, ratios.fat, KCAL_PER_GRAM_FAT),
    )


def derive_goals(
    profile: Profile, other_sex_offset: float = FEMALE_BMR_OFFSET
) -> NutritionGoals:
    """Compute calorie and macro goals for a profile."""
    calories = calculate_daily_calories(profile, other_sex_offset)
    macros = allocate_macros(calories, profile.objective)
    return NutritionGoals(
        calories=calories,
        protein=macros.protein,
        carbs=macros.carbs,
        fat=macros.fat,
    )
