"""Domain models for user physical profiles and objectives."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class Sex(StrEnum):
    """Sex used for the BMR constant."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(StrEnum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class UnitSystem(StrEnum):
    """Unit system used for entered height and weight."""

    METRIC = "metric"
    IMPERIAL = "imperial"


class Orientation(StrEnum):
    """Direction an objective pushes body mass."""

    LOSS = "loss"
    NEUTRAL = "neutral"
    GAIN = "gain"


class WeightDirection(StrEnum):
    """Three-way objective used with a weekly rate target."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


class DietGoal(StrEnum):
    """Six-way diet goal with fixed calorie modifiers."""

    LOSE_WEIGHT = "lose_weight"
    MAINTAIN = "maintain"
    GAIN_MUSCLE = "gain_muscle"
    BULK = "bulk"
    CUT = "cut"
    RECOMP = "recomp"


DIET_GOAL_MODIFIERS: dict[DietGoal, int] = {
    DietGoal.LOSE_WEIGHT: -500,
    DietGoal.MAINTAIN: 0,
    DietGoal.GAIN_MUSCLE: 300,
    DietGoal.BULK: 500,
    DietGoal.CUT: -750,
    DietGoal.RECOMP: -200,
}

DIET_GOAL_LABELS: dict[DietGoal, str] = {
    DietGoal.LOSE_WEIGHT: "Lose Weight",
    DietGoal.MAINTAIN: "Stay Healthy",
    DietGoal.GAIN_MUSCLE: "Gain Muscle",
    DietGoal.BULK: "Bulk Up",
    DietGoal.CUT: "Cut",
    DietGoal.RECOMP: "Body Recomposition",
}

_DIET_GOAL_ORIENTATION: dict[DietGoal, Orientation] = {
    DietGoal.LOSE_WEIGHT: Orientation.LOSS,
    DietGoal.CUT: Orientation.LOSS,
    DietGoal.MAINTAIN: Orientation.NEUTRAL,
    DietGoal.RECOMP: Orientation.NEUTRAL,
    DietGoal.GAIN_MUSCLE: Orientation.GAIN,
    DietGoal.BULK: Orientation.GAIN,
}

_DIRECTION_ORIENTATION: dict[WeightDirection, Orientation] = {
    WeightDirection.LOSE: Orientation.LOSS,
    WeightDirection.MAINTAIN: Orientation.NEUTRAL,
    WeightDirection.GAIN: Orientation.GAIN,
}


@dataclass(frozen=True)
class WeightChangeObjective:
    """Lose/maintain/gain with a weekly rate of change in kg."""

    direction: WeightDirection
    weekly_rate_kg: float = 0.0

    @property
    def orientation(self) -> Orientation:
        return _DIRECTION_ORIENTATION[self.direction]

    def to_dict(self) -> dict[str, object]:
        return {
            "scheme": "weekly_rate",
            "direction": self.direction.value,
            "weekly_rate_kg": self.weekly_rate_kg,
        }


@dataclass(frozen=True)
class DietGoalObjective:
    """One of the fixed-modifier diet goals."""

    goal: DietGoal

    @property
    def orientation(self) -> Orientation:
        return _DIET_GOAL_ORIENTATION[self.goal]

    @property
    def label(self) -> str:
        return DIET_GOAL_LABELS[self.goal]

    def to_dict(self) -> dict[str, object]:
        return {"scheme": "diet_goal", "goal": self.goal.value}


Objective = WeightChangeObjective | DietGoalObjective


@dataclass(frozen=True)
class RawProfile:
    """Profile fields as entered by the user.

    Height is either ``height_cm`` (metric) or ``height_ft`` plus
    ``height_in`` (imperial). Weight is kilograms or pounds depending on
    ``unit_system``. Either ``birthdate`` or ``age`` must be present.
    """

    sex: str
    activity_level: str
    objective: Objective
    unit_system: UnitSystem = UnitSystem.METRIC
    birthdate: date | None = None
    age: int | None = None
    height_cm: float | None = None
    height_ft: int | None = None
    height_in: float | None = None
    weight: float | None = None


@dataclass(frozen=True)
class Profile:
    """Canonical metric profile with an integer age."""

    sex: Sex
    age: int
    height_cm: int
    weight_kg: int
    activity_level: ActivityLevel
    objective: Objective
