"""Pydantic models for HTTP request and response payloads."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from nutrition_core.domain.goals import NutritionGoals
from nutrition_core.domain.meals import (
    Confidence,
    DailySummary,
    MacroTotals,
    MealAnalysis,
    MealPeriod,
)
from nutrition_core.domain.profile import (
    ActivityLevel,
    DietGoal,
    DietGoalObjective,
    Objective,
    Profile,
    RawProfile,
    Sex,
    UnitSystem,
    WeightChangeObjective,
    WeightDirection,
)
from nutrition_core.domain.streaks import UserStreak
from nutrition_core.errors import InvalidProfile


class ObjectivePayload(BaseModel):
    """Either a diet goal or a direction with a weekly rate."""

    diet_goal: DietGoal | None = None
    direction: WeightDirection | None = None
    weekly_rate_kg: float | None = None

    def to_objective(self) -> Objective:
        """Build the objective, requiring exactly one of the two schemes."""
        has_rate_fields = self.direction is not None or self.weekly_rate_kg is not None
        if self.diet_goal is not None and has_rate_fields:
            raise InvalidProfile(
                "Send either diet_goal or direction, not both", field="objective"
            )
        if self.diet_goal is not None:
            return DietGoalObjective(goal=self.diet_goal)
        if self.direction is None:
            raise InvalidProfile(
                "Objective needs a diet_goal or a direction", field="objective"
            )
        return WeightChangeObjective(
            direction=self.direction, weekly_rate_kg=self.weekly_rate_kg or 0.0
        )


class ProfilePayload(BaseModel):
    """Profile fields entered during onboarding or in settings."""

    sex: str
    activity_level: str
    objective: ObjectivePayload
    unit_system: UnitSystem = UnitSystem.METRIC
    birthdate: date | None = None
    age: int | None = None
    height_cm: float | None = None
    height_ft: int | None = None
    height_in: float | None = None
    weight: float | None = None
    today: date | None = None

    def to_raw_profile(self) -> RawProfile:
        return RawProfile(
            sex=self.sex,
            activity_level=self.activity_level,
            objective=self.objective.to_objective(),
            unit_system=self.unit_system,
            birthdate=self.birthdate,
            age=self.age,
            height_cm=self.height_cm,
            height_ft=self.height_ft,
            height_in=self.height_in,
            weight=self.weight,
        )


class ProfileResponse(BaseModel):
    """A stored profile in canonical metric units."""

    sex: Sex
    age: int
    height_cm: int
    weight_kg: int
    activity_level: ActivityLevel
    objective: dict[str, object]
    objective_label: str | None

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileResponse":
        objective = profile.objective
        return cls(
            sex=profile.sex,
            age=profile.age,
            height_cm=profile.height_cm,
            weight_kg=profile.weight_kg,
            activity_level=profile.activity_level,
            objective=objective.to_dict(),
            objective_label=(
                objective.label if isinstance(objective, DietGoalObjective) else None
            ),
        )


class GoalsPayload(BaseModel):
    """Daily calorie and macro targets."""

    calories: int
    protein: int
    carbs: int
    fat: int

    def to_goals(self) -> NutritionGoals:
        return NutritionGoals(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
        )

    @classmethod
    def from_goals(cls, goals: NutritionGoals) -> "GoalsPayload":
        return cls(**goals.to_dict())


class MealPayload(BaseModel):
    """A meal to log, usually an accepted estimate."""

    foods: list[str]
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    confidence: Confidence = Confidence.MEDIUM
    notes: str | None = None
    meal_period: MealPeriod | None = None
    analyzed_at: datetime
    logged_on: date

    def to_meal(self) -> MealAnalysis:
        return MealAnalysis(
            foods=self.foods,
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
            confidence=self.confidence,
            notes=self.notes,
            meal_period=self.meal_period,
            analyzed_at=self.analyzed_at,
        )


class EstimateRequest(BaseModel):
    """Free-text meal description to estimate."""

    description: str = Field(min_length=1)


class StreakResponse(BaseModel):
    """Current streak state."""

    current_streak: int
    longest_streak: int
    last_activity_date: date | None

    @classmethod
    def from_streak(cls, streak: UserStreak) -> "StreakResponse":
        return cls(
            current_streak=streak.current_streak,
            longest_streak=streak.longest_streak,
            last_activity_date=streak.last_activity_date,
        )


class MealResponse(BaseModel):
    """A stored meal."""

    id: str | None
    foods: list[str]
    calories: float
    protein: float
    carbs: float
    fat: float
    confidence: Confidence
    notes: str | None
    meal_period: MealPeriod | None
    analyzed_at: datetime

    @classmethod
    def from_meal(cls, meal: MealAnalysis) -> "MealResponse":
        return cls(
            id=str(meal.id) if meal.id else None,
            foods=meal.foods,
            calories=meal.calories,
            protein=meal.protein,
            carbs=meal.carbs,
            fat=meal.fat,
            confidence=meal.confidence,
            notes=meal.notes,
            meal_period=meal.meal_period,
            analyzed_at=meal.analyzed_at,
        )


class SavedMealResponse(BaseModel):
    """A stored meal and the resulting streak."""

    meal: MealResponse
    streak: StreakResponse


class MacroTotalsResponse(BaseModel):
    calories: float
    protein: float
    carbs: float
    fat: float

    @classmethod
    def from_totals(cls, totals: MacroTotals) -> "MacroTotalsResponse":
        return cls(
            calories=totals.calories,
            protein=totals.protein,
            carbs=totals.carbs,
            fat=totals.fat,
        )


class DailySummaryResponse(BaseModel):
    """A day's intake, remaining targets, and health score."""

    day: date
    meal_count: int
    totals: MacroTotalsResponse
    remaining: MacroTotalsResponse
    score: int
    label: str
    meals: list[MealResponse]

    @classmethod
    def from_summary(cls, summary: DailySummary) -> "DailySummaryResponse":
        return cls(
            day=summary.day,
            meal_count=summary.meal_count,
            totals=MacroTotalsResponse.from_totals(summary.totals),
            remaining=MacroTotalsResponse.from_totals(summary.remaining),
            score=summary.score,
            label=summary.label,
            meals=[MealResponse.from_meal(meal) for meal in summary.meals],
        )
