"""Domain models for logged meals."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field


class Confidence(StrEnum):
    """Estimator certainty for a meal."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MealPeriod(StrEnum):
    """Part of the day a meal belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class MealAnalysis:
    """A single logged eating event."""

    foods: list[str]
    calories: float
    protein: float
    carbs: float
    fat: float
    confidence: Confidence
    analyzed_at: datetime
    notes: str | None = None
    meal_period: MealPeriod | None = None
    id: UUID | None = None


class MealEstimate(BaseModel):
    """Best-effort macro estimate returned by the AI estimator."""

    foods: list[str]
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    confidence: Confidence
    notes: str | None = None


@dataclass(frozen=True)
class MacroTotals:
    """Summed macros over a set of meals."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


@dataclass(frozen=True)
class DailySummary:
    """A day's intake against goals with its health score."""

    day: date
    meal_count: int
    totals: MacroTotals
    remaining: MacroTotals
    score: int
    label: str
    meals: list[MealAnalysis] = field(default_factory=list)
