"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from nutrition_core.config import Settings
from nutrition_core.containers import AppContainer
from nutrition_core.domain.goals import NutritionGoals
from nutrition_core.domain.meals import Confidence, MealAnalysis
from nutrition_core.domain.profile import (
    ActivityLevel,
    DietGoal,
    DietGoalObjective,
    Objective,
    Profile,
    Sex,
    WeightChangeObjective,
    WeightDirection,
)
from nutrition_core.domain.streaks import UserStreak
from nutrition_core.services.estimation import EstimationService, EstimatorClient
from nutrition_core.services.goals import GoalsRepository, GoalsService
from nutrition_core.services.meals import MealRepository, MealService
from nutrition_core.services.profiles import ProfileRepository, ProfileService
from nutrition_core.services.scoring import ScoringService
from nutrition_core.services.streaks import StreakRepository, StreakService


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, Profile] = field(default_factory=dict)

    def get(self, user_id: UUID) -> Profile | None:
        return self.profiles.get(user_id)

    def put(self, user_id: UUID, profile: Profile) -> None:
        self.profiles[user_id] = profile


@dataclass
class InMemoryGoalsRepository(GoalsRepository):
    """In-memory goals repository for tests."""

    goals: dict[UUID, NutritionGoals] = field(default_factory=dict)

    def get(self, user_id: UUID) -> NutritionGoals | None:
        return self.goals.get(user_id)

    def put(self, user_id: UUID, goals: NutritionGoals) -> None:
        self.goals[user_id] = goals


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, tuple[UUID, MealAnalysis]] = field(default_factory=dict)

    def list_meals(
        self, user_id: UUID, start: datetime | None = None, end: datetime | None = None
    ) -> list[MealAnalysis]:
        results = [
            meal
            for owner, meal in self.meals.values()
            if owner == user_id
            and (start is None or meal.analyzed_at >= start)
            and (end is None or meal.analyzed_at < end)
        ]
        return sorted(results, key=lambda meal: meal.analyzed_at)

    def insert(self, user_id: UUID, meal: MealAnalysis) -> UUID:
        meal_id = uuid4()
        self.meals[meal_id] = (user_id, replace(meal, id=meal_id))
        return meal_id

    def delete(self, user_id: UUID, meal_id: UUID) -> None:
        entry = self.meals.get(meal_id)
        if entry and entry[0] == user_id:
            self.meals.pop(meal_id)


@dataclass
class InMemoryStreakRepository(StreakRepository):
    """In-memory streak repository for tests."""

    streaks: dict[UUID, UserStreak] = field(default_factory=dict)
    writes: int = 0

    def get(self, user_id: UUID) -> UserStreak | None:
        return self.streaks.get(user_id)

    def put(self, user_id: UUID, streak: UserStreak) -> None:
        self.writes += 1
        self.streaks[user_id] = streak


@dataclass
class FakeEstimatorClient(EstimatorClient):
    """Fake estimator returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "foods": ["skyr", "protein powder", "oats"],
            "calories": 520,
            "protein": 56,
            "carbs": 57,
            "fat": 6.2,
            "confidence": "high",
            "notes": "250g skyr, 28g whey, 70g oats",
        }
    )
    calls: list[dict[str, object]] = field(default_factory=list)

    async def estimate(
        self,
        *,
        instructions: str,
        text: str,
        image_data_url: str | None,
        schema: dict[str, object],
    ) -> dict[str, object]:
        self.calls.append({"text": text, "image_data_url": image_data_url})
        return self.payload


def make_profile(  # noqa: PLR0913
    sex: Sex = Sex.MALE,
    age: int = 30,
    height_cm: int = 180,
    weight_kg: int = 80,
    activity_level: ActivityLevel = ActivityLevel.MODERATE,
    objective: Objective | None = None,
) -> Profile:
    return Profile(
        sex=sex,
        age=age,
        height_cm=height_cm,
        weight_kg=weight_kg,
        activity_level=activity_level,
        objective=objective or WeightChangeObjective(WeightDirection.MAINTAIN),
    )


def make_meal(  # noqa: PLR0913
    foods: list[str] | None = None,
    calories: float = 500,
    protein: float = 30,
    carbs: float = 50,
    fat: float = 15,
    confidence: Confidence = Confidence.HIGH,
    analyzed_at: datetime | None = None,
) -> MealAnalysis:
    return MealAnalysis(
        foods=foods if foods is not None else ["rice"],
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        confidence=confidence,
        analyzed_at=analyzed_at or datetime(2024, 1, 10, 12, 0, tzinfo=UTC),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        openai_api_key="openai-key",
    )


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def estimator_client() -> FakeEstimatorClient:
    return FakeEstimatorClient()


@pytest.fixture
def container(
    settings: Settings, estimator_client: FakeEstimatorClient
) -> AppContainer:
    goals_service = GoalsService(InMemoryGoalsRepository())
    profile_service = ProfileService(
        repository=InMemoryProfileRepository(), goals_service=goals_service
    )
    streak_service = StreakService(InMemoryStreakRepository())
    meal_service = MealService(
        repository=InMemoryMealRepository(), streak_service=streak_service
    )
    scoring_service = ScoringService(
        meal_service=meal_service, goals_service=goals_service
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        goals_service=goals_service,
        meal_service=meal_service,
        streak_service=streak_service,
        scoring_service=scoring_service,
        estimation_service=EstimationService(estimator_client),
        close_resources=close_resources,
    )


TODAY = date(2024, 1, 10)
GAIN_MUSCLE = DietGoalObjective(DietGoal.GAIN_MUSCLE)
