"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutrition_core.adapters.openai_estimator_client import OpenAIEstimatorClient
from nutrition_core.adapters.supabase_goals_repository import SupabaseGoalsRepository
from nutrition_core.adapters.supabase_meal_repository import SupabaseMealRepository
from nutrition_core.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from nutrition_core.adapters.supabase_streak_repository import (
    SupabaseStreakRepository,
)
from nutrition_core.config import Settings
from nutrition_core.services.estimation import EstimationService
from nutrition_core.services.goals import GoalsService
from nutrition_core.services.meals import MealService
from nutrition_core.services.profiles import ProfileService
from nutrition_core.services.scoring import ScoringService
from nutrition_core.services.streaks import StreakService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    goals_service: GoalsService
    meal_service: MealService
    streak_service: StreakService
    scoring_service: ScoringService
    estimation_service: EstimationService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    goals_service = GoalsService(
        SupabaseGoalsRepository(supabase_client),
        other_sex_offset=resolved_settings.other_sex_bmr_offset,
    )
    profile_service = ProfileService(
        repository=SupabaseProfileRepository(supabase_client),
        goals_service=goals_service,
    )
    streak_service = StreakService(SupabaseStreakRepository(supabase_client))
    meal_service = MealService(
        repository=SupabaseMealRepository(supabase_client),
        streak_service=streak_service,
    )
    scoring_service = ScoringService(
        meal_service=meal_service, goals_service=goals_service
    )
    estimator_client = OpenAIEstimatorClient.create(
        api_key=resolved_settings.openai_api_key,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    estimation_service = EstimationService(estimator_client)

    async def close_resources() -> None:
        await estimator_client.client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        goals_service=goals_service,
        meal_service=meal_service,
        streak_service=streak_service,
        scoring_service=scoring_service,
        estimation_service=estimation_service,
        close_resources=close_resources,
    )
