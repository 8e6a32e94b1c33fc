"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import Annotated
from uuid import UUID

from fastapi import FastAPI, File, HTTPException, Request, UploadFile, status
from fastapi.responses import JSONResponse

from nutrition_core.api.models import (
    DailySummaryResponse,
    EstimateRequest,
    GoalsPayload,
    MealPayload,
    MealResponse,
    ProfilePayload,
    ProfileResponse,
    SavedMealResponse,
    StreakResponse,
)
from nutrition_core.app_logging import configure_logging
from nutrition_core.containers import AppContainer
from nutrition_core.domain.meals import MealEstimate
from nutrition_core.errors import NutritionCoreError
from nutrition_core.services.meals import resolve_timezone


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(NutritionCoreError)
    async def nutrition_error_handler(
        request: Request, exc: NutritionCoreError
    ) -> JSONResponse:
        logger.warning(
            "%s: %s [%s %s]",
            type(exc).__name__,
            exc.message,
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "type": type(exc).__name__,
                    "message": exc.message,
                    "status_code": exc.status_code,
                    "details": exc.details,
                }
            },
        )

    def _today() -> date:
        return datetime.now(
            tz=resolve_timezone(container.settings.default_timezone)
        ).date()

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.put("/users/{user_id}/profile")
    async def save_profile(
        user_id: UUID, payload: ProfilePayload, request: Request
    ) -> GoalsPayload:
        """Store a profile and return the derived goals."""
        state_container: AppContainer = request.app.state.container
        goals = state_container.profile_service.save_profile(
            user_id, payload.to_raw_profile(), payload.today or _today()
        )
        return GoalsPayload.from_goals(goals)

    @app.get("/users/{user_id}/profile")
    async def get_profile(user_id: UUID, request: Request) -> ProfileResponse:
        """Return the stored profile."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.get_profile(user_id)
        if profile is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="No profile saved"
            )
        return ProfileResponse.from_profile(profile)

    @app.get("/users/{user_id}/goals")
    async def get_goals(user_id: UUID, request: Request) -> GoalsPayload:
        """Return the stored goals."""
        state_container: AppContainer = request.app.state.container
        goals = state_container.goals_service.get_goals(user_id)
        if goals is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="No nutrition goals set"
            )
        return GoalsPayload.from_goals(goals)

    @app.put("/users/{user_id}/goals")
    async def set_goals(
        user_id: UUID, payload: GoalsPayload, request: Request
    ) -> GoalsPayload:
        """Overwrite goals with user-entered values."""
        state_container: AppContainer = request.app.state.container
        goals = state_container.goals_service.set_goals(user_id, payload.to_goals())
        return GoalsPayload.from_goals(goals)

    @app.post("/users/{user_id}/meals", status_code=status.HTTP_201_CREATED)
    async def save_meal(
        user_id: UUID, payload: MealPayload, request: Request
    ) -> SavedMealResponse:
        """Log a meal and update the streak."""
        state_container: AppContainer = request.app.state.container
        saved = state_container.meal_service.save_meal(
            user_id, payload.to_meal(), payload.logged_on
        )
        return SavedMealResponse(
            meal=MealResponse.from_meal(saved.meal),
            streak=StreakResponse.from_streak(saved.streak),
        )

    @app.delete(
        "/users/{user_id}/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT
    )
    async def delete_meal(user_id: UUID, meal_id: UUID, request: Request) -> None:
        """Delete a single meal."""
        state_container: AppContainer = request.app.state.container
        state_container.meal_service.delete_meal(user_id, meal_id)

    @app.post("/users/{user_id}/meals/estimate")
    async def estimate_meal(
        user_id: UUID, payload: EstimateRequest, request: Request
    ) -> MealEstimate:
        """Estimate macros for a described meal without saving it."""
        state_container: AppContainer = request.app.state.container
        return await state_container.estimation_service.estimate_text(
            payload.description
        )

    @app.post("/users/{user_id}/meals/estimate-image")
    async def estimate_meal_image(
        user_id: UUID, request: Request, image: Annotated[UploadFile, File()]
    ) -> MealEstimate:
        """Estimate macros for a meal photo without saving it."""
        state_container: AppContainer = request.app.state.container
        image_bytes = await image.read()
        logger.info(
            "Estimating photo for user %s (%s bytes)", user_id, len(image_bytes)
        )
        return await state_container.estimation_service.estimate_image(image_bytes)

    @app.get("/users/{user_id}/summary")
    async def daily_summary(
        user_id: UUID,
        request: Request,
        day: date | None = None,
        timezone: str | None = None,
    ) -> DailySummaryResponse:
        """Return a day's totals and health score."""
        state_container: AppContainer = request.app.state.container
        summary = state_container.scoring_service.get_daily_summary(
            user_id,
            day or _today(),
            timezone or state_container.settings.default_timezone,
        )
        return DailySummaryResponse.from_summary(summary)

    @app.get("/users/{user_id}/streak")
    async def get_streak(user_id: UUID, request: Request) -> StreakResponse:
        """Return the current and longest streak."""
        state_container: AppContainer = request.app.state.container
        return StreakResponse.from_streak(
            state_container.streak_service.get_streak(user_id)
        )

    return app
