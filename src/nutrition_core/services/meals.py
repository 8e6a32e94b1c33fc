"""Meal logging service."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from nutrition_core.domain.meals import MealAnalysis
from nutrition_core.domain.streaks import UserStreak
from nutrition_core.errors import InvalidTimezone
from nutrition_core.services.streaks import StreakService, parse_activity_date

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for logged meals."""

    def list_meals(
        self, user_id: UUID, start: datetime | None = None, end: datetime | None = None
    ) -> list[MealAnalysis]:
        """Return meals analyzed in [start, end), oldest first."""

    def insert(self, user_id: UUID, meal: MealAnalysis) -> UUID:
        """Store a meal and return its id."""

    def delete(self, user_id: UUID, meal_id: UUID) -> None:
        """Delete a meal."""


@dataclass(frozen=True)
class SavedMeal:
    """A stored meal with the streak it produced."""

    meal: MealAnalysis
    streak: UserStreak


def resolve_timezone(timezone_name: str) -> ZoneInfo:
    """Return the zone for an IANA name such as ``Europe/Berlin``."""
    try:
        return ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidTimezone(
            f"Unknown timezone: {timezone_name!r}", {"timezone": timezone_name}
        ) from exc


def day_window(day: date, timezone_name: str) -> tuple[datetime, datetime]:
    """Return the UTC bounds of a calendar day in a timezone."""
    tz = resolve_timezone(timezone_name)
    start = datetime(day.year, day.month, day.day, tzinfo=tz)
    end = start + timedelta(days=1)
    return start.astimezone(UTC), end.astimezone(UTC)


@dataclass
class MealService:
    """Service that stores meals and keeps the streak current."""

    repository: MealRepository
    streak_service: StreakService

    def save_meal(
        self, user_id: UUID, meal: MealAnalysis, logged_on: date | str
    ) -> SavedMeal:
        """Persist a meal and count the calendar day toward the streak."""
        day = parse_activity_date(logged_on)
        meal_id = self.repository.insert(user_id, meal)
        streak = self.streak_service.record_activity(user_id, day)
        _logger.info("Saved meal %s for user %s on %s", meal_id, user_id, day)
        return SavedMeal(meal=replace(meal, id=meal_id), streak=streak)

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> None:
        """Delete a single meal."""
        self.repository.delete(user_id, meal_id)

    def list_day(
        self, user_id: UUID, day: date, timezone_name: str
    ) -> list[MealAnalysis]:
        """Return meals that fall on a calendar day in the user's timezone."""
        tz = resolve_timezone(timezone_name)
        start, end = day_window(day, timezone_name)
        return [
            meal
            for meal in self.repository.list_meals(user_id, start, end)
            if meal.analyzed_at.astimezone(tz).date() == day
        ]
