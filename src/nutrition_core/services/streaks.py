"""Consecutive-day logging streaks."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from nutrition_core.domain.streaks import UserStreak
from nutrition_core.errors import InvalidActivityDate

_logger = logging.getLogger(__name__)


class StreakRepository(Protocol):
    """Persistence interface for user streaks."""

    def get(self, user_id: UUID) -> UserStreak | None:
        """Return the user's streak, if present."""

    def put(self, user_id: UUID, streak: UserStreak) -> None:
        """Create or replace the user's streak."""


def parse_activity_date(value: date | str) -> date:
    """Accept a date or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise InvalidActivityDate(f"Invalid activity date: {value!r}") from exc


def advance_streak(previous: UserStreak | None, day: date | str) -> UserStreak:
    """Apply a "meal logged on day" event to a streak.

    Events on or before the last counted day leave the streak unchanged.
    """
    current_day = parse_activity_date(day)
    state = previous or UserStreak()
    last = state.last_activity_date

    if last is not None and current_day <= last:
        return state
    if last is not None and last == current_day - timedelta(days=1):
        current = state.current_streak + 1
    else:
        current = 1

    return UserStreak(
        current_streak=current,
        longest_streak=max(state.longest_streak, current),
        last_activity_date=current_day,
    )


@dataclass
class StreakService:
    """Service that records daily activity against stored streaks."""

    repository: StreakRepository

    def get_streak(self, user_id: UUID) -> UserStreak:
        """Return the user's streak, or an empty one."""
        return self.repository.get(user_id) or UserStreak()

    def record_activity(self, user_id: UUID, day: date | str) -> UserStreak:
        """Advance and persist the streak for a logged day."""
        previous = self.repository.get(user_id)
        updated = advance_streak(previous, day)
        if updated == previous:
            return updated
        self.repository.put(user_id, updated)
        _logger.info(
            "Streak for user %s: current=%s longest=%s",
            user_id,
            updated.current_streak,
            updated.longest_streak,
        )
        return updated
