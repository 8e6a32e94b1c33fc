"""Domain models for activity streaks."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class UserStreak:
    """Consecutive-day logging streak for a user."""

    current_streak: int = 0
    longest_streak: int = 0
    last_activity_date: date | None = None
