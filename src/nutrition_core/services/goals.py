"""Nutrition goals service."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrition_core.domain.goals import NutritionGoals
from nutrition_core.domain.profile import Profile
from nutrition_core.errors import InvalidGoals
from nutrition_core.services.energy import FEMALE_BMR_OFFSET
from nutrition_core.services.macros import derive_goals

_logger = logging.getLogger(__name__)


class GoalsRepository(Protocol):
    """Persistence interface for nutrition goals."""

    def get(self, user_id: UUID) -> NutritionGoals | None:
        """Return the user's goals, if present."""

    def put(self, user_id: UUID, goals: NutritionGoals) -> None:
        """Create or replace the user's goals."""


def validate_goals(goals: NutritionGoals) -> NutritionGoals:
    """Reject goals with non-positive values."""
    invalid = [name for name, value in goals.to_dict().items() if value <= 0]
    if invalid:
        raise InvalidGoals(
            f"Goal values must be positive: {', '.join(invalid)}",
            {"fields": invalid},
        )
    return goals


@dataclass
class GoalsService:
    """Service for deriving and overriding a user's goals."""

    repository: GoalsRepository
    other_sex_offset: float = FEMALE_BMR_OFFSET

    def get_goals(self, user_id: UUID) -> NutritionGoals | None:
        """Return stored goals for a user."""
        return self.repository.get(user_id)

    def derive_goals(self, profile: Profile) -> NutritionGoals:
        """Compute goals for a profile without persisting."""
        return derive_goals(profile, self.other_sex_offset)

    def apply_profile(self, user_id: UUID, profile: Profile) -> NutritionGoals:
        """Derive goals from a profile and persist them."""
        goals = self.derive_goals(profile)
        self.repository.put(user_id, goals)
        _logger.info("Derived goals for user %s: %s", user_id, goals.to_dict())
        return goals

    def set_goals(self, user_id: UUID, goals: NutritionGoals) -> NutritionGoals:
        """Persist user-entered goals after validation."""
        validate_goals(goals)
        self.repository.put(user_id, goals)
        _logger.info("Goals overridden for user %s", user_id)
        return goals
