"""Profile normalization and persistence."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from nutrition_core.domain.goals import NutritionGoals
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
from nutrition_core.errors import InvalidProfile
from nutrition_core.services.energy import round_half_up
from nutrition_core.services.goals import GoalsService

CM_PER_INCH = 2.54
INCHES_PER_FOOT = 12
KG_PER_LB = 0.453592

_ACTIVITY_ALIASES = {"athlete": ActivityLevel.VERY_ACTIVE}

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get(self, user_id: UUID) -> Profile | None:
        """Return the user's profile, if present."""

    def put(self, user_id: UUID, profile: Profile) -> None:
        """Create or replace the user's profile."""


def normalize_profile(raw: RawProfile, today: date) -> Profile:
    """Convert entered profile fields into a metric profile with an age."""
    sex = parse_sex(raw.sex)
    activity_level = parse_activity_level(raw.activity_level)
    _validate_objective(raw.objective)

    if raw.unit_system is UnitSystem.IMPERIAL:
        height_cm = _imperial_height_cm(raw.height_ft, raw.height_in)
        weight_kg = _require_positive(raw.weight, "weight") * KG_PER_LB
    else:
        height_cm = _require_positive(raw.height_cm, "height_cm")
        weight_kg = _require_positive(raw.weight, "weight")

    return Profile(
        sex=sex,
        age=_resolve_age(raw, today),
        height_cm=_positive_int(height_cm, "height_cm"),
        weight_kg=_positive_int(weight_kg, "weight"),
        activity_level=activity_level,
        objective=raw.objective,
    )


def age_on(birthdate: date, today: date) -> int:
    """Return whole years elapsed from birthdate to today."""
    years = today.year - birthdate.year
    if (today.month, today.day) < (birthdate.month, birthdate.day):
        years -= 1
    return years


def parse_activity_level(value: str) -> ActivityLevel:
    """Parse an activity level, accepting legacy aliases."""
    alias = _ACTIVITY_ALIASES.get(value)
    if alias is not None:
        return alias
    try:
        return ActivityLevel(value)
    except ValueError as exc:
        raise InvalidProfile(
            f"Unknown activity level: {value!r}", field="activity_level"
        ) from exc


def parse_objective(data: dict[str, object]) -> Objective:
    """Parse a serialized objective into its tagged variant."""
    scheme = data.get("scheme")
    try:
        if scheme == "weekly_rate":
            objective: Objective = WeightChangeObjective(
                direction=WeightDirection(str(data.get("direction"))),
                weekly_rate_kg=float(data.get("weekly_rate_kg") or 0.0),
            )
        elif scheme == "diet_goal":
            objective = DietGoalObjective(goal=DietGoal(str(data.get("goal"))))
        else:
            raise InvalidProfile(f"Unknown objective scheme: {scheme!r}", "objective")
    except (TypeError, ValueError) as exc:
        raise InvalidProfile(f"Invalid objective: {data!r}", "objective") from exc
    _validate_objective(objective)
    return objective


def parse_sex(value: str) -> Sex:
    """Parse a stored or entered sex value."""
    try:
        return Sex(value)
    except ValueError as exc:
        raise InvalidProfile(f"Unknown sex: {value!r}", field="sex") from exc


def _validate_objective(objective: Objective) -> None:
    if isinstance(objective, WeightChangeObjective) and objective.weekly_rate_kg < 0:
        raise InvalidProfile("Weekly rate must not be negative", "weekly_rate_kg")


def _imperial_height_cm(feet: int | None, inches: float | None) -> float:
    if feet is None or feet < 0 or (inches is not None and inches < 0):
        raise InvalidProfile("Imperial height requires feet and inches", "height")
    total_inches = feet * INCHES_PER_FOOT + (inches or 0)
    return _require_positive(total_inches, "height") * CM_PER_INCH


def _resolve_age(raw: RawProfile, today: date) -> int:
    if raw.birthdate is not None:
        if raw.birthdate > today:
            raise InvalidProfile("Birthdate is in the future", field="birthdate")
        age = age_on(raw.birthdate, today)
    elif raw.age is not None:
        age = raw.age
    else:
        raise InvalidProfile("Either birthdate or age is required", field="age")
    if age <= 0:
        raise InvalidProfile("Age must be positive", field="age")
    return age


def _require_positive(value: float | None, field: str) -> float:
    if value is None or value <= 0:
        raise InvalidProfile(f"{field} must be positive", field=field)
    return value


def _positive_int(value: float, field: str) -> int:
    rounded = round_half_up(value)
    if rounded <= 0:
        raise InvalidProfile(f"{field} must be positive", field=field)
    return rounded


@dataclass
class ProfileService:
    """Service for saving profiles and refreshing derived goals."""

    repository: ProfileRepository
    goals_service: GoalsService

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the stored profile for a user."""
        return self.repository.get(user_id)

    def save_profile(
        self, user_id: UUID, raw: RawProfile, today: date
    ) -> NutritionGoals:
        """Normalize and store a profile, then derive and store goals."""
        profile = normalize_profile(raw, today)
        self.repository.put(user_id, profile)
        _logger.info(
            "Saved profile for user %s (objective=%s)",
            user_id,
            profile.objective.to_dict(),
        )
        return self.goals_service.apply_profile(user_id, profile)
