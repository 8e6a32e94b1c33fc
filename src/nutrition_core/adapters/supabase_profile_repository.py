"""Supabase repository for user profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrition_core.adapters.supabase_store import execute, require_rows
from nutrition_core.domain.profile import Profile, Sex
from nutrition_core.services.profiles import (
    ProfileRepository,
    parse_activity_level,
    parse_objective,
    parse_sex,
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get(self, user_id: UUID) -> Profile | None:
        """Return the stored profile for a user."""
        response = execute(
            self.client.table("profiles")
            .select("gender, age, height_cm, weight_kg, activity_level, objective")
            .eq("user_id", str(user_id))
            .limit(1),
            "profiles.select",
        )
        if not response.data:
            return None
        row = response.data[0]
        required = ("age", "height_cm", "weight_kg", "activity_level", "objective")
        if any(row.get(column) is None for column in required):
            return None
        return Profile(
            sex=parse_sex(str(row.get("gender") or Sex.OTHER)),
            age=int(row["age"]),
            height_cm=int(row["height_cm"]),
            weight_kg=int(row["weight_kg"]),
            activity_level=parse_activity_level(str(row.get("activity_level"))),
            objective=parse_objective(row["objective"]),
        )

    def put(self, user_id: UUID, profile: Profile) -> None:
        """Create or replace the profile row for a user."""
        response = execute(
            self.client.table("profiles").upsert(
                {
                    "user_id": str(user_id),
                    "gender": profile.sex.value,
                    "age": profile.age,
                    "height_cm": profile.height_cm,
                    "weight_kg": profile.weight_kg,
                    "activity_level": profile.activity_level.value,
                    "objective": profile.objective.to_dict(),
                    "onboarding_completed": True,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id",
            ),
            "profiles.upsert",
        )
        require_rows(response, "profiles.upsert")
