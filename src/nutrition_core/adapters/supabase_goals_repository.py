"""Supabase repository for nutrition goals."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrition_core.adapters.supabase_store import execute, require_rows
from nutrition_core.domain.goals import NutritionGoals
from nutrition_core.services.goals import GoalsRepository


@dataclass
class SupabaseGoalsRepository(GoalsRepository):
    """Supabase implementation for goals persistence."""

    client: Client

    def get(self, user_id: UUID) -> NutritionGoals | None:
        """Return the user's goals row."""
        response = execute(
            self.client.table("nutrition_goals")
            .select("calories, protein, carbs, fat")
            .eq("user_id", str(user_id))
            .limit(1),
            "nutrition_goals.select",
        )
        if not response.data:
            return None
        row = response.data[0]
        return NutritionGoals(
            calories=int(row.get("calories", 0)),
            protein=int(row.get("protein", 0)),
            carbs=int(row.get("carbs", 0)),
            fat=int(row.get("fat", 0)),
        )

    def put(self, user_id: UUID, goals: NutritionGoals) -> None:
        """Create or replace the user's goals row."""
        response = execute(
            self.client.table("nutrition_goals").upsert(
                {
                    "user_id": str(user_id),
                    **goals.to_dict(),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id",
            ),
            "nutrition_goals.upsert",
        )
        require_rows(response, "nutrition_goals.upsert")
