"""Supabase repository for meal analyses."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from nutrition_core.adapters.supabase_store import execute, require_rows
from nutrition_core.domain.meals import Confidence, MealAnalysis, MealPeriod
from nutrition_core.services.meals import MealRepository

_COLUMNS = (
    "id, foods, calories, protein, carbs, fat, confidence, notes, "
    "meal_period, analyzed_at"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meal persistence."""

    client: Client

    def list_meals(
        self, user_id: UUID, start: datetime | None = None, end: datetime | None = None
    ) -> list[MealAnalysis]:
        """Return meals analyzed in the time range."""
        query = (
            self.client.table("meal_analyses")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
        )
        if start is not None:
            query = query.gte("analyzed_at", start.isoformat())
        if end is not None:
            query = query.lt("analyzed_at", end.isoformat())
        response = execute(
            query.order("analyzed_at", desc=False), "meal_analyses.select"
        )
        return [_parse_row(row) for row in response.data or []]

    def insert(self, user_id: UUID, meal: MealAnalysis) -> UUID:
        """Create a meal row and return its id."""
        response = execute(
            self.client.table("meal_analyses").insert(
                {
                    "user_id": str(user_id),
                    "foods": meal.foods,
                    "calories": meal.calories,
                    "protein": meal.protein,
                    "carbs": meal.carbs,
                    "fat": meal.fat,
                    "confidence": meal.confidence.value,
                    "notes": meal.notes,
                    "meal_period": (
                        meal.meal_period.value if meal.meal_period else None
                    ),
                    "analyzed_at": meal.analyzed_at.isoformat(),
                }
            ),
            "meal_analyses.insert",
        )
        rows = require_rows(response, "meal_analyses.insert")
        return UUID(rows[0]["id"])

    def delete(self, user_id: UUID, meal_id: UUID) -> None:
        """Delete a meal owned by the user."""
        execute(
            self.client.table("meal_analyses")
            .delete()
            .eq("id", str(meal_id))
            .eq("user_id", str(user_id)),
            "meal_analyses.delete",
        )


def _parse_row(row: dict[str, object]) -> MealAnalysis:
    period = row.get("meal_period")
    return MealAnalysis(
        id=UUID(str(row["id"])),
        foods=[str(food) for food in row.get("foods") or []],
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fat=float(row.get("fat") or 0.0),
        confidence=Confidence(row.get("confidence") or Confidence.LOW),
        notes=row.get("notes"),
        meal_period=MealPeriod(period) if period else None,
        analyzed_at=datetime.fromisoformat(str(row["analyzed_at"])),
    )
