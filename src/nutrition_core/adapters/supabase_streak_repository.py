"""Supabase repository for user streaks."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from nutrition_core.adapters.supabase_store import execute, require_rows
from nutrition_core.domain.streaks import UserStreak
from nutrition_core.services.streaks import StreakRepository


@dataclass
class SupabaseStreakRepository(StreakRepository):
    """Supabase implementation for streak persistence."""

    client: Client

    def get(self, user_id: UUID) -> UserStreak | None:
        """Return the user's streak row."""
        response = execute(
            self.client.table("user_streaks")
            .select("current_streak, longest_streak, last_activity_date")
            .eq("user_id", str(user_id))
            .limit(1),
            "user_streaks.select",
        )
        if not response.data:
            return None
        row = response.data[0]
        last_raw = row.get("last_activity_date")
        return UserStreak(
            current_streak=int(row.get("current_streak") or 0),
            longest_streak=int(row.get("longest_streak") or 0),
            last_activity_date=date.fromisoformat(last_raw) if last_raw else None,
        )

    def put(self, user_id: UUID, streak: UserStreak) -> None:
        """Create or replace the user's streak row."""
        last = streak.last_activity_date
        response = execute(
            self.client.table("user_streaks").upsert(
                {
                    "user_id": str(user_id),
                    "current_streak": streak.current_streak,
                    "longest_streak": streak.longest_streak,
                    "last_activity_date": last.isoformat() if last else None,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id",
            ),
            "user_streaks.upsert",
        )
        require_rows(response, "user_streaks.upsert")
