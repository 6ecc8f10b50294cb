"""Supabase repository for goal history."""

from dataclasses import dataclass

from supabase import Client

from macro_tracker.domain.errors import StorageFailure
from macro_tracker.domain.goals import GoalHistoryEntry
from macro_tracker.domain.nutrition import MacroGoals
from macro_tracker.services.goals import GoalRepository

_HISTORY_COLUMNS = "id, user_id, calories, protein_g, carbs_g, fat_g, effective_date"


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Supabase implementation for goal history queries."""

    client: Client

    def list_goal_history(
        self, user_id: int, up_to_inclusive: str
    ) -> list[GoalHistoryEntry]:
        """Return goal changes up to a date, ascending."""
        response = (
            self.client.table("goal_history")
            .select(_HISTORY_COLUMNS)
            .eq("user_id", user_id)
            .lte("effective_date", up_to_inclusive)
            .order("effective_date", desc=False)
            .order("id", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def add_goal_history(
        self, user_id: int, goal: MacroGoals, effective_date: str
    ) -> GoalHistoryEntry:
        """Append a goal change row."""
        response = (
            self.client.table("goal_history")
            .insert(
                {
                    "user_id": user_id,
                    "calories": goal.calories,
                    "protein_g": goal.protein_g,
                    "carbs_g": goal.carbs_g,
                    "fat_g": goal.fat_g,
                    "effective_date": effective_date,
                }
            )
            .execute()
        )
        if not response.data:
            raise StorageFailure("Failed to record goal change")
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> GoalHistoryEntry:
    return GoalHistoryEntry(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        calories=float(row.get("calories", 0.0)),
        protein_g=float(row.get("protein_g", 0.0)),
        carbs_g=float(row.get("carbs_g", 0.0)),
        fat_g=float(row.get("fat_g", 0.0)),
        effective_date=str(row["effective_date"]),
    )
