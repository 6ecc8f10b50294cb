"""Supabase-backed user repository."""

from dataclasses import dataclass

from supabase import Client

from macro_tracker.domain.errors import StorageFailure
from macro_tracker.domain.models import UserRecord
from macro_tracker.domain.nutrition import DEFAULT_GOALS, MacroGoals
from macro_tracker.services.users import UserRepository

_USER_COLUMNS = (
    "id, username, goal_calories, goal_protein_g, goal_carbs_g, goal_fat_g"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_user(self, user_id: int) -> UserRecord | None:
        """Return the user with its current goal, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user for a username, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("username", username)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_user(response.data[0])

    def create_user(self, username: str, goal: MacroGoals) -> UserRecord:
        """Create a new user row and return it."""
        response = (
            self.client.table("users")
            .insert({"username": username, **_goal_columns(goal)})
            .execute()
        )
        if not response.data:
            raise StorageFailure("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def set_current_goal(self, user_id: int, goal: MacroGoals) -> None:
        """Replace the user's current goal columns."""
        self.client.table("users").update(_goal_columns(goal)).eq(
            "id", user_id
        ).execute()


def _goal_columns(goal: MacroGoals) -> dict[str, float]:
    return {
        "goal_calories": goal.calories,
        "goal_protein_g": goal.protein_g,
        "goal_carbs_g": goal.carbs_g,
        "goal_fat_g": goal.fat_g,
    }


def _parse_user(row: dict[str, object]) -> UserRecord:
    if row.get("goal_calories") is None:
        goal = DEFAULT_GOALS
    else:
        goal = MacroGoals(
            calories=float(row["goal_calories"]),
            protein_g=float(row.get("goal_protein_g") or 0.0),
            carbs_g=float(row.get("goal_carbs_g") or 0.0),
            fat_g=float(row.get("goal_fat_g") or 0.0),
        )
    return UserRecord(
        id=int(row["id"]),
        username=str(row.get("username", "")),
        current_goal=goal,
    )
