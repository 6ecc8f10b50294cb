"""Supabase repository for meals and meal items."""

from dataclasses import dataclass

from supabase import Client

from macro_tracker.domain.errors import StorageFailure
from macro_tracker.domain.meals import Meal, MealItem
from macro_tracker.services.meals import MealRepository

_MEAL_COLUMNS = "id, name, date, user_id"
_ITEM_COLUMNS = "id, meal_id, product_id, grams"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals."""

    client: Client

    def get_meal(self, meal_id: int) -> Meal | None:
        """Return a meal row by id."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("id", meal_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def list_meals_for_user_and_date(self, user_id: int, day: str) -> list[Meal]:
        """Return a user's meals on a day."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("user_id", user_id)
            .eq("date", day)
            .order("id", desc=False)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def list_meals_for_user_between(
        self, user_id: int, start: str, end: str
    ) -> list[Meal]:
        """Return a user's meals in an inclusive date range."""
        response = (
            self.client.table("meals")
            .select(_MEAL_COLUMNS)
            .eq("user_id", user_id)
            .gte("date", start)
            .lte("date", end)
            .order("date", desc=False)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def create_meal(self, user_id: int, day: str, name: str) -> Meal:
        """Create a meal row and return it."""
        response = (
            self.client.table("meals")
            .insert({"user_id": user_id, "date": day, "name": name})
            .execute()
        )
        if not response.data:
            raise StorageFailure("Failed to create meal")
        return _parse_meal(response.data[0])

    def delete_meal(self, meal_id: int) -> None:
        """Delete a meal and its items."""
        self.client.table("meal_items").delete().eq("meal_id", meal_id).execute()
        self.client.table("meals").delete().eq("id", meal_id).execute()

    def list_items_for_meal(self, meal_id: int) -> list[MealItem]:
        """Return items for a meal."""
        response = (
            self.client.table("meal_items")
            .select(_ITEM_COLUMNS)
            .eq("meal_id", meal_id)
            .order("id", desc=False)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def list_items_for_meals(self, meal_ids: list[int]) -> list[MealItem]:
        """Return items for several meals."""
        if not meal_ids:
            return []
        response = (
            self.client.table("meal_items")
            .select(_ITEM_COLUMNS)
            .in_("meal_id", list(meal_ids))
            .order("id", desc=False)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def get_item(self, item_id: int) -> MealItem | None:
        """Return a meal item by id."""
        response = (
            self.client.table("meal_items")
            .select(_ITEM_COLUMNS)
            .eq("id", item_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_item(response.data[0])

    def create_item(
        self, meal_id: int, product_id: int, consumed_grams: float
    ) -> MealItem:
        """Create a meal item row."""
        response = (
            self.client.table("meal_items")
            .insert(
                {"meal_id": meal_id, "product_id": product_id, "grams": consumed_grams}
            )
            .execute()
        )
        if not response.data:
            raise StorageFailure("Failed to create meal item")
        return _parse_item(response.data[0])

    def delete_item(self, item_id: int) -> None:
        """Delete a meal item row."""
        self.client.table("meal_items").delete().eq("id", item_id).execute()


def _parse_meal(row: dict[str, object]) -> Meal:
    return Meal(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        date=str(row["date"]),
        user_id=int(row["user_id"]),
    )


def _parse_item(row: dict[str, object]) -> MealItem:
    return MealItem(
        id=int(row["id"]),
        meal_id=int(row["meal_id"]),
        product_id=int(row["product_id"]),
        consumed_grams=float(row.get("grams", 0.0)),
    )
