"""Meal logging service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from macro_tracker.domain.errors import NotFound, PreconditionViolation
from macro_tracker.domain.meals import Meal, MealDetail, MealItem
from macro_tracker.services.aggregation import aggregate_meal, item_breakdown
from macro_tracker.services.products import ProductService
from macro_tracker.services.scaling import grams_for_quantity

DEFAULT_MEAL_NAME = "Daily Log"

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals and meal items."""

    def get_meal(self, meal_id: int) -> Meal | None:
        """Return a meal by id."""

    def list_meals_for_user_and_date(self, user_id: int, day: str) -> list[Meal]:
        """Return a user's meals on a day in creation order."""

    def list_meals_for_user_between(
        self, user_id: int, start: str, end: str
    ) -> list[Meal]:
        """Return a user's meals with start <= date <= end."""

    def create_meal(self, user_id: int, day: str, name: str) -> Meal:
        """Create a meal and return it."""

    def delete_meal(self, meal_id: int) -> None:
        """Delete a meal together with its items."""

    def list_items_for_meal(self, meal_id: int) -> list[MealItem]:
        """Return the items of a meal in creation order."""

    def list_items_for_meals(self, meal_ids: list[int]) -> list[MealItem]:
        """Return the items of several meals."""

    def get_item(self, item_id: int) -> MealItem | None:
        """Return a meal item by id."""

    def create_item(
        self, meal_id: int, product_id: int, consumed_grams: float
    ) -> MealItem:
        """Create a meal item and return it."""

    def delete_item(self, item_id: int) -> None:
        """Delete a meal item."""


@dataclass
class MealService:
    """Service for recording what a user ate."""

    repository: MealRepository
    product_service: ProductService

    def get_or_create_meal_for_date(self, user_id: int, day: str) -> Meal:
        """Return the first meal of the day, creating the daily log if absent."""
        meals = self.repository.list_meals_for_user_and_date(user_id, day)
        if meals:
            return meals[0]
        _logger.info("Creating daily log: user_id=%s day=%s", user_id, day)
        return self.repository.create_meal(user_id, day, DEFAULT_MEAL_NAME)

    def create_meal(self, user_id: int, day: str, name: str | None = None) -> Meal:
        """Create a meal for any date."""
        return self.repository.create_meal(
            user_id, day, (name or "").strip() or DEFAULT_MEAL_NAME
        )

    def list_day(self, user_id: int, day: str) -> list[MealDetail]:
        """Return detailed meals for a day."""
        meals = self.repository.list_meals_for_user_and_date(user_id, day)
        return [self._detail(meal) for meal in meals]

    def get_meal_detail(self, user_id: int, meal_id: int) -> MealDetail:
        """Return a meal with item lines and totals."""
        return self._detail(self._owned_meal(user_id, meal_id))

    def add_item(
        self,
        user_id: int,
        meal_id: int,
        product_id: int,
        grams: float | None = None,
        units: float | None = None,
    ) -> MealItem:
        """Add a product to a meal, by grams or by number of units."""
        if (grams is None) == (units is None):
            raise PreconditionViolation("Provide either grams or units")
        meal = self._owned_meal(user_id, meal_id)
        product = self.product_service.get_product(product_id)
        consumed = grams if grams is not None else grams_for_quantity(product, units)
        if consumed <= 0:
            raise PreconditionViolation("Consumed grams must be positive")
        return self.repository.create_item(meal.id, product.id, consumed)

    def remove_item(self, user_id: int, item_id: int) -> None:
        """Delete a meal item owned by the user."""
        item = self.repository.get_item(item_id)
        if item is None:
            raise NotFound("meal item", item_id)
        self._owned_meal(user_id, item.meal_id)
        self.repository.delete_item(item_id)

    def delete_meal(self, user_id: int, meal_id: int) -> None:
        """Delete a meal and its items."""
        meal = self._owned_meal(user_id, meal_id)
        self.repository.delete_meal(meal.id)
        _logger.info("Meal deleted: id=%s user_id=%s", meal.id, user_id)

    def _owned_meal(self, user_id: int, meal_id: int) -> Meal:
        meal = self.repository.get_meal(meal_id)
        if meal is None or meal.user_id != user_id:
            raise NotFound("meal", meal_id)
        return meal

    def _detail(self, meal: Meal) -> MealDetail:
        items = self.repository.list_items_for_meal(meal.id)
        products = self.product_service.products_by_ids(
            sorted({item.product_id for item in items})
        )
        return MealDetail(
            meal=meal,
            lines=item_breakdown(items, products),
            aggregate=aggregate_meal(items, products),
        )
