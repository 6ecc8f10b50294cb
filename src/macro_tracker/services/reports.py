"""Daily and monthly macro reports."""

import calendar
from collections import defaultdict
from dataclasses import dataclass

from macro_tracker.domain.errors import PreconditionViolation
from macro_tracker.domain.meals import Meal, MealAggregate, MealItem
from macro_tracker.domain.nutrition import MacroTotals
from macro_tracker.domain.products import Product
from macro_tracker.domain.reports import DailyReport, MonthlyReport
from macro_tracker.services.aggregation import (
    aggregate_day,
    is_on_goal,
    remaining,
    summarize_period,
)
from macro_tracker.services.goals import GoalRepository, resolve_goal
from macro_tracker.services.meals import MealRepository
from macro_tracker.services.products import ProductRepository
from macro_tracker.services.users import UserService

DECEMBER = 12
MAX_YEAR = 9999


@dataclass
class ReportService:
    """Computes reports with every day judged against its own goal."""

    meal_repository: MealRepository
    product_repository: ProductRepository
    goal_repository: GoalRepository
    user_service: UserService

    def compute_daily_report(self, user_id: int, day: str) -> DailyReport:
        """Return totals, goal and remaining macros for one day."""
        fallback = self.user_service.get_user(user_id).current_goal
        meals = self.meal_repository.list_meals_for_user_and_date(user_id, day)
        aggregate = self._aggregate(meals)
        history = self.goal_repository.list_goal_history(user_id, day)
        goal = resolve_goal(day, history, fallback)
        return DailyReport(
            day=day,
            totals=aggregate.totals,
            goal=goal,
            remaining=remaining(goal, aggregate.totals),
            on_goal=is_on_goal(aggregate.totals.calories, goal.calories),
            skipped_items=aggregate.skipped_items,
            warnings=aggregate.warnings,
        )

    def compute_monthly_report(
        self, user_id: int, year: int, month: int
    ) -> MonthlyReport:
        """Return per-day totals and statistics for a calendar month."""
        if not 1 <= year <= MAX_YEAR:
            raise PreconditionViolation(f"Invalid year: {year}")
        if not 1 <= month <= DECEMBER:
            raise PreconditionViolation(f"Invalid month: {month}")
        fallback = self.user_service.get_user(user_id).current_goal
        start = f"{year:04d}-{month:02d}-01"
        end = f"{year:04d}-{month:02d}-{calendar.monthrange(year, month)[1]:02d}"
        meals = self.meal_repository.list_meals_for_user_between(user_id, start, end)
        meals_by_day: dict[str, list[Meal]] = defaultdict(list)
        for meal in meals:
            meals_by_day[meal.date].append(meal)

        items_by_meal, products = self._load_items(meals)
        per_date: dict[str, MacroTotals] = {}
        skipped = 0
        for day, day_meals in sorted(meals_by_day.items()):
            aggregate = aggregate_day(day_meals, items_by_meal, products)
            skipped += aggregate.skipped_items
            if _has_counted_items(day_meals, items_by_meal, aggregate):
                per_date[day] = aggregate.totals

        history = self.goal_repository.list_goal_history(user_id, end)
        stats = summarize_period(per_date, history, fallback)
        return MonthlyReport(
            year=year,
            month=month,
            per_day={int(day[-2:]): totals for day, totals in per_date.items()},
            goals_by_day={
                int(day[-2:]): resolve_goal(day, history, fallback) for day in per_date
            },
            goal_history=sorted(
                history, key=lambda entry: (entry.effective_date, entry.id)
            ),
            stats=stats,
            skipped_items=skipped,
        )

    def _aggregate(self, meals: list[Meal]) -> MealAggregate:
        items_by_meal, products = self._load_items(meals)
        return aggregate_day(meals, items_by_meal, products)

    def _load_items(
        self, meals: list[Meal]
    ) -> tuple[dict[int, list[MealItem]], dict[int, Product]]:
        if not meals:
            return {}, {}
        items = self.meal_repository.list_items_for_meals([meal.id for meal in meals])
        items_by_meal: dict[int, list[MealItem]] = defaultdict(list)
        for item in items:
            items_by_meal[item.meal_id].append(item)
        products = self.product_repository.list_products_by_ids(
            sorted({item.product_id for item in items})
        )
        return items_by_meal, products


def _has_counted_items(
    meals: list[Meal],
    items_by_meal: dict[int, list[MealItem]],
    aggregate: MealAggregate,
) -> bool:
    total_items = sum(len(items_by_meal.get(meal.id, [])) for meal in meals)
    return total_items - aggregate.skipped_items - len(aggregate.warnings) > 0
