"""Conversion of domain results into JSON-ready dictionaries."""

from dataclasses import asdict

from macro_tracker.domain.goals import GoalHistoryEntry
from macro_tracker.domain.meals import Meal, MealDetail, MealItem
from macro_tracker.domain.models import UserRecord
from macro_tracker.domain.products import Product
from macro_tracker.domain.reports import DailyReport, MonthlyReport


def serialize_user(user: UserRecord) -> dict[str, object]:
    return asdict(user)


def serialize_product(product: Product) -> dict[str, object]:
    return asdict(product)


def serialize_meal(meal: Meal) -> dict[str, object]:
    return asdict(meal)


def serialize_item(item: MealItem) -> dict[str, object]:
    return asdict(item)


def serialize_goal_entry(entry: GoalHistoryEntry) -> dict[str, object]:
    return asdict(entry)


def serialize_meal_detail(detail: MealDetail) -> dict[str, object]:
    return {
        **asdict(detail.meal),
        "items": [asdict(line) for line in detail.lines],
        "totals": asdict(detail.aggregate.totals),
        "skipped_items": detail.aggregate.skipped_items,
        "warnings": [asdict(warning) for warning in detail.aggregate.warnings],
    }


def serialize_daily_report(report: DailyReport) -> dict[str, object]:
    return asdict(report)


def serialize_monthly_report(report: MonthlyReport) -> dict[str, object]:
    """Serialize a monthly report; day keys become strings in JSON."""
    return {
        "year": report.year,
        "month": report.month,
        "per_day": {
            str(day): asdict(totals) for day, totals in sorted(report.per_day.items())
        },
        "goals_by_day": {
            str(day): asdict(goal) for day, goal in sorted(report.goals_by_day.items())
        },
        "goal_history": [serialize_goal_entry(entry) for entry in report.goal_history],
        "stats": asdict(report.stats),
        "skipped_items": report.skipped_items,
    }
