"""Macro aggregation over meal items, meals and periods."""

import logging
from collections.abc import Iterable, Mapping

from macro_tracker.domain.errors import OrphanedReference, PreconditionViolation
from macro_tracker.domain.goals import GoalHistoryEntry
from macro_tracker.domain.meals import (
    ItemWarning,
    Meal,
    MealAggregate,
    MealItem,
    MealItemLine,
)
from macro_tracker.domain.nutrition import MacroGoals, MacroTotals
from macro_tracker.domain.products import Product
from macro_tracker.domain.reports import PeriodStats
from macro_tracker.services.goals import resolve_goal
from macro_tracker.services.scaling import round_half_up, scale

# 0.9 * goal <= actual <= 1.1 * goal
GOAL_TOLERANCE = 0.10

_logger = logging.getLogger(__name__)


def aggregate_meal(
    items: Iterable[MealItem], products: Mapping[int, Product]
) -> MealAggregate:
    """Sum scaled macros of ``items``.

    Items whose product is gone are counted in ``skipped_items``; items with
    invalid grams or products are reported in ``warnings``. Neither aborts the
    aggregation.
    """
    totals = MacroTotals()
    skipped = 0
    warnings: list[ItemWarning] = []
    for item in items:
        try:
            totals += _scale_item(item, products)
        except OrphanedReference as exc:
            _logger.warning("Skipping orphaned meal item: %s", exc)
            skipped += 1
        except PreconditionViolation as exc:
            _logger.warning("Skipping invalid meal item %s: %s", item.id, exc)
            warnings.append(ItemWarning(item_id=item.id, reason=str(exc)))
    return MealAggregate(totals=totals, skipped_items=skipped, warnings=warnings)


def aggregate_day(
    meals: Iterable[Meal],
    items_by_meal: Mapping[int, list[MealItem]],
    products: Mapping[int, Product],
) -> MealAggregate:
    """Sum ``aggregate_meal`` over every meal of a day."""
    aggregate = MealAggregate()
    for meal in meals:
        aggregate += aggregate_meal(items_by_meal.get(meal.id, []), products)
    return aggregate


def item_breakdown(
    items: Iterable[MealItem], products: Mapping[int, Product]
) -> list[MealItemLine]:
    """Return per-item scaled macros, omitting items that cannot be scaled."""
    lines: list[MealItemLine] = []
    for item in items:
        try:
            macros = _scale_item(item, products)
        except (OrphanedReference, PreconditionViolation):
            continue
        lines.append(
            MealItemLine(
                item_id=item.id,
                product_id=item.product_id,
                product_name=products[item.product_id].name,
                consumed_grams=item.consumed_grams,
                macros=macros,
            )
        )
    return lines


def remaining(goal: MacroGoals, totals: MacroTotals) -> MacroTotals:
    """Return what is left of each goal, floored at zero."""
    return MacroTotals(
        calories=max(0, goal.calories - totals.calories),
        protein_g=max(0, goal.protein_g - totals.protein_g),
        carbs_g=max(0, goal.carbs_g - totals.carbs_g),
        fat_g=max(0, goal.fat_g - totals.fat_g),
    )


def is_on_goal(actual_calories: float, goal_calories: float) -> bool:
    """Return True when calories fall within GOAL_TOLERANCE of the goal."""
    if goal_calories <= 0:
        return False
    return (
        goal_calories * (1 - GOAL_TOLERANCE)
        <= actual_calories
        <= goal_calories * (1 + GOAL_TOLERANCE)
    )


def summarize_period(
    days: Mapping[str, MacroTotals],
    history: Iterable[GoalHistoryEntry],
    fallback: MacroGoals,
) -> PeriodStats:
    """Reduce tracked days to averages and an on-goal count.

    Each day is judged against the goal resolved for that day. Protein is
    rounded per day before averaging.
    """
    history = list(history)
    tracked = len(days)
    if not tracked:
        return PeriodStats(
            avg_calories=0, avg_protein_g=0, days_tracked=0, days_on_goal=0
        )
    on_goal = sum(
        1
        for day, totals in days.items()
        if is_on_goal(totals.calories, resolve_goal(day, history, fallback).calories)
    )
    total_calories = sum(totals.calories for totals in days.values())
    total_protein = sum(round_half_up(totals.protein_g) for totals in days.values())
    return PeriodStats(
        avg_calories=int(round_half_up(total_calories / tracked)),
        avg_protein_g=int(round_half_up(total_protein / tracked)),
        days_tracked=tracked,
        days_on_goal=on_goal,
    )


def _scale_item(item: MealItem, products: Mapping[int, Product]) -> MacroTotals:
    product = products.get(item.product_id)
    if product is None:
        raise OrphanedReference(item.id, item.product_id)
    return scale(product, item.consumed_grams)
