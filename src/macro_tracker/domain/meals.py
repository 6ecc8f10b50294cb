"""Domain models for meals and their items."""

from dataclasses import dataclass, field

from macro_tracker.domain.nutrition import MacroTotals


@dataclass(frozen=True)
class Meal:
    """A named group of items eaten on one day."""

    id: int
    name: str
    date: str
    user_id: int


@dataclass(frozen=True)
class MealItem:
    """A consumed amount of a product within a meal."""

    id: int
    meal_id: int
    product_id: int
    consumed_grams: float


@dataclass(frozen=True)
class ItemWarning:
    """An item excluded from totals because its inputs were invalid."""

    item_id: int
    reason: str


@dataclass(frozen=True)
class MealAggregate:
    """Totals for a set of items plus what had to be left out."""

    totals: MacroTotals = field(default_factory=MacroTotals)
    skipped_items: int = 0
    warnings: list[ItemWarning] = field(default_factory=list)

    def __add__(self, other: "MealAggregate") -> "MealAggregate":
        return MealAggregate(
            totals=self.totals + other.totals,
            skipped_items=self.skipped_items + other.skipped_items,
            warnings=[*self.warnings, *other.warnings],
        )


@dataclass(frozen=True)
class MealItemLine:
    """Scaled macros for one item, for display."""

    item_id: int
    product_id: int
    product_name: str
    consumed_grams: float
    macros: MacroTotals


@dataclass(frozen=True)
class MealDetail:
    """A meal with its item lines and totals."""

    meal: Meal
    lines: list[MealItemLine]
    aggregate: MealAggregate
