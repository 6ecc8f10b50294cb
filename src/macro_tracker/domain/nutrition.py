"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroTotals:
    """Consumed calories and macros in grams."""

    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0

    def __add__(self, other: "MacroTotals") -> "MacroTotals":
        return MacroTotals(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
        )


@dataclass(frozen=True)
class MacroGoals:
    """Daily macro targets."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


DEFAULT_GOALS = MacroGoals(calories=2000, protein_g=150, carbs_g=200, fat_g=65)


@dataclass(frozen=True)
class MacroSplit:
    """Share of goal calories contributed by each macro, in percent."""

    protein_pct: int
    carbs_pct: int
    fat_pct: int
