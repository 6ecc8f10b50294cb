"""Domain models for goal history."""

from dataclasses import dataclass

from macro_tracker.domain.nutrition import MacroGoals


@dataclass(frozen=True)
class GoalHistoryEntry:
    """From effective_date onwards the user's goal became these values."""

    id: int
    user_id: int
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    effective_date: str

    def to_goals(self) -> MacroGoals:
        return MacroGoals(
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
        )
