"""Report models returned to the application layer."""

from dataclasses import dataclass, field

from macro_tracker.domain.goals import GoalHistoryEntry
from macro_tracker.domain.meals import ItemWarning
from macro_tracker.domain.nutrition import MacroGoals, MacroTotals


@dataclass(frozen=True)
class DailyReport:
    """Totals for one day against the goal in effect that day."""

    day: str
    totals: MacroTotals
    goal: MacroGoals
    remaining: MacroTotals
    on_goal: bool
    skipped_items: int = 0
    warnings: list[ItemWarning] = field(default_factory=list)


@dataclass(frozen=True)
class PeriodStats:
    """Reductions over the tracked days of a period."""

    avg_calories: int
    avg_protein_g: int
    days_tracked: int
    days_on_goal: int


@dataclass(frozen=True)
class MonthlyReport:
    """Per-day totals and statistics for a calendar month."""

    year: int
    month: int
    per_day: dict[int, MacroTotals]
    goals_by_day: dict[int, MacroGoals]
    goal_history: list[GoalHistoryEntry]
    stats: PeriodStats
    skipped_items: int = 0
