"""Goal history and resolution of the goal in effect on a date."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol

from macro_tracker.domain.errors import PreconditionViolation
from macro_tracker.domain.goals import GoalHistoryEntry
from macro_tracker.domain.nutrition import MacroGoals, MacroSplit
from macro_tracker.services.scaling import round_half_up
from macro_tracker.services.users import UserService

PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9

# Effective date of the entry that preserves the goal held before any change.
BASELINE_EFFECTIVE_DATE = date.min.isoformat()
LATEST_DATE = date.max.isoformat()

_logger = logging.getLogger(__name__)


class GoalRepository(Protocol):
    """Persistence interface for goal history."""

    def list_goal_history(
        self, user_id: int, up_to_inclusive: str
    ) -> list[GoalHistoryEntry]:
        """Return entries with effective_date <= up_to_inclusive, ascending."""

    def add_goal_history(
        self, user_id: int, goal: MacroGoals, effective_date: str
    ) -> GoalHistoryEntry:
        """Append a goal change and return the stored entry."""


def resolve_goal(
    day: str, history: Iterable[GoalHistoryEntry], fallback: MacroGoals
) -> MacroGoals:
    """Return the goal in effect on ``day``.

    The latest entry with ``effective_date <= day`` wins; entries sharing that
    date are ordered by id so the most recently created one applies. Input order
    does not matter. Days before the first entry get ``fallback``.
    """
    applicable = [entry for entry in history if entry.effective_date <= day]
    if not applicable:
        return fallback
    latest = max(applicable, key=lambda entry: (entry.effective_date, entry.id))
    return latest.to_goals()


def macro_split(goals: MacroGoals) -> MacroSplit:
    """Return the percentage of goal calories each macro accounts for."""
    if goals.calories <= 0:
        return MacroSplit(protein_pct=0, carbs_pct=0, fat_pct=0)
    return MacroSplit(
        protein_pct=int(
            round_half_up(goals.protein_g * PROTEIN_KCAL_PER_G / goals.calories * 100)
        ),
        carbs_pct=int(
            round_half_up(goals.carbs_g * CARBS_KCAL_PER_G / goals.calories * 100)
        ),
        fat_pct=int(round_half_up(goals.fat_g * FAT_KCAL_PER_G / goals.calories * 100)),
    )


@dataclass
class GoalService:
    """Service for reading and versioning a user's macro goals."""

    repository: GoalRepository
    user_service: UserService

    def get_current_goal(self, user_id: int) -> MacroGoals:
        """Return the user's fallback goal."""
        return self.user_service.get_user(user_id).current_goal

    def list_history(self, user_id: int, up_to: str) -> list[GoalHistoryEntry]:
        """Return goal changes effective on or before ``up_to``."""
        self.user_service.get_user(user_id)
        return self.repository.list_goal_history(user_id, up_to)

    def goal_for_date(self, user_id: int, day: str) -> MacroGoals:
        """Return the goal that applied on ``day``."""
        fallback = self.get_current_goal(user_id)
        history = self.repository.list_goal_history(user_id, day)
        return resolve_goal(day, history, fallback)

    def update_goals(
        self, user_id: int, goal: MacroGoals, effective_date: str | None = None
    ) -> GoalHistoryEntry:
        """Record a goal change in history and make it the current goal.

        The first change also stores the goal the user held until then, so days
        before ``effective_date`` keep resolving to it.
        """
        _validate_goal(goal)
        previous = self.user_service.get_user(user_id).current_goal
        effective = effective_date or datetime.now(tz=UTC).date().isoformat()
        if not self.repository.list_goal_history(user_id, LATEST_DATE):
            self.repository.add_goal_history(user_id, previous, BASELINE_EFFECTIVE_DATE)
        entry = self.repository.add_goal_history(user_id, goal, effective)
        self.user_service.set_current_goal(user_id, goal)
        _logger.info(
            "Goal updated: user_id=%s effective_date=%s calories=%s",
            user_id,
            effective,
            goal.calories,
        )
        return entry


def _validate_goal(goal: MacroGoals) -> None:
    if goal.calories <= 0:
        raise PreconditionViolation("Calorie goal must be positive")
    if min(goal.protein_g, goal.carbs_g, goal.fat_g) < 0:
        raise PreconditionViolation("Macro goals cannot be negative")
