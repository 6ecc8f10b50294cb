"""Domain models for the macro tracker."""

from dataclasses import dataclass

from macro_tracker.domain.nutrition import MacroGoals


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: int
    username: str
    current_goal: MacroGoals
