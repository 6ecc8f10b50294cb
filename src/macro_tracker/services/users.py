"""User-related business logic."""

from dataclasses import dataclass
from typing import Protocol

from macro_tracker.domain.errors import NotFound, PreconditionViolation
from macro_tracker.domain.models import UserRecord
from macro_tracker.domain.nutrition import DEFAULT_GOALS, MacroGoals

MIN_USERNAME_LENGTH = 3


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: int) -> UserRecord | None:
        """Return the user with its current goal, if present."""

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user for a username, if present."""

    def create_user(self, username: str, goal: MacroGoals) -> UserRecord:
        """Create and return a new user record."""

    def set_current_goal(self, user_id: int, goal: MacroGoals) -> None:
        """Replace the user's current (fallback) goal."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    def register(self, username: str) -> UserRecord:
        """Create a user with the default goals."""
        cleaned = username.strip()
        if len(cleaned) < MIN_USERNAME_LENGTH:
            raise PreconditionViolation(
                f"Username must be at least {MIN_USERNAME_LENGTH} characters"
            )
        if self.repository.get_by_username(cleaned):
            raise PreconditionViolation("Username already taken")
        return self.repository.create_user(cleaned, DEFAULT_GOALS)

    def get_user(self, user_id: int) -> UserRecord:
        """Return a user or raise NotFound."""
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFound("user", user_id)
        return user

    def set_current_goal(self, user_id: int, goal: MacroGoals) -> None:
        """Replace the goal used for days without goal history."""
        self.repository.set_current_goal(user_id, goal)
