"""Tests for goal resolution and goal versioning."""

import random

import pytest

from macro_tracker.domain.errors import NotFound, PreconditionViolation, StorageFailure
from macro_tracker.domain.goals import GoalHistoryEntry
from macro_tracker.domain.nutrition import DEFAULT_GOALS, MacroGoals, MacroSplit
from macro_tracker.services.goals import GoalService, macro_split, resolve_goal
from macro_tracker.services.users import UserService
from tests.conftest import InMemoryGoalRepository, InMemoryUserRepository

FALLBACK = MacroGoals(calories=2200, protein_g=160, carbs_g=240, fat_g=70)
G1 = MacroGoals(calories=2000, protein_g=150, carbs_g=200, fat_g=65)
G2 = MacroGoals(calories=1800, protein_g=140, carbs_g=180, fat_g=60)


def _entry(entry_id: int, effective_date: str, goal: MacroGoals) -> GoalHistoryEntry:
    return GoalHistoryEntry(
        id=entry_id,
        user_id=1,
        calories=goal.calories,
        protein_g=goal.protein_g,
        carbs_g=goal.carbs_g,
        fat_g=goal.fat_g,
        effective_date=effective_date,
    )


HISTORY = [_entry(1, "2024-01-01", G1), _entry(2, "2024-06-01", G2)]


def test_resolve_goal_empty_history_returns_fallback() -> None:
    assert resolve_goal("2024-05-05", [], FALLBACK) == FALLBACK


@pytest.mark.parametrize(
    ("day", "expected"),
    [
        ("2024-03-01", G1),
        ("2024-06-01", G2),
        ("2023-12-31", FALLBACK),
        ("2024-01-01", G1),
        ("2025-01-01", G2),
    ],
)
def test_resolve_goal_picks_latest_entry_on_or_before_day(
    day: str, expected: MacroGoals
) -> None:
    assert resolve_goal(day, HISTORY, FALLBACK) == expected


def test_resolve_goal_does_not_depend_on_input_order() -> None:
    history = [
        _entry(1, "2024-01-01", G1),
        _entry(2, "2024-02-15", G2),
        _entry(3, "2024-04-01", FALLBACK),
    ]
    shuffled = list(history)
    random.Random(7).shuffle(shuffled)

    assert resolve_goal("2024-03-01", reversed(history), DEFAULT_GOALS) == G2
    assert resolve_goal("2024-03-01", shuffled, DEFAULT_GOALS) == G2


def test_resolve_goal_duplicate_dates_prefer_highest_id() -> None:
    history = [_entry(9, "2024-01-01", G2), _entry(4, "2024-01-01", G1)]

    assert resolve_goal("2024-01-10", history, FALLBACK) == G2


def test_macro_split_uses_calories_per_gram() -> None:
    assert macro_split(G1) == MacroSplit(protein_pct=30, carbs_pct=40, fat_pct=29)


def test_macro_split_zero_calories() -> None:
    goal = MacroGoals(calories=0, protein_g=10, carbs_g=10, fat_g=10)

    assert macro_split(goal) == MacroSplit(protein_pct=0, carbs_pct=0, fat_pct=0)


def _service() -> tuple[GoalService, int]:
    user_service = UserService(InMemoryUserRepository())
    user = user_service.register("alice")
    return GoalService(InMemoryGoalRepository(), user_service), user.id


def test_update_goals_versions_history_without_rewriting_past() -> None:
    service, user_id = _service()

    service.update_goals(user_id, G1, effective_date="2024-01-01")
    service.update_goals(user_id, G2, effective_date="2024-02-15")

    assert service.goal_for_date(user_id, "2024-02-01") == G1
    assert service.goal_for_date(user_id, "2024-03-01") == G2
    assert service.get_current_goal(user_id) == G2
    assert [
        entry.effective_date for entry in service.list_history(user_id, "2024-12-31")
    ] == ["0001-01-01", "2024-01-01", "2024-02-15"]


def test_goal_for_date_before_history_uses_current_goal() -> None:
    service, user_id = _service()

    assert service.goal_for_date(user_id, "2020-01-01") == DEFAULT_GOALS


def test_update_goals_rejects_non_positive_calories() -> None:
    service, user_id = _service()

    with pytest.raises(PreconditionViolation):
        service.update_goals(
            user_id, MacroGoals(calories=0, protein_g=1, carbs_g=1, fat_g=1)
        )


def test_goal_for_unknown_user_raises_not_found() -> None:
    service, _ = _service()

    with pytest.raises(NotFound):
        service.goal_for_date(999, "2024-01-01")


def test_first_goal_change_keeps_earlier_days_on_previous_goal() -> None:
    service, user_id = _service()
    assert service.goal_for_date(user_id, "2024-01-10") == DEFAULT_GOALS

    service.update_goals(user_id, G2, effective_date="2024-02-15")

    assert service.goal_for_date(user_id, "2024-01-10") == DEFAULT_GOALS
    assert service.goal_for_date(user_id, "2024-02-15") == G2
    assert service.get_current_goal(user_id) == G2


def test_later_goal_changes_do_not_add_another_baseline() -> None:
    service, user_id = _service()

    service.update_goals(user_id, G1, effective_date="2024-01-01")
    service.update_goals(user_id, G2, effective_date="2024-02-15")

    history = service.list_history(user_id, "2024-12-31")
    assert [entry.to_goals() for entry in history] == [DEFAULT_GOALS, G1, G2]


class FailingGoalRepository(InMemoryGoalRepository):
    def add_goal_history(
        self, user_id: int, goal: MacroGoals, effective_date: str
    ) -> GoalHistoryEntry:
        raise StorageFailure("goal_history insert returned no data")


def test_failed_history_write_leaves_current_goal_unchanged() -> None:
    user_service = UserService(InMemoryUserRepository())
    user = user_service.register("alice")
    service = GoalService(FailingGoalRepository(), user_service)

    with pytest.raises(StorageFailure):
        service.update_goals(user.id, G2, effective_date="2024-02-15")

    assert service.get_current_goal(user.id) == DEFAULT_GOALS
