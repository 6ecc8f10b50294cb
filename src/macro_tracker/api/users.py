"""User, goal and report endpoints."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status

from macro_tracker.api.dependencies import require_token
from macro_tracker.api.models import GoalsUpdate, UserCreate
from macro_tracker.api.serializers import (
    serialize_daily_report,
    serialize_goal_entry,
    serialize_monthly_report,
    serialize_user,
)
from macro_tracker.domain.nutrition import MacroGoals
from macro_tracker.services.goals import macro_split

if TYPE_CHECKING:
    from macro_tracker.containers import AppContainer

router = APIRouter(
    prefix="/users", tags=["users"], dependencies=[Depends(require_token)]
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def register_user(payload: UserCreate, request: Request) -> dict[str, object]:
    """Register a user with default goals."""
    container: AppContainer = request.app.state.container
    user = container.user_service.register(payload.username)
    return serialize_user(user)


@router.get("/{user_id}")
async def get_user(user_id: int, request: Request) -> dict[str, object]:
    """Return a user with the current goal."""
    container: AppContainer = request.app.state.container
    return serialize_user(container.user_service.get_user(user_id))


@router.get("/{user_id}/goals")
async def get_goals(
    user_id: int, request: Request, day: date | None = None
) -> dict[str, object]:
    """Return the goal in effect on a day (today by default) and its split."""
    container: AppContainer = request.app.state.container
    resolved_day = (day or datetime.now(tz=UTC).date()).isoformat()
    goal = container.goal_service.goal_for_date(user_id, resolved_day)
    return {
        "day": resolved_day,
        "goal": vars(goal),
        "split": vars(macro_split(goal)),
    }


@router.put("/{user_id}/goals")
async def update_goals(
    user_id: int, payload: GoalsUpdate, request: Request
) -> dict[str, object]:
    """Change the user's goals from a date onwards."""
    container: AppContainer = request.app.state.container
    entry = container.goal_service.update_goals(
        user_id,
        MacroGoals(
            calories=payload.calories,
            protein_g=payload.protein_g,
            carbs_g=payload.carbs_g,
            fat_g=payload.fat_g,
        ),
        effective_date=(
            payload.effective_date.isoformat() if payload.effective_date else None
        ),
    )
    return serialize_goal_entry(entry)


@router.get("/{user_id}/goals/history")
async def goal_history(
    user_id: int, request: Request, up_to: date | None = None
) -> dict[str, object]:
    """Return goal changes effective on or before a date."""
    container: AppContainer = request.app.state.container
    resolved = (up_to or datetime.now(tz=UTC).date()).isoformat()
    entries = container.goal_service.list_history(user_id, resolved)
    return {"history": [serialize_goal_entry(entry) for entry in entries]}


@router.get("/{user_id}/reports/daily/{day}")
async def daily_report(user_id: int, day: date, request: Request) -> dict[str, object]:
    """Return totals and remaining macros for a day."""
    container: AppContainer = request.app.state.container
    report = container.report_service.compute_daily_report(user_id, day.isoformat())
    return serialize_daily_report(report)


@router.get("/{user_id}/reports/monthly/{year}/{month}")
async def monthly_report(
    user_id: int, year: int, month: int, request: Request
) -> dict[str, object]:
    """Return per-day totals and statistics for a month."""
    container: AppContainer = request.app.state.container
    report = container.report_service.compute_monthly_report(user_id, year, month)
    return serialize_monthly_report(report)
