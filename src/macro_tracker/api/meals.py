"""Meal and meal item endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status

from macro_tracker.api.dependencies import require_token
from macro_tracker.api.models import MealCreate, MealItemCreate
from macro_tracker.api.serializers import (
    serialize_item,
    serialize_meal,
    serialize_meal_detail,
)

if TYPE_CHECKING:
    from macro_tracker.containers import AppContainer

router = APIRouter(
    prefix="/users", tags=["meals"], dependencies=[Depends(require_token)]
)


@router.get("/{user_id}/days/{day}/meals")
async def list_day(user_id: int, day: date, request: Request) -> dict[str, object]:
    """Return the meals of a day with item lines."""
    container: AppContainer = request.app.state.container
    details = container.meal_service.list_day(user_id, day.isoformat())
    return {"meals": [serialize_meal_detail(detail) for detail in details]}


@router.post("/{user_id}/days/{day}/daily-log")
async def daily_log(user_id: int, day: date, request: Request) -> dict[str, object]:
    """Return the day's first meal, creating the daily log when missing."""
    container: AppContainer = request.app.state.container
    meal = container.meal_service.get_or_create_meal_for_date(
        user_id, day.isoformat()
    )
    return serialize_meal(meal)


@router.post("/{user_id}/meals", status_code=status.HTTP_201_CREATED)
async def create_meal(
    user_id: int, payload: MealCreate, request: Request
) -> dict[str, object]:
    """Create a meal for a date."""
    container: AppContainer = request.app.state.container
    meal = container.meal_service.create_meal(
        user_id, payload.day.isoformat(), payload.name
    )
    return serialize_meal(meal)


@router.get("/{user_id}/meals/{meal_id}")
async def get_meal(user_id: int, meal_id: int, request: Request) -> dict[str, object]:
    """Return a meal with item lines and totals."""
    container: AppContainer = request.app.state.container
    detail = container.meal_service.get_meal_detail(user_id, meal_id)
    return serialize_meal_detail(detail)


@router.delete("/{user_id}/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(user_id: int, meal_id: int, request: Request) -> None:
    """Delete a meal and its items."""
    container: AppContainer = request.app.state.container
    container.meal_service.delete_meal(user_id, meal_id)


@router.post("/{user_id}/meals/{meal_id}/items", status_code=status.HTTP_201_CREATED)
async def add_item(
    user_id: int, meal_id: int, payload: MealItemCreate, request: Request
) -> dict[str, object]:
    """Add a product to a meal."""
    container: AppContainer = request.app.state.container
    item = container.meal_service.add_item(
        user_id,
        meal_id,
        payload.product_id,
        grams=payload.grams,
        units=payload.units,
    )
    return serialize_item(item)


@router.delete("/{user_id}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_item(user_id: int, item_id: int, request: Request) -> None:
    """Remove an item from a meal."""
    container: AppContainer = request.app.state.container
    container.meal_service.remove_item(user_id, item_id)
