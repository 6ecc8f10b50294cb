"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from macro_tracker.adapters.supabase_goal_repository import SupabaseGoalRepository
from macro_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from macro_tracker.adapters.supabase_product_repository import (
    SupabaseProductRepository,
)
from macro_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from macro_tracker.config import Settings
from macro_tracker.services.goals import GoalService
from macro_tracker.services.meals import MealService
from macro_tracker.services.products import ProductService
from macro_tracker.services.reports import ReportService
from macro_tracker.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    product_service: ProductService
    meal_service: MealService
    goal_service: GoalService
    report_service: ReportService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    product_repository = SupabaseProductRepository(supabase_client)
    meal_repository = SupabaseMealRepository(supabase_client)
    goal_repository = SupabaseGoalRepository(supabase_client)
    user_service = UserService(user_repository)
    product_service = ProductService(product_repository)
    meal_service = MealService(
        repository=meal_repository,
        product_service=product_service,
    )
    goal_service = GoalService(
        repository=goal_repository,
        user_service=user_service,
    )
    report_service = ReportService(
        meal_repository=meal_repository,
        product_repository=product_repository,
        goal_repository=goal_repository,
        user_service=user_service,
    )

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        product_service=product_service,
        meal_service=meal_service,
        goal_service=goal_service,
        report_service=report_service,
    )
