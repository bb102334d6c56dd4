"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from pet_food_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from pet_food_tracker.config import Settings
from pet_food_tracker.services.food import FoodService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_service: FoodService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_service = FoodService(
        repository=SupabaseFoodRepository(supabase_client),
        low_stock_threshold_days=resolved_settings.low_stock_threshold_days,
        finished_entries_retained=resolved_settings.finished_entries_retained,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        food_service=food_service,
        close_resources=close_resources,
    )
