"""Dependency container wiring for the application."""

from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from dosha_diet.adapters.json_food_repository import (
    JsonFileFoodCatalogRepository,
    StaticFoodCatalogRepository,
)
from dosha_diet.adapters.supabase_food_repository import (
    SupabaseFoodCatalogRepository,
)
from dosha_diet.config import Settings
from dosha_diet.services.catalog import CatalogService, FoodCatalogRepository
from dosha_diet.services.planner import PlanService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_service: CatalogService
    plan_service: PlanService


def build_catalog_repository(settings: Settings) -> FoodCatalogRepository:
    """Pick the catalog source the settings point at."""
    if settings.uses_supabase:
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseFoodCatalogRepository(client, table=settings.catalog_table)
    if settings.catalog_path:
        return JsonFileFoodCatalogRepository(Path(settings.catalog_path))
    return StaticFoodCatalogRepository([])


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    catalog_service = CatalogService(
        repository=build_catalog_repository(resolved_settings),
        ttl_seconds=resolved_settings.catalog_ttl_seconds,
    )
    plan_service = PlanService(
        catalog=catalog_service,
        default_dosha=resolved_settings.default_dosha,
        debug=resolved_settings.debug,
    )
    return AppContainer(
        settings=resolved_settings,
        catalog_service=catalog_service,
        plan_service=plan_service,
    )
