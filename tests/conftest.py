"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from dosha_diet.adapters.json_food_repository import StaticFoodCatalogRepository
from dosha_diet.config import Settings
from dosha_diet.containers import AppContainer
from dosha_diet.domain.foods import FoodItem
from dosha_diet.domain.profiles import Profile
from dosha_diet.services.catalog import (
    CatalogError,
    CatalogService,
    FoodCatalogRepository,
    parse_catalog,
)
from dosha_diet.services.planner import PlanService

CATALOG_ROWS: list[dict[str, object]] = [
    {
        "food_id": "f_035",
        "name": "Moong Dal",
        "dosha_impact": "Vata,Pitta,Kapha,Balancing",
        "tastes": "sweet, astringent",
        "qualities": "light, dry",
        "energy": "cooling",
        "season": "all",
        "calories_100g": 326,
        "carbs_100g": 52.59,
        "protein_100g": 23.88,
        "fat_100g": 1.35,
        "type": "legume",
    },
    {
        "food_id": "f_016",
        "name": "Basmati Rice",
        "dosha_impact": "Vata,Pitta,Kapha",
        "tastes": "sweet",
        "qualities": "heavy, unctuous",
        "energy": "cooling",
        "season": "all",
        "calories_100g": 356,
        "carbs_100g": 78.24,
        "protein_100g": 7.94,
        "fat_100g": 0.52,
        "type": "grain",
    },
    {
        "food_id": "d_091",
        "name": "Bottle Gourd",
        "dosha_impact": "Pitta",
        "tastes": "sweet",
        "qualities": "light, unctuous",
        "energy": "cooling",
        "season": "summer",
        "calories_100g": 14,
        "carbs_100g": 2.53,
        "protein_100g": 0.42,
        "fat_100g": 0.12,
        "type": "vegetable",
    },
    {
        "food_id": "e_171",
        "name": "Banana",
        "dosha_impact": "Vata,Pitta",
        "tastes": "sweet",
        "qualities": "heavy, unctuous",
        "energy": "cooling",
        "season": "all",
        "calories_100g": 111,
        "carbs_100g": 24.95,
        "protein_100g": 1.25,
        "fat_100g": 0.32,
        "type": "fruit",
    },
    {
        "food_id": "f_223",
        "name": "Almond",
        "dosha_impact": "Vata,Pitta",
        "tastes": "sweet",
        "qualities": "heavy, unctuous",
        "energy": "heating",
        "season": "all",
        "calories_100g": 655,
        "carbs_100g": 6.93,
        "protein_100g": 20.80,
        "fat_100g": 58.93,
        "type": "nut",
    },
    {
        "food_id": "k_001",
        "name": "Ghee",
        "dosha_impact": "Balancing",
        "tastes": "sweet",
        "qualities": "heavy, unctuous",
        "energy": "cooling",
        "season": "all",
        "calories_100g": 900,
        "carbs_100g": 0,
        "protein_100g": 0,
        "fat_100g": 100,
        "type": "dairy",
    },
    {
        "food_id": "s_010",
        "name": "Rock Salt",
        "dosha_impact": "Vata",
        "tastes": "salty",
        "energy": "heating",
        "season": "all",
        "calories_100g": 0,
        "type": "spice",
    },
    {
        "food_id": "i_005",
        "name": "Jaggery",
        "tastes": "sweet",
        "energy": "heating",
        "season": "winter",
        "calories_100g": 383,
        "carbs_100g": 98,
        "protein_100g": 0.4,
        "fat_100g": 0.1,
    },
]


@dataclass
class CountingCatalogRepository(FoodCatalogRepository):
    """Catalog source that counts reads."""

    rows: list[dict[str, object]] = field(default_factory=lambda: list(CATALOG_ROWS))
    calls: int = 0

    def list_foods(self) -> list[dict[str, object]]:
        self.calls += 1
        return list(self.rows)


@dataclass
class FailingCatalogRepository(FoodCatalogRepository):
    """Catalog source that is always unavailable."""

    def list_foods(self) -> list[dict[str, object]]:
        raise CatalogError("catalog offline")


@pytest.fixture
def foods() -> tuple[FoodItem, ...]:
    return parse_catalog(CATALOG_ROWS)


@pytest.fixture
def food_by_name(foods: tuple[FoodItem, ...]) -> dict[str, FoodItem]:
    return {food.name: food for food in foods}


@pytest.fixture
def pitta_profile() -> Profile:
    return Profile(
        dosha="Pitta",
        activity_level="moderate",
        weight_kg=75,
        height_cm=175,
        age_years=30,
        sex="M",
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url=None,
        supabase_service_key=None,
        catalog_path=None,
        default_dosha="Vata",
    )


@pytest.fixture
def catalog_service() -> CatalogService:
    return CatalogService(StaticFoodCatalogRepository(list(CATALOG_ROWS)))


@pytest.fixture
def container(settings: Settings, catalog_service: CatalogService) -> AppContainer:
    return AppContainer(
        settings=settings,
        catalog_service=catalog_service,
        plan_service=PlanService(catalog=catalog_service),
    )
