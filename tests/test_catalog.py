"""Tests for catalog parsing and the catalog service."""

import json
import logging
from datetime import date

import pytest

from dosha_diet.adapters.json_food_repository import JsonFileFoodCatalogRepository
from dosha_diet.domain.foods import (
    DoshaTag,
    Energy,
    FoodCategory,
    Quality,
    Season,
    Taste,
)
from dosha_diet.services.catalog import (
    CatalogError,
    CatalogService,
    infer_category,
    parse_catalog,
    parse_food_row,
)
from dosha_diet.services.planner import PlanService
from tests.conftest import CATALOG_ROWS, CountingCatalogRepository


def test_parse_food_row_converts_tags() -> None:
    food = parse_food_row(CATALOG_ROWS[0])

    assert food.id == "f_035"
    assert food.category is FoodCategory.LEGUME
    assert food.dosha_tags == {
        DoshaTag.VATA,
        DoshaTag.PITTA,
        DoshaTag.KAPHA,
        DoshaTag.BALANCING,
    }
    assert food.tastes == (Taste.SWEET, Taste.ASTRINGENT)
    assert food.qualities == (Quality.LIGHT, Quality.DRY)
    assert food.energy is Energy.COOLING
    assert food.seasons == {Season.ALL}
    assert food.macros.protein_g == 23.88


def test_parse_food_row_accepts_lists_and_cleans_values() -> None:
    food = parse_food_row(
        {
            "id": 7,
            "name": " Amla ",
            "dosha_tags": ["Tridoshic"],
            "rasa": ["Sour", "sour", "umami"],
            "virya": "Cooling",
            "season": "autumn, winter",
            "calories": -3,
            "type": "Fruit",
        }
    )

    assert food.id == "7"
    assert food.name == "Amla"
    assert food.dosha_tags == {DoshaTag.BALANCING}
    assert food.tastes == (Taste.SOUR,)
    assert food.energy is Energy.COOLING
    assert food.seasons == {Season.AUTUMN, Season.WINTER}
    assert food.macros.calories == 0
    assert food.category is FoodCategory.FRUIT


def test_legacy_sweetener_prefix() -> None:
    food = parse_food_row(CATALOG_ROWS[-1])

    assert food.is_sweetener
    assert food.category is FoodCategory.OTHER


@pytest.mark.parametrize(
    ("name", "food_id", "notes", "expected"),
    [
        ("Red Rice", None, None, FoodCategory.GRAIN),
        ("Toor Dal", None, None, FoodCategory.LEGUME),
        ("Okra", "d_010", None, FoodCategory.VEGETABLE),
        ("Okra", None, "Green vegetable", FoodCategory.VEGETABLE),
        ("Mango", "e_002", None, FoodCategory.FRUIT),
        ("Sesame Seed", None, None, FoodCategory.NUT),
        ("Paneer", "k_004", None, FoodCategory.DAIRY),
        ("Egg", "L_001", None, FoodCategory.PROTEIN),
        ("Hing", "x_1", None, FoodCategory.OTHER),
    ],
)
def test_infer_category(
    name: str, food_id: str | None, notes: str | None, expected: FoodCategory
) -> None:
    assert infer_category(name, food_id, notes) is expected


def test_parse_catalog_skips_malformed_rows(caplog, monkeypatch) -> None:
    monkeypatch.setattr(logging.getLogger("dosha_diet"), "propagate", True)
    foods = parse_catalog(
        [
            {"name": ""},
            {"name": "Rice", "calories_100g": "lots"},
            {"name": "Milk", "type": "dairy", "calories_100g": "61"},
        ]
    )

    assert [food.name for food in foods] == ["Milk"]
    assert foods[0].macros.calories == 61
    assert "Skipping catalog row" in caplog.text


@pytest.mark.parametrize("calories", ["nan", float("nan"), float("inf"), "-Infinity"])
def test_parse_catalog_skips_non_finite_numbers(calories: object) -> None:
    foods = parse_catalog(
        [
            {"name": "Odd Rice", "type": "grain", "calories_100g": calories},
            {"name": "Milk", "type": "dairy", "calories_100g": 61},
        ]
    )

    assert [food.name for food in foods] == ["Milk"]


@pytest.mark.parametrize("literal", ["NaN", "Infinity"])
def test_non_finite_json_rows_do_not_break_plans(
    tmp_path, pitta_profile, literal: str
) -> None:
    path = tmp_path / "foods.json"
    path.write_text(
        '[{"name": "Odd Rice", "type": "grain", "calories_100g": %s}, '
        '{"name": "Milk", "type": "dairy", "calories_100g": 61}]' % literal,
        encoding="utf-8",
    )
    catalog = CatalogService(JsonFileFoodCatalogRepository(path))

    plan = PlanService(catalog=catalog).generate(
        pitta_profile, target_calories=2000, today=date(2024, 7, 1)
    )

    assert [food.name for food in catalog.list_foods()] == ["Milk"]
    names = {item.name for meal in plan.meals for item in meal.items}
    assert names == {"Milk"}


def test_catalog_service_caches_until_invalidated() -> None:
    repository = CountingCatalogRepository()
    service = CatalogService(repository)

    first = service.list_foods()
    second = service.list_foods()
    service.invalidate()
    service.list_foods()

    assert first is second
    assert len(first) == len(CATALOG_ROWS)
    assert repository.calls == 2


def test_catalog_service_reloads_when_ttl_expired() -> None:
    repository = CountingCatalogRepository()
    service = CatalogService(repository, ttl_seconds=0)

    service.list_foods()
    service.list_foods()

    assert repository.calls == 2


def test_search_filters(catalog_service: CatalogService) -> None:
    def names(**kwargs) -> list[str]:
        return [food.name for food in catalog_service.search(**kwargs)]

    assert names(dosha="Balancing") == ["Moong Dal", "Ghee"]
    assert names(season="summer") == ["Bottle Gourd"]
    assert names(category="nut") == ["Almond"]
    assert names(query="RICE") == ["Basmati Rice"]
    assert names(dosha="Vata", category="fruit") == ["Banana"]
    assert names(page=2, limit=3) == ["Banana", "Almond", "Ghee"]


def test_json_repository_reads_list_and_wrapped(tmp_path) -> None:
    list_path = tmp_path / "foods.json"
    list_path.write_text(json.dumps(CATALOG_ROWS[:2]), encoding="utf-8")
    wrapped_path = tmp_path / "wrapped.json"
    wrapped_path.write_text(json.dumps({"foods": CATALOG_ROWS[:3]}), encoding="utf-8")

    assert len(JsonFileFoodCatalogRepository(list_path).list_foods()) == 2
    assert len(JsonFileFoodCatalogRepository(wrapped_path).list_foods()) == 3


def test_json_repository_errors(tmp_path) -> None:
    with pytest.raises(CatalogError):
        JsonFileFoodCatalogRepository(tmp_path / "missing.json").list_foods()

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError):
        JsonFileFoodCatalogRepository(broken).list_foods()

    scalar = tmp_path / "scalar.json"
    scalar.write_text("42", encoding="utf-8")
    with pytest.raises(CatalogError):
        JsonFileFoodCatalogRepository(scalar).list_foods()
