"""Food catalog loading, caching and browsing."""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Protocol, TypeVar

from dosha_diet.domain.foods import (
    DoshaTag,
    Energy,
    FoodCategory,
    FoodItem,
    MacroProfile,
    Quality,
    Season,
    Taste,
)

_logger = logging.getLogger(__name__)

_EnumT = TypeVar("_EnumT", bound=StrEnum)

_DOSHA_ALIASES = {
    "vata": DoshaTag.VATA,
    "pitta": DoshaTag.PITTA,
    "kapha": DoshaTag.KAPHA,
    "balancing": DoshaTag.BALANCING,
    "tridoshic": DoshaTag.BALANCING,
    "tridosha": DoshaTag.BALANCING,
}

# Legacy identifier prefixes from the original seed data.
_PREFIX_CATEGORIES = {
    "D": FoodCategory.VEGETABLE,
    "E": FoodCategory.FRUIT,
    "K": FoodCategory.DAIRY,
    "L": FoodCategory.PROTEIN,
}
_SWEETENER_PREFIX = "I"


class CatalogError(RuntimeError):
    """Raised when a catalog source cannot be read."""


class FoodCatalogRepository(Protocol):
    """Read-only source of raw catalog rows."""

    def list_foods(self) -> list[dict[str, object]]:
        """Return every catalog row."""


def _split_tags(raw: object) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        chunks: Iterable[object] = raw.split(",")
    elif isinstance(raw, Iterable):
        chunks = raw
    else:
        chunks = [raw]
    return [str(chunk).strip().lower() for chunk in chunks if str(chunk).strip()]


def _parse_enum_tags(raw: object, enum_type: type[_EnumT]) -> tuple[_EnumT, ...]:
    values: list[_EnumT] = []
    for tag in _split_tags(raw):
        try:
            value = enum_type(tag)
        except ValueError:
            continue
        if value not in values:
            values.append(value)
    return tuple(values)


def _first(row: Mapping[str, object], *keys: str) -> object | None:
    for key in keys:
        value = row.get(key)
        if value is not None and value != "":
            return value
    return None


def _number(row: Mapping[str, object], *keys: str) -> float:
    value = _first(row, *keys)
    if value is None:
        return 0.0
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"{keys[0]} is not a finite number: {value!r}")
    return max(number, 0.0)


def _parse_dosha_tags(raw: object) -> frozenset[DoshaTag]:
    return frozenset(
        _DOSHA_ALIASES[tag] for tag in _split_tags(raw) if tag in _DOSHA_ALIASES
    )


def infer_category(name: str, food_id: str | None, notes: str | None) -> FoodCategory:
    """Guess a category for legacy rows that carry no explicit type."""
    lowered = name.lower()
    notes_lowered = (notes or "").lower()
    prefix = (food_id or "")[:1].upper()
    if any(word in lowered for word in ("rice", "wheat", "millet")):
        return FoodCategory.GRAIN
    if any(word in lowered for word in ("dal", "bean", "lentil")):
        return FoodCategory.LEGUME
    if "vegetable" in notes_lowered or prefix == "D":
        return FoodCategory.VEGETABLE
    if "fruit" in notes_lowered or prefix == "E":
        return FoodCategory.FRUIT
    if "nut" in lowered or "seed" in lowered:
        return FoodCategory.NUT
    return _PREFIX_CATEGORIES.get(prefix, FoodCategory.OTHER)


def parse_food_row(row: Mapping[str, object]) -> FoodItem:
    """Convert a raw catalog row into a FoodItem."""
    name = str(row.get("name") or "").strip()
    if not name:
        raise ValueError("Food row has no name")
    raw_id = _first(row, "food_id", "id", "_id")
    food_id = str(raw_id) if raw_id is not None else None
    notes = row.get("notes")

    raw_type = _first(row, "type", "category")
    if raw_type is None:
        legacy_notes = notes if isinstance(notes, str) else None
        category = infer_category(name, food_id, legacy_notes)
    else:
        try:
            category = FoodCategory(str(raw_type).strip().lower())
        except ValueError:
            category = FoodCategory.OTHER

    raw_energy = str(_first(row, "energy", "virya") or "").strip().lower()
    energy = Energy(raw_energy) if raw_energy in {e.value for e in Energy} else None

    is_sweetener = category == FoodCategory.SWEETENER or (
        food_id is not None and food_id[:1].upper() == _SWEETENER_PREFIX
    )

    return FoodItem(
        id=food_id,
        name=name,
        macros=MacroProfile(
            calories=_number(row, "calories_100g", "calories_per_100g", "calories"),
            protein_g=_number(row, "protein_100g", "protein"),
            fat_g=_number(row, "fat_100g", "fat"),
            carbs_g=_number(row, "carbs_100g", "carbs"),
        ),
        category=category,
        dosha_tags=_parse_dosha_tags(_first(row, "dosha_impact", "dosha_tags")),
        tastes=_parse_enum_tags(_first(row, "tastes", "rasa"), Taste),
        qualities=_parse_enum_tags(_first(row, "qualities", "gunas"), Quality),
        energy=energy,
        seasons=frozenset(_parse_enum_tags(row.get("season"), Season)),
        is_sweetener=is_sweetener,
    )


def parse_catalog(rows: Iterable[Mapping[str, object]]) -> tuple[FoodItem, ...]:
    """Parse rows, skipping malformed ones."""
    foods = []
    for index, row in enumerate(rows):
        try:
            foods.append(parse_food_row(row))
        except (TypeError, ValueError) as exc:
            _logger.warning("Skipping catalog row %s: %s", index, exc)
    return tuple(foods)


@dataclass
class CatalogService:
    """Parses catalog rows once and reuses them until the TTL expires."""

    repository: FoodCatalogRepository
    ttl_seconds: int = 300
    _foods: tuple[FoodItem, ...] | None = field(default=None, init=False, repr=False)
    _expires_at: datetime | None = field(default=None, init=False, repr=False)

    def list_foods(self) -> tuple[FoodItem, ...]:
        """Return the parsed catalog, reloading it when stale."""
        now = datetime.now(tz=UTC)
        if (
            self._foods is not None
            and self._expires_at is not None
            and now < self._expires_at
        ):
            return self._foods
        foods = parse_catalog(self.repository.list_foods())
        self._foods = foods
        self._expires_at = now + timedelta(seconds=self.ttl_seconds)
        _logger.info("Loaded food catalog: %s foods", len(foods))
        return foods

    def invalidate(self) -> None:
        """Forget the cached catalog."""
        self._foods = None
        self._expires_at = None

    def search(  # noqa: PLR0913
        self,
        dosha: str | None = None,
        season: str | None = None,
        category: str | None = None,
        query: str | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> list[FoodItem]:
        """Filter the catalog by tag, category and name, then paginate."""
        foods: Iterable[FoodItem] = self.list_foods()
        if dosha:
            tags = _parse_dosha_tags(dosha)
            foods = [food for food in foods if tags & food.dosha_tags]
        if season:
            wanted = season.strip().lower()
            foods = [
                food for food in foods if wanted in {s.value for s in food.seasons}
            ]
        if category:
            wanted = category.strip().lower()
            foods = [food for food in foods if food.category.value == wanted]
        if query:
            needle = query.strip().lower()
            foods = [food for food in foods if needle in food.name.lower()]
        start = max(page - 1, 0) * limit
        return list(foods)[start : start + limit]
