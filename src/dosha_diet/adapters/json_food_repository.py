"""Local JSON file catalog source."""

import json
from dataclasses import dataclass
from pathlib import Path

from dosha_diet.services.catalog import CatalogError, FoodCatalogRepository


@dataclass
class JsonFileFoodCatalogRepository(FoodCatalogRepository):
    """Reads a list of food objects, or ``{"foods": [...]}``, from disk."""

    path: Path

    def list_foods(self) -> list[dict[str, object]]:
        """Return the rows stored in the file."""
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise CatalogError(f"Failed to read food catalog {self.path}") from exc
        if isinstance(payload, dict):
            payload = payload.get("foods", [])
        if not isinstance(payload, list):
            raise CatalogError(f"Food catalog {self.path} is not a list of foods")
        return [row for row in payload if isinstance(row, dict)]


@dataclass
class StaticFoodCatalogRepository(FoodCatalogRepository):
    """Serves rows held in memory."""

    rows: list[dict[str, object]]

    def list_foods(self) -> list[dict[str, object]]:
        """Return a copy of the rows."""
        return list(self.rows)
