"""Supabase implementation of the food catalog source."""

from dataclasses import dataclass

from supabase import Client

from dosha_diet.services.catalog import CatalogError, FoodCatalogRepository


@dataclass
class SupabaseFoodCatalogRepository(FoodCatalogRepository):
    """Reads catalog rows from a Supabase table."""

    client: Client
    table: str = "foods"

    def list_foods(self) -> list[dict[str, object]]:
        """Return every row of the catalog table."""
        try:
            response = self.client.table(self.table).select("*").execute()
        except Exception as exc:
            raise CatalogError(f"Failed to load foods from {self.table}") from exc
        return list(response.data or [])
