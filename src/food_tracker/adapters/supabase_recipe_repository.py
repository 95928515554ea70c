"""Supabase implementation for recipes."""

from dataclasses import dataclass

from supabase import Client

from food_tracker.domain.recipes import Recipe
from food_tracker.services.recipes import RecipeRepository
from food_tracker.services.units import usage_from_row


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed repository for recipes and their usages."""

    client: Client

    def list_recipes(self) -> list[Recipe]:
        """Return all recipes with usages."""
        response = self.client.table("recipes").select("*").order("name").execute()
        rows = response.data or []
        usages = self._usage_rows()
        return [_parse_recipe(row, usages.get(int(row["id"]), [])) for row in rows]

    def get_recipe(self, recipe_id: int) -> Recipe | None:
        """Return a recipe with its ordered usages, if present."""
        response = (
            self.client.table("recipes")
            .select("*")
            .eq("id", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        usage_response = (
            self.client.table("recipe_ingredients")
            .select("*")
            .eq("recipe_id", recipe_id)
            .order("id")
            .execute()
        )
        return _parse_recipe(response.data[0], usage_response.data or [])

    def delete_recipe(self, recipe_id: int) -> None:
        """Delete a recipe; usages cascade in the database."""
        self.client.table("recipes").delete().eq("id", recipe_id).execute()

    def _usage_rows(self) -> dict[int, list[dict[str, object]]]:
        response = (
            self.client.table("recipe_ingredients")
            .select("*")
            .order("recipe_id")
            .order("id")
            .execute()
        )
        grouped: dict[int, list[dict[str, object]]] = {}
        for row in response.data or []:
            grouped.setdefault(int(row["recipe_id"]), []).append(row)
        return grouped


def _parse_recipe(
    row: dict[str, object], usage_rows: list[dict[str, object]]
) -> Recipe:
    """Parse a recipe row and its usage rows into a domain model."""
    return Recipe(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        servings=int(row.get("servings", 1)),
        meal_type=str(row.get("meal_type") or ""),
        description=str(row.get("description") or ""),
        prep_time_minutes=int(row.get("prep_time_minutes") or 0),
        cook_time_minutes=int(row.get("cook_time_minutes") or 0),
        tags=tuple(str(tag) for tag in row.get("tags") or []),
        instructions=tuple(str(step) for step in row.get("instructions") or []),
        usages=tuple(usage_from_row(usage) for usage in usage_rows),
    )
