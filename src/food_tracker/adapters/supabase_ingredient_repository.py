"""Supabase implementation for ingredients and labels."""

from dataclasses import dataclass

from supabase import Client

from food_tracker.domain.ingredients import Ingredient
from food_tracker.domain.nutrition import NutrientVector
from food_tracker.services.ingredients import IngredientRepository

# Row column -> NutrientVector field.
_NUTRIENT_COLUMNS = {
    "calories": "calories",
    "protein": "protein_g",
    "fat": "fat_g",
    "saturated_fat": "saturated_fat_g",
    "carbs": "carbs_g",
    "sugar": "sugar_g",
    "fiber": "fiber_g",
    "salt": "salt_g",
}


@dataclass
class SupabaseIngredientRepository(IngredientRepository):
    """Supabase-backed repository for ingredients."""

    client: Client

    def list_ingredients(self) -> list[Ingredient]:
        """Return all ingredients with labels."""
        response = self.client.table("ingredients").select("*").order("name").execute()
        rows = response.data or []
        labels = self._labels_by_ingredient()
        return [_parse_ingredient(row, labels.get(int(row["id"]), [])) for row in rows]

    def get_ingredient(self, ingredient_id: int) -> Ingredient | None:
        """Return an ingredient by id, if present."""
        response = (
            self.client.table("ingredients")
            .select("*")
            .eq("id", ingredient_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_ingredient(response.data[0], self._labels_for(ingredient_id))

    def get_by_name(self, name: str) -> Ingredient | None:
        """Return an ingredient by its unique name, if present."""
        response = (
            self.client.table("ingredients")
            .select("*")
            .eq("name", name)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return _parse_ingredient(row, self._labels_for(int(row["id"])))

    def create_ingredient(self, ingredient: Ingredient) -> Ingredient:
        """Insert an ingredient with its labels and return it with its id."""
        response = (
            self.client.table("ingredients")
            .insert(_ingredient_payload(ingredient))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create ingredient")
        row = response.data[0]
        ingredient_id = int(row["id"])
        self._insert_labels(ingredient_id, list(ingredient.labels))
        return _parse_ingredient(row, list(ingredient.labels))

    def update_ingredient(self, ingredient: Ingredient) -> Ingredient:
        """Replace an ingredient's fields and labels."""
        if ingredient.id is None:
            raise RuntimeError("Cannot update an ingredient without an id")
        response = (
            self.client.table("ingredients")
            .update(_ingredient_payload(ingredient))
            .eq("id", ingredient.id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update ingredient")
        self.replace_labels(ingredient.id, list(ingredient.labels))
        return _parse_ingredient(response.data[0], list(ingredient.labels))

    def delete_ingredient(self, ingredient_id: int) -> None:
        """Delete an ingredient; labels cascade in the database."""
        self.client.table("ingredients").delete().eq("id", ingredient_id).execute()

    def replace_labels(self, ingredient_id: int, labels: list[str]) -> None:
        """Replace the label set of an ingredient."""
        self.client.table("ingredient_labels").delete().eq(
            "ingredient_id", ingredient_id
        ).execute()
        self._insert_labels(ingredient_id, labels)

    def count_usages(self, ingredient_id: int) -> int:
        """Return how many recipe usages reference an ingredient."""
        response = (
            self.client.table("recipe_ingredients")
            .select("id")
            .eq("ingredient_id", ingredient_id)
            .execute()
        )
        return len(response.data or [])

    def _insert_labels(self, ingredient_id: int, labels: list[str]) -> None:
        if not labels:
            return
        self.client.table("ingredient_labels").insert(
            [{"ingredient_id": ingredient_id, "label": label} for label in labels]
        ).execute()

    def _labels_for(self, ingredient_id: int) -> list[str]:
        response = (
            self.client.table("ingredient_labels")
            .select("label")
            .eq("ingredient_id", ingredient_id)
            .order("id")
            .execute()
        )
        return [str(row["label"]) for row in response.data or []]

    def _labels_by_ingredient(self) -> dict[int, list[str]]:
        response = (
            self.client.table("ingredient_labels")
            .select("ingredient_id, label")
            .order("id")
            .execute()
        )
        labels: dict[int, list[str]] = {}
        for row in response.data or []:
            labels.setdefault(int(row["ingredient_id"]), []).append(str(row["label"]))
        return labels


def _ingredient_payload(ingredient: Ingredient) -> dict[str, object]:
    payload: dict[str, object] = {
        "name": ingredient.name,
        "package_size_g": ingredient.package_size_g,
        "package_price": ingredient.package_price,
    }
    for column, field_name in _NUTRIENT_COLUMNS.items():
        payload[column] = getattr(ingredient.nutrients, field_name)
    return payload


def _parse_ingredient(row: dict[str, object], labels: list[str]) -> Ingredient:
    """Parse an ingredient row into a domain model."""
    nutrients = NutrientVector(
        **{
            field_name: float(row.get(column) or 0.0)
            for column, field_name in _NUTRIENT_COLUMNS.items()
        }
    )
    return Ingredient(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        nutrients=nutrients,
        package_size_g=float(row.get("package_size_g") or 0.0),
        package_price=float(row.get("package_price") or 0.0),
        labels=tuple(labels),
    )
