"""Supabase implementation for food logs."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from food_tracker.domain.food_logs import FoodLogEntry, ImageCrop
from food_tracker.services.food_logs import FoodLogRepository

_SELECT = "*, recipes(name)"


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase-backed repository for food log entries."""

    client: Client

    def list_logs(self) -> list[FoodLogEntry]:
        """Return all entries, newest first."""
        response = (
            self.client.table("food_logs")
            .select(_SELECT)
            .order("logged_at", desc=True)
            .execute()
        )
        return [_parse_log(row) for row in response.data or []]

    def get_log(self, log_id: int) -> FoodLogEntry | None:
        """Return an entry by id, if present."""
        response = (
            self.client.table("food_logs")
            .select(_SELECT)
            .eq("id", log_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_log(response.data[0])

    def create_log(self, entry: FoodLogEntry) -> FoodLogEntry:
        """Insert an entry and return it with its id."""
        response = self.client.table("food_logs").insert(_log_payload(entry)).execute()
        if not response.data:
            raise RuntimeError("Failed to create food log")
        return self._reload(int(response.data[0]["id"]))

    def update_log(self, entry: FoodLogEntry) -> FoodLogEntry:
        """Replace a stored entry."""
        response = (
            self.client.table("food_logs")
            .update(_log_payload(entry))
            .eq("id", entry.id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update food log")
        return self._reload(int(response.data[0]["id"]))

    def delete_log(self, log_id: int) -> None:
        """Delete an entry."""
        self.client.table("food_logs").delete().eq("id", log_id).execute()

    def detach_recipe(self, recipe_id: int) -> None:
        """Clear the recipe reference of entries pointing at a recipe."""
        self.client.table("food_logs").update({"recipe_id": None}).eq(
            "recipe_id", recipe_id
        ).execute()

    def _reload(self, log_id: int) -> FoodLogEntry:
        # Write responses carry no recipes(name) join.
        entry = self.get_log(log_id)
        if entry is None:
            raise RuntimeError(f"Food log {log_id} vanished after write")
        return entry


def _log_payload(entry: FoodLogEntry) -> dict[str, object]:
    return {
        "recipe_id": entry.recipe_id,
        "image_key": entry.image_key,
        "logged_at": entry.logged_at.isoformat(),
        "rating": entry.rating,
        "notes": entry.notes,
        "crop_x": entry.crop.x,
        "crop_y": entry.crop.y,
        "crop_width": entry.crop.width,
        "crop_height": entry.crop.height,
        "crop_rotation": entry.crop.rotation,
    }


def _parse_log(row: dict[str, object]) -> FoodLogEntry:
    """Parse a food log row into a domain model."""
    recipe = row.get("recipes")
    recipe_name = recipe.get("name") if isinstance(recipe, dict) else None
    recipe_id = row.get("recipe_id")
    rating = row.get("rating")
    return FoodLogEntry(
        id=int(row["id"]),
        logged_at=datetime.fromisoformat(str(row["logged_at"])),
        recipe_id=int(recipe_id) if recipe_id is not None else None,
        recipe_name=recipe_name,
        image_key=row.get("image_key"),
        rating=int(rating) if rating is not None else None,
        notes=str(row.get("notes") or ""),
        crop=ImageCrop(
            x=float(row.get("crop_x", 0.0)),
            y=float(row.get("crop_y", 0.0)),
            width=float(row.get("crop_width", 100.0)),
            height=float(row.get("crop_height", 100.0)),
            rotation=int(row.get("crop_rotation") or 0),
        ),
    )
