"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from food_tracker.adapters.supabase_food_log_repository import (
    SupabaseFoodLogRepository,
)
from food_tracker.adapters.supabase_ingredient_repository import (
    SupabaseIngredientRepository,
)
from food_tracker.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from food_tracker.domain.errors import InvalidRecipe, InvalidUsage
from food_tracker.domain.food_logs import FoodLogEntry, ImageCrop
from food_tracker.domain.recipes import ByGrams, ByPackageCount
from tests.conftest import make_ingredient


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    orders: list[tuple[str, bool]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.orders.append((column, desc))
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _ingredient_row(ingredient_id: int, name: str, **overrides) -> dict[str, object]:
    row: dict[str, object] = {
        "id": ingredient_id,
        "name": name,
        "calories": 165,
        "protein": 31,
        "fat": 3.6,
        "saturated_fat": None,
        "package_size_g": 500,
        "package_price": "5.00",
    }
    row.update(overrides)
    return row


def test_ingredient_repository_lists_with_labels() -> None:
    client = FakeSupabaseClient()
    client.table("ingredients").queue(
        "select", [_ingredient_row(1, "chicken"), _ingredient_row(2, "rice")]
    )
    client.table("ingredient_labels").queue(
        "select",
        [
            {"ingredient_id": 1, "label": "protein"},
            {"ingredient_id": 1, "label": "meat"},
        ],
    )

    chicken, rice = SupabaseIngredientRepository(client).list_ingredients()

    assert chicken.labels == ("protein", "meat")
    assert chicken.nutrients.protein_g == 31
    assert chicken.nutrients.saturated_fat_g == 0
    assert chicken.package_price == 5.0
    assert rice.labels == ()


def test_ingredient_repository_create_writes_labels() -> None:
    client = FakeSupabaseClient()
    client.table("ingredients").queue("insert", [_ingredient_row(7, "tofu")])

    created = SupabaseIngredientRepository(client).create_ingredient(
        make_ingredient(None, "tofu", labels=("vegan",))
    )

    assert created.id == 7
    assert created.labels == ("vegan",)
    payload = client.table("ingredients").last_payload
    assert payload["name"] == "tofu"
    assert payload["protein"] == 31
    assert client.table("ingredient_labels").last_payload == [
        {"ingredient_id": 7, "label": "vegan"}
    ]


def test_ingredient_repository_create_failure_raises() -> None:
    client = FakeSupabaseClient()

    with pytest.raises(RuntimeError):
        SupabaseIngredientRepository(client).create_ingredient(make_ingredient(None))


def test_ingredient_repository_counts_usages() -> None:
    client = FakeSupabaseClient()
    client.table("recipe_ingredients").queue("select", [{"id": 1}, {"id": 2}])

    assert SupabaseIngredientRepository(client).count_usages(3) == 2
    assert client.table("recipe_ingredients").last_filters == [("ingredient_id", 3)]


def test_recipe_repository_reads_usages_in_stored_order() -> None:
    client = FakeSupabaseClient()
    client.table("recipes").queue(
        "select",
        [{"id": 1, "name": "bowl", "servings": 2, "tags": ["quick"]}],
    )
    client.table("recipe_ingredients").queue(
        "select",
        [
            {"recipe_id": 1, "ingredient_id": 4, "package_count": 0.5},
            {"recipe_id": 1, "ingredient_id": 5, "amount_grams": "120"},
        ],
    )

    recipe = SupabaseRecipeRepository(client).get_recipe(1)

    assert recipe is not None
    assert recipe.servings == 2
    assert recipe.tags == ("quick",)
    assert [usage.quantity for usage in recipe.usages] == [
        ByPackageCount(0.5),
        ByGrams(120.0),
    ]
    assert client.table("recipe_ingredients").orders == [("id", False)]


def test_recipe_repository_rejects_bad_rows() -> None:
    client = FakeSupabaseClient()
    client.table("recipes").queue("select", [{"id": 1, "name": "a", "servings": 0}])
    client.table("recipes").queue("select", [{"id": 2, "name": "b"}])
    client.table("recipe_ingredients").queue("select", [])
    client.table("recipe_ingredients").queue(
        "select",
        [{"recipe_id": 2, "ingredient_id": 1, "package_count": 1, "amount_grams": 5}],
    )
    repository = SupabaseRecipeRepository(client)

    with pytest.raises(InvalidRecipe):
        repository.get_recipe(1)
    with pytest.raises(InvalidUsage):
        repository.get_recipe(2)


def test_recipe_repository_missing_recipe() -> None:
    assert SupabaseRecipeRepository(FakeSupabaseClient()).get_recipe(1) is None


def test_food_log_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_logs")
    logged_at = datetime(2024, 5, 1, 12, tzinfo=UTC)
    row = {
        "id": 3,
        "logged_at": logged_at.isoformat(),
        "recipe_id": 1,
        "recipes": {"name": "curry"},
        "image_key": "curry.jpg",
        "rating": 5,
        "notes": None,
        "crop_x": 12.5,
        "crop_y": 20,
        "crop_width": 75,
        "crop_height": 30,
        "crop_rotation": 90,
    }
    write_row = {key: value for key, value in row.items() if key != "recipes"}
    table.queue("insert", [write_row])
    table.queue("select", [row])
    table.queue("select", [row])
    repository = SupabaseFoodLogRepository(client)

    created = repository.create_log(
        FoodLogEntry(
            id=None,
            logged_at=logged_at,
            recipe_id=1,
            crop=ImageCrop(x=12.5, y=20, width=75, height=30, rotation=90),
        )
    )
    listed = repository.list_logs()

    assert table.last_payload["crop_rotation"] == 90
    assert table.last_payload["logged_at"] == logged_at.isoformat()
    assert created.recipe_name == "curry"
    assert created.crop == ImageCrop(x=12.5, y=20, width=75, height=30, rotation=90)
    assert created.notes == ""
    assert listed == [created]
    assert table.orders == [("logged_at", True)]


def test_food_log_repository_detaches_recipe() -> None:
    client = FakeSupabaseClient()

    SupabaseFoodLogRepository(client).detach_recipe(4)

    table = client.table("food_logs")
    assert table.last_payload == {"recipe_id": None}
    assert table.last_filters == [("recipe_id", 4)]


def test_food_log_repository_update_returns_recipe_name() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_logs")
    logged_at = datetime(2024, 5, 2, 19, tzinfo=UTC)
    row = {"id": 8, "logged_at": logged_at.isoformat(), "recipe_id": 2}
    table.queue("update", [row])
    table.queue("select", [{**row, "recipes": {"name": "stew"}}])

    updated = SupabaseFoodLogRepository(client).update_log(
        FoodLogEntry(id=8, logged_at=logged_at, recipe_id=2)
    )

    assert updated.recipe_name == "stew"
    assert table.last_filters == [("id", 8), ("id", 8)]


def test_food_log_repository_write_without_row_raises() -> None:
    client = FakeSupabaseClient()
    entry = FoodLogEntry(id=None, logged_at=datetime(2024, 5, 2, tzinfo=UTC))

    with pytest.raises(RuntimeError):
        SupabaseFoodLogRepository(client).create_log(entry)
