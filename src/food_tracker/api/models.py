"""Pydantic models for API payloads."""

from datetime import datetime

from pydantic import BaseModel, Field

from food_tracker.domain.food_logs import FoodLogEntry, ImageCrop
from food_tracker.domain.ingredients import Ingredient
from food_tracker.domain.nutrition import NutrientVector
from food_tracker.domain.recipes import RollupResult


class NutrientsPayload(BaseModel):
    """Nutrient amounts."""

    calories: float = 0.0
    protein_g: float = 0.0
    fat_g: float = 0.0
    saturated_fat_g: float = 0.0
    carbs_g: float = 0.0
    sugar_g: float = 0.0
    fiber_g: float = 0.0
    salt_g: float = 0.0

    @classmethod
    def from_vector(cls, vector: NutrientVector) -> "NutrientsPayload":
        return cls(**vector.as_dict())

    def to_vector(self) -> NutrientVector:
        return NutrientVector(**self.model_dump())


class IngredientPayload(BaseModel):
    """Ingredient create/update body; nutrients are per 100 g."""

    name: str = Field(min_length=1)
    nutrients: NutrientsPayload = Field(default_factory=NutrientsPayload)
    package_size_g: float = Field(default=0.0, ge=0)
    package_price: float = Field(default=0.0, ge=0)
    labels: list[str] = Field(default_factory=list)

    def to_domain(self, ingredient_id: int | None = None) -> Ingredient:
        return Ingredient(
            id=ingredient_id,
            name=self.name,
            nutrients=self.nutrients.to_vector(),
            package_size_g=self.package_size_g,
            package_price=self.package_price,
            labels=tuple(self.labels),
        )


class IngredientResponse(IngredientPayload):
    """Stored ingredient."""

    id: int

    @classmethod
    def from_domain(cls, ingredient: Ingredient) -> "IngredientResponse":
        return cls(
            id=ingredient.id,
            name=ingredient.name,
            nutrients=NutrientsPayload.from_vector(ingredient.nutrients),
            package_size_g=ingredient.package_size_g,
            package_price=ingredient.package_price,
            labels=list(ingredient.labels),
        )


class LabelPayload(BaseModel):
    """Label to attach to an ingredient."""

    label: str


class ImportPayload(BaseModel):
    """Tab-separated ingredient rows."""

    text: str


class ContributionResponse(BaseModel):
    """Per-usage rollup line."""

    usage_index: int
    ingredient_id: int
    ingredient_name: str
    grams: float
    nutrients: NutrientsPayload
    cost: float


class RollupResponse(BaseModel):
    """Recipe nutrition and cost."""

    recipe_id: int
    total_nutrients: NutrientsPayload
    total_cost: float
    per_serving_nutrients: NutrientsPayload
    per_serving_cost: float
    usage_count: int
    contributions: list[ContributionResponse]

    @classmethod
    def from_domain(cls, recipe_id: int, result: RollupResult) -> "RollupResponse":
        return cls(
            recipe_id=recipe_id,
            total_nutrients=NutrientsPayload.from_vector(result.total_nutrients),
            total_cost=result.total_cost,
            per_serving_nutrients=NutrientsPayload.from_vector(
                result.per_serving_nutrients
            ),
            per_serving_cost=result.per_serving_cost,
            usage_count=result.usage_count,
            contributions=[
                ContributionResponse(
                    usage_index=item.usage_index,
                    ingredient_id=item.ingredient_id,
                    ingredient_name=item.ingredient_name,
                    grams=item.grams,
                    nutrients=NutrientsPayload.from_vector(item.nutrients),
                    cost=item.cost,
                )
                for item in result.contributions
            ],
        )


class CropPayload(BaseModel):
    """Crop rectangle in percentages; validated by the service."""

    x: float = 10.0
    y: float = 20.0
    width: float = 80.0
    height: float = 32.0
    rotation: int = 0


class FoodLogPayload(BaseModel):
    """Food log create/update body."""

    logged_at: datetime
    recipe_id: int | None = None
    image_key: str | None = None
    rating: int | None = None
    notes: str = ""
    crop: CropPayload = Field(default_factory=CropPayload)

    def to_domain(self, log_id: int | None = None) -> FoodLogEntry:
        return FoodLogEntry(
            id=log_id,
            logged_at=self.logged_at,
            recipe_id=self.recipe_id,
            image_key=self.image_key,
            rating=self.rating,
            notes=self.notes,
            crop=ImageCrop(**self.crop.model_dump()),
        )


class FoodLogResponse(FoodLogPayload):
    """Stored food log entry."""

    id: int
    recipe_name: str | None = None
    image_url: str | None = None

    @classmethod
    def from_domain(
        cls, entry: FoodLogEntry, image_url: str | None
    ) -> "FoodLogResponse":
        return cls(
            id=entry.id,
            logged_at=entry.logged_at,
            recipe_id=entry.recipe_id,
            recipe_name=entry.recipe_name,
            image_key=entry.image_key,
            image_url=image_url,
            rating=entry.rating,
            notes=entry.notes,
            crop=CropPayload(
                x=entry.crop.x,
                y=entry.crop.y,
                width=entry.crop.width,
                height=entry.crop.height,
                rotation=entry.crop.rotation,
            ),
        )
