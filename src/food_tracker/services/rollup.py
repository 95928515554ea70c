"""Recipe nutrition and cost rollup."""

import logging
from collections.abc import Callable, Iterable

from food_tracker.domain.errors import (
    FoodTrackerError,
    InvalidIngredient,
    InvalidUsage,
    UnknownIngredient,
)
from food_tracker.domain.ingredients import Ingredient
from food_tracker.domain.nutrition import scale, sum_vectors
from food_tracker.domain.recipes import (
    Recipe,
    RecipeUsage,
    RollupResult,
    UsageContribution,
)
from food_tracker.services.units import resolve_grams

IngredientLookup = Callable[[int], Ingredient | None]

_logger = logging.getLogger(__name__)


def rollup(recipe: Recipe, ingredient_lookup: IngredientLookup) -> RollupResult:
    """Sum usage contributions into recipe and per-serving totals.

    Usages are processed in stored order and the first bad usage aborts the
    whole rollup; the raised error carries that usage's index.
    """
    contributions = [
        _contribution(index, usage, recipe.name, ingredient_lookup)
        for index, usage in enumerate(recipe.usages)
    ]
    total_nutrients = sum_vectors(item.nutrients for item in contributions)
    total_cost = sum(item.cost for item in contributions)
    return RollupResult(
        total_nutrients=total_nutrients,
        total_cost=total_cost,
        per_serving_nutrients=scale(total_nutrients, 1 / recipe.servings),
        per_serving_cost=total_cost / recipe.servings,
        usage_count=len(contributions),
        contributions=tuple(contributions),
    )


def rollup_many(
    recipes: Iterable[Recipe], ingredient_lookup: IngredientLookup
) -> list[RollupResult]:
    """Roll up several recipes against the same ingredient snapshot."""
    return [rollup(recipe, ingredient_lookup) for recipe in recipes]


def describe_failure(exc: FoodTrackerError) -> str:
    """Return a short description of a rollup failure for logs."""
    index = getattr(exc, "usage_index", None)
    if index is None:
        return f"{exc.kind}: {exc}"
    return f"{exc.kind} at usage {index}: {exc}"


def _contribution(
    index: int,
    usage: RecipeUsage,
    recipe_name: str,
    ingredient_lookup: IngredientLookup,
) -> UsageContribution:
    ingredient = ingredient_lookup(usage.ingredient_id)
    if ingredient is None:
        raise UnknownIngredient(usage.ingredient_id, usage_index=index)
    try:
        grams = resolve_grams(usage, ingredient)
    except InvalidUsage as exc:
        raise InvalidUsage(str(exc), usage_index=index) from exc
    if ingredient.package_size_g <= 0:
        raise InvalidIngredient(
            f"Ingredient {ingredient.name!r} has package size "
            f"{ingredient.package_size_g} g",
            usage_index=index,
        )
    _logger.debug(
        "Recipe %r usage %s: %s g of %r", recipe_name, index, grams, ingredient.name
    )
    return UsageContribution(
        usage_index=index,
        ingredient_id=usage.ingredient_id,
        ingredient_name=ingredient.name,
        grams=grams,
        nutrients=scale(ingredient.nutrients, grams / 100.0),
        cost=grams / ingredient.package_size_g * ingredient.package_price,
    )
