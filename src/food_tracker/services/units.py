"""Conversion of recipe usage quantities to grams."""

import math

from food_tracker.domain.errors import InvalidUsage
from food_tracker.domain.ingredients import Ingredient
from food_tracker.domain.recipes import ByGrams, ByPackageCount, RecipeUsage


def resolve_grams(usage: RecipeUsage, ingredient: Ingredient) -> float:
    """Return the absolute grams a usage consumes of ``ingredient``."""
    quantity = usage.quantity
    if isinstance(quantity, ByPackageCount):
        grams = float(quantity.count) * ingredient.package_size_g
    elif isinstance(quantity, ByGrams):
        grams = float(quantity.grams)
    else:
        raise InvalidUsage(f"Unsupported quantity {quantity!r}")
    if not math.isfinite(grams):
        raise InvalidUsage(f"Quantity {quantity!r} does not resolve to a number")
    if grams < 0:
        raise InvalidUsage(f"Quantity {quantity!r} resolves to {grams} g")
    return grams


def usage_from_row(row: dict[str, object]) -> RecipeUsage:
    """Decode a stored usage row with nullable count and grams columns."""
    package_count = row.get("package_count")
    amount_grams = row.get("amount_grams")
    if package_count is not None and amount_grams is not None:
        raise InvalidUsage("Usage sets both package_count and amount_grams")
    if package_count is None and amount_grams is None:
        raise InvalidUsage("Usage sets neither package_count nor amount_grams")
    ingredient_id = int(row["ingredient_id"])
    if package_count is not None:
        return RecipeUsage(ingredient_id, ByPackageCount(_to_float(package_count)))
    return RecipeUsage(ingredient_id, ByGrams(_to_float(amount_grams)))


def usage_to_row(usage: RecipeUsage) -> dict[str, object]:
    """Encode a usage into the nullable-column row shape."""
    quantity = usage.quantity
    return {
        "ingredient_id": usage.ingredient_id,
        "package_count": (
            quantity.count if isinstance(quantity, ByPackageCount) else None
        ),
        "amount_grams": quantity.grams if isinstance(quantity, ByGrams) else None,
    }


def _to_float(value: object) -> float:
    if isinstance(value, bool):
        raise InvalidUsage(f"Invalid quantity {value!r}")
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError as exc:
            raise InvalidUsage(f"Invalid quantity {value!r}") from exc
    raise InvalidUsage(f"Invalid quantity {value!r}")
