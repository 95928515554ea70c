"""Domain errors for ingredients, recipes, and food logs."""


class FoodTrackerError(ValueError):
    """Base class for input errors raised by the domain and services."""

    kind = "FoodTrackerError"


class InvalidUsage(FoodTrackerError):
    """A recipe usage has a malformed or negative quantity."""

    kind = "InvalidUsage"

    def __init__(self, message: str, usage_index: int | None = None) -> None:
        super().__init__(message)
        self.usage_index = usage_index


class UnknownIngredient(FoodTrackerError):
    """A recipe usage references an ingredient that does not exist."""

    kind = "UnknownIngredient"

    def __init__(self, ingredient_id: int, usage_index: int | None = None) -> None:
        super().__init__(f"Unknown ingredient {ingredient_id}")
        self.ingredient_id = ingredient_id
        self.usage_index = usage_index


class InvalidIngredient(FoodTrackerError):
    """An ingredient cannot be used for costing (zero package size)."""

    kind = "InvalidIngredient"

    def __init__(self, message: str, usage_index: int | None = None) -> None:
        super().__init__(message)
        self.usage_index = usage_index


class DuplicateLabel(FoodTrackerError):
    """The ingredient already carries the label."""

    kind = "DuplicateLabel"


class InvalidLabel(FoodTrackerError):
    """The label is empty."""

    kind = "InvalidLabel"


class InvalidCrop(FoodTrackerError):
    """A crop rectangle falls outside the image."""

    kind = "InvalidCrop"


class InvalidRating(FoodTrackerError):
    """A food log rating is outside 1-5."""

    kind = "InvalidRating"


class InvalidRecipe(FoodTrackerError):
    """A recipe violates its invariants (servings < 1)."""

    kind = "InvalidRecipe"


class IngredientInUse(FoodTrackerError):
    """An ingredient cannot be deleted while recipes reference it."""

    kind = "IngredientInUse"


class NotFound(FoodTrackerError):
    """A requested record does not exist."""

    kind = "NotFound"


class DuplicateIngredient(FoodTrackerError):
    """An ingredient with the same name already exists."""

    kind = "DuplicateIngredient"
