"""Domain models for food diary entries."""

from dataclasses import dataclass
from datetime import datetime

# Width over height of the food log card image.
CROP_ASPECT_RATIO = 2.5


@dataclass(frozen=True)
class ImageCrop:
    """Visible region of a photo as percentages of the original image.

    ``x`` and ``y`` are the top-left corner, ``width`` and ``height`` the size
    of the region. ``rotation`` is applied before cropping and is one of
    0, 90, 180 or 270 degrees.
    """

    x: float
    y: float
    width: float
    height: float
    rotation: int = 0


@dataclass(frozen=True)
class FoodLogEntry:
    """A logged meal, optionally tied to a recipe and a photo."""

    id: int | None
    logged_at: datetime
    recipe_id: int | None = None
    recipe_name: str | None = None
    image_key: str | None = None
    rating: int | None = None
    notes: str = ""
    crop: ImageCrop = ImageCrop(x=10.0, y=20.0, width=80.0, height=32.0)
