"""Food log service and photo crop handling."""

import dataclasses
import logging
import math
from dataclasses import dataclass
from typing import Protocol

from food_tracker.domain.errors import InvalidCrop, InvalidRating, NotFound
from food_tracker.domain.food_logs import CROP_ASPECT_RATIO, FoodLogEntry, ImageCrop

ROTATIONS = (0, 90, 180, 270)
MIN_CROP_WIDTH = 20.0
MIN_RATING = 1
MAX_RATING = 5

_logger = logging.getLogger(__name__)


class FoodLogRepository(Protocol):
    """Persistence interface for food log entries."""

    def list_logs(self) -> list[FoodLogEntry]:
        """Return all food log entries."""

    def get_log(self, log_id: int) -> FoodLogEntry | None:
        """Return a food log entry by id, if present."""

    def create_log(self, entry: FoodLogEntry) -> FoodLogEntry:
        """Insert an entry and return it with its id."""

    def update_log(self, entry: FoodLogEntry) -> FoodLogEntry:
        """Replace a stored entry."""

    def delete_log(self, log_id: int) -> None:
        """Delete an entry."""

    def detach_recipe(self, recipe_id: int) -> None:
        """Clear the recipe reference of entries pointing at a recipe."""


def validate_crop(crop: ImageCrop) -> ImageCrop:
    """Return ``crop`` unchanged if it lies inside the image."""
    for name in ("x", "y", "width", "height"):
        value = getattr(crop, name)
        if not math.isfinite(value) or not 0 <= value <= 100:
            raise InvalidCrop(f"Crop {name}={value} is outside 0-100")
    if crop.x + crop.width > 100:
        raise InvalidCrop(f"Crop x+width={crop.x + crop.width} exceeds 100")
    if crop.y + crop.height > 100:
        raise InvalidCrop(f"Crop y+height={crop.y + crop.height} exceeds 100")
    if crop.rotation not in ROTATIONS:
        raise InvalidCrop(f"Crop rotation {crop.rotation} is not a right angle")
    return crop


def validate_rating(rating: int | None) -> int | None:
    """Return ``rating`` if absent or between 1 and 5."""
    if rating is None:
        return None
    if isinstance(rating, bool) or not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidRating(f"Rating must be between 1 and 5, got {rating!r}")
    return rating


def default_crop() -> ImageCrop:
    """Centered crop with the card aspect ratio."""
    return ImageCrop(x=10.0, y=20.0, width=80.0, height=80.0 / CROP_ASPECT_RATIO)


def full_crop() -> ImageCrop:
    """Crop covering the whole image."""
    return ImageCrop(x=0.0, y=0.0, width=100.0, height=100.0)


def rotate_cw(crop: ImageCrop) -> ImageCrop:
    """Rotate the crop 90 degrees clockwise."""
    return dataclasses.replace(crop, rotation=(crop.rotation + 90) % 360)


def rotate_ccw(crop: ImageCrop) -> ImageCrop:
    """Rotate the crop 90 degrees counter-clockwise."""
    return dataclasses.replace(crop, rotation=(crop.rotation + 270) % 360)


def zoom_in(crop: ImageCrop) -> ImageCrop:
    """Shrink the crop by 10% around its center."""
    return _resize(crop, max(crop.width * 0.9, MIN_CROP_WIDTH))


def zoom_out(crop: ImageCrop) -> ImageCrop:
    """Grow the crop by 10% around its center."""
    return _resize(crop, min(crop.width * 1.1, 100.0))


def _resize(crop: ImageCrop, width: float) -> ImageCrop:
    height = width / CROP_ASPECT_RATIO
    x = crop.x + (crop.width - width) / 2
    y = crop.y + (crop.height - height) / 2
    return ImageCrop(
        x=_clamp(x, 0.0, 100.0 - width),
        y=_clamp(y, 0.0, 100.0 - height),
        width=width,
        height=height,
        rotation=crop.rotation,
    )


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


@dataclass
class FoodLogService:
    """Application service for the food diary."""

    repository: FoodLogRepository
    image_base_path: str = "/api/food-image"

    def list_logs(self) -> list[FoodLogEntry]:
        """Return entries newest first."""
        return sorted(
            self.repository.list_logs(), key=lambda entry: entry.logged_at, reverse=True
        )

    def create_log(self, entry: FoodLogEntry) -> FoodLogEntry:
        """Validate and store a new entry."""
        _validate_entry(entry)
        created = self.repository.create_log(entry)
        _logger.info("Created food log %s", created.id)
        return created

    def update_log(self, entry: FoodLogEntry) -> FoodLogEntry:
        """Validate and replace an existing entry."""
        if entry.id is None or self.repository.get_log(entry.id) is None:
            raise NotFound(f"Food log {entry.id} not found")
        _validate_entry(entry)
        return self.repository.update_log(entry)

    def delete_log(self, log_id: int) -> None:
        """Delete an entry."""
        if self.repository.get_log(log_id) is None:
            raise NotFound(f"Food log {log_id} not found")
        self.repository.delete_log(log_id)
        _logger.info("Deleted food log %s", log_id)

    def image_url(self, entry: FoodLogEntry) -> str | None:
        """Return the display URL of the entry's photo, if any."""
        if not entry.image_key:
            return None
        return f"{self.image_base_path.rstrip('/')}/{entry.image_key}"


def _validate_entry(entry: FoodLogEntry) -> None:
    validate_crop(entry.crop)
    validate_rating(entry.rating)
