"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from food_tracker.services.ingredients import SortColumn

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    environment: str = _ENVIRONMENT
    debug: bool = False
    food_image_base_path: str = "/api/food-image"
    default_ingredient_sort: SortColumn = SortColumn.NAME

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_label_filter(raw: str | None) -> list[str]:
    """Parse a comma-separated label filter, keeping label case."""
    if raw is None:
        return []
    labels: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if value and value not in labels:
            labels.append(value)
    return labels
