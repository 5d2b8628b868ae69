# weathercal/settings.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # API keys
    api_key: str = ""
    openrouter_api_key: str = ""
    serp_api_key: str = ""

    # LLM config
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_model: str = "gpt-4o-mini"
    openrouter_temperature: float = 0.0

    # External API base URLs
    openmeteo_geocode_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    openmeteo_forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    serpapi_search_url: str = "https://serpapi.com/search.json"

    # Widget
    script_name: str = "Weather Cal"
    place: str = "San Francisco"
    widget_locale: str = ""
    agenda_file: Optional[Path] = None
    cache_dir: Path = Path.home() / ".cache" / "weathercal"
    cache_minutes: int = 30
    layout_columns: int = 3
    remote_storage: bool = False

    frontend_cors_origin: str = "*"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("layout_columns")
    @classmethod
    def _two_or_three_columns(cls, v: int) -> int:
        if v not in (2, 3):
            raise ValueError("layout_columns must be 2 or 3")
        return v


settings = Settings()
