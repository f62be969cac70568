"""Application configuration pulled from environment variables via pydantic."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the SkyCast service.

    The OpenWeatherMap key is optional here so the service can boot without
    it; the aggregation pipeline reports a configuration failure per query
    when it is missing.
    """
    model_config = SettingsConfigDict(env_prefix="SKYCAST_", extra="ignore")

    openweather_api_key: str | None = None
    google_geocoding_api_key: str | None = None
    openweather_base_url: str = "https://api.openweathermap.org"
    google_geocoding_url: str = "https://maps.googleapis.com/maps/api/geocode/json"
    request_timeout_seconds: float = 10.0
    forecast_days: int = 5
    hourly_preview_count: int = 8
    saved_search_redis_url: str | None = None
    saved_search_prefix: str = "saved_search:"
    scene_enabled: bool = True
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "phi4-mini"
    ollama_timeout_seconds: float = 60.0
    log_level: str = "INFO"

    @field_validator("openweather_base_url", "google_geocoding_url", "ollama_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @field_validator("openweather_api_key", "google_geocoding_api_key", mode="after")
    @classmethod
    def blank_key_is_missing(cls, v: str | None) -> str | None:
        """Treat empty or whitespace-only keys as not configured."""
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("forecast_days", mode="after")
    @classmethod
    def clamp_forecast_days(cls, v: int) -> int:
        """The 3-hour forecast endpoint covers at most five calendar days."""
        return max(1, min(int(v), 5))


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4, exclude={'openweather_api_key', 'google_geocoding_api_key'})}")
