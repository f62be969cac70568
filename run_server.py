import os

import uvicorn

from skycast.config import settings
from utils.logging_utils import get_tagged_logger, mask_url_secrets, setup_logging

logger = get_tagged_logger(__name__, tag="server")


def log_startup_config() -> None:
    """Log the settings that shape upstream calls, with secrets masked."""
    if not settings.openweather_api_key:
        logger.warning("SKYCAST_OPENWEATHER_API_KEY is not set; weather queries will fail with a configuration error")
    if not settings.google_geocoding_api_key:
        logger.info("Secondary geocoder disabled (SKYCAST_GOOGLE_GEOCODING_API_KEY not set)")
    logger.info(f"OpenWeatherMap base URL: {settings.openweather_base_url}")
    if settings.saved_search_redis_url:
        logger.info(f"Saved searches Redis URL: {mask_url_secrets(settings.saved_search_redis_url)}")
    if not settings.scene_enabled:
        logger.info("Scene generation disabled (SKYCAST_SCENE_ENABLED=false)")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="skycast_api", quiet_loggers=("urllib3", "redis"), override_existing=True)
    log_startup_config()

    uvicorn.run(
        "skycast.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=False,
    )
