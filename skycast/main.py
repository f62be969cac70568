"""FastAPI application setup for SkyCast."""

from fastapi import FastAPI

from .api import router as api_router
from .config import settings
from utils.logging_utils import setup_logging

# No-op when run_server.py has already configured logging.
setup_logging(level=settings.log_level, job_name="skycast_api", quiet_loggers=("urllib3", "redis"))

app = FastAPI(title="SkyCast")

# API routes
app.include_router(api_router, prefix="/v1")
