"""FastAPI application entry point."""

import os
import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Add src to path
# main.py is at /app/src/api/main.py
# src is at /app/src, so we go up 2 levels
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.error_handlers import register_error_handlers
from api.routes import auth, health, history
from utils.config import get_settings
from utils.logging import setup_structured_logging

# Fails fast when JWT_SECRET_KEY is missing
settings = get_settings()

setup_structured_logging(settings.log_level)

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Session Core API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup logging."""
    if settings.google_oauth_configured:
        logger.info("Google login enabled", extra={"redirect_uri": settings.google_redirect_uri})
    else:
        logger.warning("GOOGLE_CLIENT_ID/SECRET/REDIRECT_URI not set, /auth/google disabled")

    yield  # App runs here


app = FastAPI(
    title=SERVICE_NAME,
    description="Authentication and session service: password and Google login, bearer tokens",
    version=VERSION,
    lifespan=lifespan,
)

# With bearer tokens in the Authorization header:
# - CORS_ORIGINS="*" requires allow_credentials=False
# - an explicit comma-separated list allows credentials
if settings.cors_origins == "*":
    cors_origins = "*"
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    cors_origins = [origin.strip() for origin in settings.cors_origins.split(",")]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth.router)
app.include_router(history.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 4000))
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False
    )
