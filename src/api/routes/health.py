"""Health check endpoint."""

from datetime import datetime, timezone
from fastapi import APIRouter, Depends

from api.dependencies import get_identity_repo
from port.identity_repository import IdentityRepository
from utils.config import Settings, get_settings

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health(
    repo: IdentityRepository = Depends(get_identity_repo),
    settings: Settings = Depends(get_settings),
):
    """Health check endpoint with dependency status."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {
            "identity_store": {
                "status": "healthy",
                "identities": repo.count(),
            },
            "google_oauth": {
                "status": "configured" if settings.google_oauth_configured else "not_configured",
            },
        },
    }
