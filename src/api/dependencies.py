"""FastAPI dependency providers.

Repositories and the token service are process-wide singletons; tests
swap them through app.dependency_overrides.
"""

from functools import lru_cache

from fastapi import Depends, HTTPException

from adapter.external.google_oauth import GoogleOAuthAdapter
from adapter.memory.history_repository import InMemoryHistoryRepository
from adapter.memory.identity_repository import InMemoryIdentityRepository
from port.history_repository import HistoryRepository
from port.identity_repository import IdentityRepository
from port.oauth_provider import OAuthProvider
from services.token_service import TokenService
from utils.config import Settings, get_settings


@lru_cache(maxsize=1)
def get_identity_repo() -> IdentityRepository:
    return InMemoryIdentityRepository()


@lru_cache(maxsize=1)
def get_history_repo() -> HistoryRepository:
    return InMemoryHistoryRepository()


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(settings.jwt_secret_key, ttl=settings.token_ttl)


def get_oauth_provider(settings: Settings = Depends(get_settings)) -> OAuthProvider:
    """Build the Google adapter, raising 503 if OAuth is not configured."""
    if not settings.google_oauth_configured:
        raise HTTPException(status_code=503, detail="Google login is not configured")
    return GoogleOAuthAdapter(
        client_id=settings.google_client_id,
        client_secret=settings.google_client_secret,
        redirect_uri=settings.google_redirect_uri,
        timeout=settings.oauth_timeout_seconds,
    )
