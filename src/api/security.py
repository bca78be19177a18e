"""Bearer token security dependencies."""

from typing import Optional
from fastapi import Depends, Header

from api.dependencies import get_identity_repo, get_token_service
from domain.model.identity import Claims, Identity
from port.identity_repository import IdentityRepository
from services import auth_service
from services.authorization import authenticate
from services.token_service import TokenService


def get_current_claims(
    authorization: Optional[str] = Header(None),
    token_service: TokenService = Depends(get_token_service),
) -> Claims:
    """Verify the request's bearer token (required).

    AuthenticationError becomes a uniform 401 in api.error_handlers,
    so the response never says which check failed.
    """
    return authenticate(authorization, token_service)


def get_current_identity(
    claims: Claims = Depends(get_current_claims),
    repo: IdentityRepository = Depends(get_identity_repo),
) -> Identity:
    """Load the full identity for a verified token. Raises 404 if it is gone."""
    return auth_service.get_identity(repo, claims.user_id)
