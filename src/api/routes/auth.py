"""Authentication routes (register, login, Google login, current user)."""

from fastapi import APIRouter, Depends

from api.dependencies import get_identity_repo, get_oauth_provider, get_token_service
from api.models import (
    AuthResponse,
    GoogleAuthRequest,
    LoginRequest,
    MeResponse,
    RegisterRequest,
    SuccessResponse,
    UserSummary,
)
from api.security import get_current_identity
from domain.model.identity import Identity
from port.identity_repository import IdentityRepository
from port.oauth_provider import OAuthProvider
from services import auth_service, federation_service
from services.token_service import TokenService
from utils.config import Settings, get_settings

router = APIRouter(tags=["auth"])


# bcrypt is CPU-bound, so the password routes run in the threadpool
@router.post("/register", response_model=SuccessResponse)
def register(
    request: RegisterRequest,
    repo: IdentityRepository = Depends(get_identity_repo),
    settings: Settings = Depends(get_settings),
):
    """Register a password identity.

    Raises:
        400 if username/password is missing, 409 if the username is taken
    """
    profile = request.profile.to_domain() if request.profile else None
    auth_service.register(
        repo,
        request.username,
        request.password,
        profile,
        rounds=settings.bcrypt_rounds,
    )
    return SuccessResponse()


@router.post("/login", response_model=AuthResponse)
def login(
    request: LoginRequest,
    repo: IdentityRepository = Depends(get_identity_repo),
    token_service: TokenService = Depends(get_token_service),
):
    """Login with username and password and return a session token.

    Raises:
        400 if a field is missing, 401 if the credentials are invalid
    """
    identity = auth_service.login(repo, request.username, request.password)
    token = token_service.issue(identity)
    return AuthResponse(token=token, user=UserSummary.from_identity(identity))


@router.post("/auth/google", response_model=AuthResponse)
async def google_login(
    request: GoogleAuthRequest,
    provider: OAuthProvider = Depends(get_oauth_provider),
    repo: IdentityRepository = Depends(get_identity_repo),
    token_service: TokenService = Depends(get_token_service),
):
    """Exchange a Google authorization code for a session token.

    Raises:
        400 if code is missing, 500 if talking to Google fails,
        503 if Google login is not configured
    """
    result = await federation_service.federate(provider, repo, token_service, request.code)
    return AuthResponse(token=result.token, user=UserSummary.from_identity(result.identity))


@router.get("/auth/me", response_model=MeResponse)
@router.get("/mypage", response_model=MeResponse, include_in_schema=False)
async def get_me(identity: Identity = Depends(get_current_identity)):
    """Get the current user's profile.

    Raises:
        401 if not authenticated, 404 if the identity no longer exists
    """
    return MeResponse.from_identity(identity)
