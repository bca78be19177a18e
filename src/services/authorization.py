"""Authorization gate — turn an Authorization header into verified Claims.

Rejection reasons stay internal (logged at debug level); callers surface
a single uniform "unauthorized" outcome to clients.
"""

import logging

from domain.model.errors import AuthenticationError, TokenError
from domain.model.identity import Claims
from services.token_service import TokenService

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"
UNAUTHORIZED = "Unauthorized"

NO_HEADER = "no_header"
BAD_SCHEME = "bad_scheme"
INVALID_TOKEN = "invalid_token"


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from an exact ``"Bearer <token>"`` header value.

    The scheme match is case-sensitive and the header must have exactly
    two space-separated parts.

    Raises:
        AuthenticationError: header missing or not in bearer form
    """
    if not authorization:
        raise AuthenticationError(UNAUTHORIZED, reason=NO_HEADER)

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME or not parts[1]:
        raise AuthenticationError(UNAUTHORIZED, reason=BAD_SCHEME)
    return parts[1]


def current_user(token: str | None, token_service: TokenService) -> int:
    """Return the user id carried by a raw session token.

    Raises:
        AuthenticationError: token missing or rejected
    """
    try:
        return token_service.verify(token).user_id
    except TokenError as e:
        logger.debug("Session token rejected", extra={"reason": e.reason.value})
        raise AuthenticationError(UNAUTHORIZED, reason=INVALID_TOKEN) from e


def authenticate(authorization: str | None, token_service: TokenService) -> Claims:
    """Authorize a request from its Authorization header value.

    Raises:
        AuthenticationError: reason is NO_HEADER, BAD_SCHEME or INVALID_TOKEN
    """
    try:
        token = extract_bearer_token(authorization)
    except AuthenticationError as e:
        logger.debug("Authorization header rejected", extra={"reason": e.reason})
        raise

    try:
        return token_service.verify(token)
    except TokenError as e:
        logger.debug("Session token rejected", extra={"reason": e.reason.value})
        raise AuthenticationError(UNAUTHORIZED, reason=INVALID_TOKEN) from e
