"""Auth service — registration and password login business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that api.error_handlers maps to HTTP status codes.
"""

import logging

import bcrypt

from domain.model.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from domain.model.identity import PROVIDER_PASSWORD, Identity, Profile
from port.identity_repository import IdentityRepository

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72

INVALID_CREDENTIALS = "Invalid username or password"


def _hash_password(password: str, rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


def _require_credentials(username: str | None, password: str | None) -> None:
    if not username or not password:
        raise ValidationError("Missing required fields")


def register(
    repo: IdentityRepository,
    username: str | None,
    password: str | None,
    profile: Profile | None = None,
    rounds: int = BCRYPT_ROUNDS,
) -> Identity:
    """Register a new password identity.

    Returns the created Identity.

    Raises:
        ValidationError: username or password missing/empty, or password too long
        ConflictError: username already taken (exact, case-sensitive match)
    """
    _require_credentials(username, password)
    if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")

    if repo.find_by_username(username):
        raise ConflictError("Username already exists")

    profile = profile or Profile()
    identity = repo.insert(
        username=username,
        credential_secret=_hash_password(password, rounds),
        display_name=profile.name or None,
        avatar_url=profile.avatar_url or None,
        provider=PROVIDER_PASSWORD,
    )
    # Lost a race against a concurrent registration of the same username
    if identity is None:
        raise ConflictError("Username already exists")

    logger.info("Identity registered", extra={"userId": identity.id, "username": username})
    return identity


def login(repo: IdentityRepository, username: str | None, password: str | None) -> Identity:
    """Authenticate a user by username and password.

    Unknown usernames, wrong passwords and OAuth-only identities all fail
    with the same message.

    Raises:
        ValidationError: username or password missing/empty
        AuthenticationError: invalid credentials
    """
    _require_credentials(username, password)
    # bcrypt refuses to check longer passwords, and none can have been stored
    if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise AuthenticationError(INVALID_CREDENTIALS, reason="wrong_password")

    identity = repo.find_by_username(username)
    if identity is None:
        raise AuthenticationError(INVALID_CREDENTIALS, reason="unknown_username")
    if identity.credential_secret is None:
        raise AuthenticationError(INVALID_CREDENTIALS, reason="no_password")
    if not _verify_password(password, identity.credential_secret):
        raise AuthenticationError(INVALID_CREDENTIALS, reason="wrong_password")

    logger.info("Identity logged in", extra={"userId": identity.id})
    return identity


def get_identity(repo: IdentityRepository, user_id: int) -> Identity:
    """Return the identity with ``user_id``.

    Raises:
        NotFoundError: no such identity
    """
    identity = repo.find_by_id(user_id)
    if identity is None:
        raise NotFoundError("User not found")
    return identity
