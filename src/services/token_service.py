"""Token service — issue and verify signed session tokens.

Tokens are stateless HS256 JWTs with payload
``{"sub": str(user_id), "username": ..., "iat": ..., "exp": ...}``
where iat and exp are NumericDates with microsecond precision.
A token is valid iff its signature verifies against the service secret
and ``now < exp``. There is no revocation list.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import JWTError, jwt
from jose.exceptions import JWTClaimsError

from domain.model.errors import TokenError, TokenRejection
from domain.model.identity import Claims, Identity

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
DEFAULT_TOKEN_TTL = timedelta(hours=2)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and verifies session tokens with a single process-wide secret."""

    def __init__(
        self,
        secret: str,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        algorithm: str = JWT_ALGORITHM,
        clock: Clock = _utcnow,
    ):
        if not secret:
            raise ValueError("TokenService requires a non-empty signing secret")
        self._secret = secret
        self.ttl = ttl
        self.algorithm = algorithm
        self._clock = clock

    def issue(self, identity: Identity) -> str:
        """Create a signed token for ``identity`` expiring after ``ttl``."""
        issued_at = self._clock()
        expires_at = issued_at + self.ttl
        payload = {
            "sub": str(identity.id),
            "username": identity.username,
            "iat": _numeric_date(issued_at),
            "exp": _numeric_date(expires_at),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, raw_token: str | None) -> Claims:
        """Verify a token and return its claims.

        Raises:
            TokenError: reason is MALFORMED, BAD_SIGNATURE or EXPIRED
        """
        if not raw_token:
            raise TokenError(TokenRejection.MALFORMED)

        try:
            jwt.get_unverified_claims(raw_token)
        except JWTError:
            raise TokenError(TokenRejection.MALFORMED)

        try:
            # Expiry is checked below against the injected clock
            payload = jwt.decode(
                raw_token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTClaimsError as e:
            logger.debug(f"JWT claims invalid: {e}")
            raise TokenError(TokenRejection.MALFORMED)
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            raise TokenError(TokenRejection.BAD_SIGNATURE)

        claims = _claims_from_payload(payload)
        if self._clock() >= claims.expires_at:
            raise TokenError(TokenRejection.EXPIRED)
        return claims


def _claims_from_payload(payload: dict) -> Claims:
    try:
        user_id = int(payload["sub"])
        username = payload["username"]
        issued_at = payload["iat"]
        expires_at = payload["exp"]
    except (KeyError, TypeError, ValueError):
        raise TokenError(TokenRejection.MALFORMED)

    if not isinstance(username, str):
        raise TokenError(TokenRejection.MALFORMED)
    if not _is_number(issued_at) or not _is_number(expires_at):
        raise TokenError(TokenRejection.MALFORMED)

    return Claims(
        user_id=user_id,
        username=username,
        issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc),
        expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc),
    )


def _numeric_date(moment: datetime) -> float:
    """Seconds since the epoch, kept to microseconds so exp is never rounded down."""
    return round(moment.timestamp(), 6)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
