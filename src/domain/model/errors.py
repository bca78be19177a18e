"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers never catch them individually; api.error_handlers maps
each class to an HTTP status code and the {"message": ...} envelope.
"""

from enum import Enum


class DomainError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Input is missing or malformed."""


class AuthenticationError(DomainError):
    """Credentials or session token were rejected.

    ``reason`` is for diagnostics only and is never sent to the client.
    """

    def __init__(self, message: str = "Unauthorized", reason: str | None = None):
        self.reason = reason
        super().__init__(message)


class ConflictError(DomainError):
    """Entity with the same unique key already exists."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class FederationError(DomainError):
    """Talking to the OAuth identity provider failed."""


class FederationExchangeError(FederationError):
    """Authorization code could not be exchanged for an access token."""


class FederationProfileError(FederationError):
    """Provider profile could not be fetched or is unusable."""


class TokenRejection(str, Enum):
    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"


class TokenError(DomainError):
    """Session token failed verification."""

    def __init__(self, reason: TokenRejection):
        self.reason = reason
        super().__init__(f"Token rejected: {reason.value}")
