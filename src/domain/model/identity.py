from dataclasses import dataclass, field
from datetime import datetime, timezone


PROVIDER_PASSWORD = 'password'
PROVIDER_GOOGLE = 'google'


@dataclass(frozen=True)
class Profile:
    """Optional profile fields supplied at registration or by the provider."""
    name: str | None = None
    avatar_url: str | None = None


@dataclass(frozen=True)
class Identity:
    """Domain model representing an authenticated account."""
    id: int
    username: str
    credential_secret: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None
    provider: str = PROVIDER_PASSWORD
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class Claims:
    """Verified contents of a session token."""
    user_id: int
    username: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class ProviderProfile:
    """Profile returned by an OAuth identity provider."""
    email: str
    name: str | None = None
    picture: str | None = None
