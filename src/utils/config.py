"""Environment-driven settings.

JWT_SECRET_KEY is mandatory: load_settings() raises instead of falling
back to a development key. Google OAuth is optional as a whole; the
/auth/google route answers 503 until all three GOOGLE_* values are set.
"""

import os
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    jwt_secret_key: str
    token_ttl: timedelta = timedelta(hours=2)
    bcrypt_rounds: int = 12
    google_client_id: str | None = None
    google_client_secret: str | None = None
    google_redirect_uri: str | None = None
    oauth_timeout_seconds: float = 10.0
    cors_origins: str = "*"
    log_level: str = "INFO"

    @property
    def google_oauth_configured(self) -> bool:
        return bool(self.google_client_id and self.google_client_secret and self.google_redirect_uri)


def _env_number(name: str, default: str, convert):
    raw = os.getenv(name, default)
    try:
        return convert(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def load_settings() -> Settings:
    """Read settings from the environment (and a .env file if present)."""
    load_dotenv()

    secret = os.getenv("JWT_SECRET_KEY")
    if not secret:
        raise ValueError(
            "JWT_SECRET_KEY environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )

    return Settings(
        jwt_secret_key=secret,
        token_ttl=timedelta(minutes=_env_number("JWT_EXPIRATION_MINUTES", "120", int)),
        bcrypt_rounds=_env_number("BCRYPT_ROUNDS", "12", int),
        google_client_id=os.getenv("GOOGLE_CLIENT_ID") or None,
        google_client_secret=os.getenv("GOOGLE_CLIENT_SECRET") or None,
        google_redirect_uri=os.getenv("GOOGLE_REDIRECT_URI") or None,
        oauth_timeout_seconds=_env_number("OAUTH_TIMEOUT_SECONDS", "10", float),
        cors_origins=os.getenv("CORS_ORIGINS", "*"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
