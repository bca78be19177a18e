"""In-memory implementation of OAuthProvider for testing."""

from domain.model.errors import FederationExchangeError, FederationProfileError
from domain.model.identity import ProviderProfile


class FakeOAuthProvider:
    name = "google"

    def __init__(self):
        # code -> access token, access token -> profile
        self.codes: dict[str, str] = {}
        self.profiles: dict[str, ProviderProfile] = {}
        self.calls: list[tuple[str, str]] = []

    def add_user(self, code: str, email: str, name: str | None = None, picture: str | None = None):
        access_token = f"access-{code}"
        self.codes[code] = access_token
        self.profiles[access_token] = ProviderProfile(email=email, name=name, picture=picture)

    async def exchange_code(self, code: str) -> str:
        self.calls.append(("exchange_code", code))
        access_token = self.codes.get(code)
        if access_token is None:
            raise FederationExchangeError("Google token exchange failed")
        return access_token

    async def fetch_profile(self, access_token: str) -> ProviderProfile:
        self.calls.append(("fetch_profile", access_token))
        profile = self.profiles.get(access_token)
        if profile is None:
            raise FederationProfileError("Google profile fetch failed")
        return profile
