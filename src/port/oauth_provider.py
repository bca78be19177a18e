"""OAuth provider port — outbound interface to a federated identity provider."""

from typing import Protocol

from domain.model.identity import ProviderProfile


class OAuthProvider(Protocol):
    """Port for the authorization code flow.

    Implementations raise FederationExchangeError / FederationProfileError
    and never touch identity storage.
    """

    name: str

    async def exchange_code(self, code: str) -> str:
        """Exchange an authorization code for a provider access token."""
        ...

    async def fetch_profile(self, access_token: str) -> ProviderProfile:
        """Fetch the profile of the user the access token belongs to."""
        ...
