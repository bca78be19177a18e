"""Google OAuth 2.0 adapter.

Implements OAuthProvider for the authorization code flow against Google.
Client id, client secret and redirect URI come from server configuration
only; redirect_uri must match the value used by the front-end when it
requested the code, otherwise Google answers with ``redirect_uri_mismatch``.

API Documentation: https://developers.google.com/identity/protocols/oauth2/web-server
"""

import logging
from typing import Any

import httpx

from domain.model.errors import FederationExchangeError, FederationProfileError
from domain.model.identity import ProviderProfile

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
DEFAULT_TIMEOUT_SECONDS = 10.0


class GoogleOAuthAdapter:
    """Adapter that exchanges codes and fetches profiles from Google.

    A single call per step, bounded by ``timeout``. Failures are terminal
    for the login attempt; nothing is retried.
    """

    name = "google"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def exchange_code(self, code: str) -> str:
        form = {
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "grant_type": "authorization_code",
        }
        try:
            async with self._client() as client:
                response = await client.post(
                    GOOGLE_TOKEN_URL, data=form, headers={"Accept": "application/json"},
                )
        except httpx.RequestError as e:
            logger.warning(
                "Google token exchange request error",
                extra={"error_type": type(e).__name__},
            )
            raise FederationExchangeError("Google token exchange failed") from e

        payload = _json_or_empty(response)
        if response.is_error or "error" in payload:
            # Google reports redirect_uri_mismatch / invalid_grant here
            logger.warning(
                "Google token exchange rejected",
                extra={
                    "status_code": response.status_code,
                    "provider_error": payload.get("error"),
                    "provider_error_description": payload.get("error_description"),
                },
            )
            raise FederationExchangeError("Google token exchange failed")

        access_token = payload.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            logger.warning("Google token response has no access_token")
            raise FederationExchangeError("Google token exchange failed")
        return access_token

    async def fetch_profile(self, access_token: str) -> ProviderProfile:
        try:
            async with self._client() as client:
                response = await client.get(
                    GOOGLE_USERINFO_URL,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
        except httpx.RequestError as e:
            logger.warning(
                "Google profile request error",
                extra={"error_type": type(e).__name__},
            )
            raise FederationProfileError("Google profile fetch failed") from e

        if response.is_error:
            logger.warning(
                "Google profile request rejected",
                extra={"status_code": response.status_code},
            )
            raise FederationProfileError("Google profile fetch failed")

        return parse_profile(_json_or_empty(response))


def parse_profile(data: dict[str, Any]) -> ProviderProfile:
    """Build a ProviderProfile from a userinfo payload.

    Raises:
        FederationProfileError: email is missing or explicitly unverified
    """
    email = data.get("email")
    if not isinstance(email, str) or not email:
        raise FederationProfileError("Google profile has no email")
    # openid userinfo uses email_verified, the legacy v2 endpoint verified_email
    verified = data.get("email_verified", data.get("verified_email", True))
    if verified is False or verified == "false":
        raise FederationProfileError("Google email is not verified")
    return ProviderProfile(
        email=email,
        name=data.get("name") or None,
        picture=data.get("picture") or None,
    )


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
