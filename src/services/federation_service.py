"""Federation service — OAuth2 login reconciled onto local identities.

One login attempt runs strictly forward:

    code received -> token exchange -> profile fetch
        -> identity lookup-or-create -> session token

Any failure before reconciliation aborts the attempt with no identity
created and no token issued. Identity storage is only touched after both
provider calls have completed.
"""

import logging
from dataclasses import dataclass

from domain.model.errors import ValidationError
from domain.model.identity import Identity, ProviderProfile
from port.identity_repository import IdentityRepository
from port.oauth_provider import OAuthProvider
from services.token_service import TokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FederatedLogin:
    identity: Identity
    token: str


def reconcile_identity(repo: IdentityRepository, profile: ProviderProfile, provider: str) -> Identity:
    """Look up the identity whose username is the provider email, creating it if absent.

    An existing identity is reused unchanged, whether it came from an
    earlier OAuth login or from a password registration that used the
    same email as username.
    """
    identity = repo.find_by_username(profile.email)
    if identity is not None:
        return identity

    identity = repo.insert(
        username=profile.email,
        credential_secret=None,
        display_name=profile.name,
        avatar_url=profile.picture,
        provider=provider,
    )
    if identity is None:
        # A concurrent login for the same email created it first
        identity = repo.find_by_username(profile.email)
    else:
        logger.info(
            "Federated identity created",
            extra={"userId": identity.id, "provider": provider},
        )
    return identity


async def federate(
    provider: OAuthProvider,
    repo: IdentityRepository,
    token_service: TokenService,
    code: str | None,
) -> FederatedLogin:
    """Run one OAuth login attempt for an authorization ``code``.

    Raises:
        ValidationError: code missing/empty
        FederationExchangeError: code could not be exchanged
        FederationProfileError: profile could not be fetched
    """
    if not code:
        raise ValidationError("Missing authorization code")

    access_token = await provider.exchange_code(code)
    profile = await provider.fetch_profile(access_token)

    identity = reconcile_identity(repo, profile, provider.name)
    token = token_service.issue(identity)

    logger.info(
        "Federated login succeeded",
        extra={"userId": identity.id, "provider": provider.name},
    )
    return FederatedLogin(identity=identity, token=token)
