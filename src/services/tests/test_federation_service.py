"""Tests for federation_service — OAuth login and identity reconciliation."""

import unittest

from adapter.fake.oauth_provider import FakeOAuthProvider
from adapter.memory.identity_repository import InMemoryIdentityRepository
from domain.model.errors import (
    FederationError,
    FederationExchangeError,
    FederationProfileError,
    ValidationError,
)
from domain.model.identity import ProviderProfile
from services import auth_service, federation_service
from services.token_service import TokenService


class TestFederate(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.provider = FakeOAuthProvider()
        self.repo = InMemoryIdentityRepository()
        self.tokens = TokenService("secret")
        self.provider.add_user("code-1", "dana@example.com", name="Dana", picture="https://img/d.png")

    async def test_first_login_creates_identity(self):
        result = await federation_service.federate(self.provider, self.repo, self.tokens, "code-1")

        identity = result.identity
        self.assertEqual(identity.username, "dana@example.com")
        self.assertIsNone(identity.credential_secret)
        self.assertEqual(identity.display_name, "Dana")
        self.assertEqual(identity.avatar_url, "https://img/d.png")
        self.assertEqual(identity.provider, "google")
        self.assertEqual(self.tokens.verify(result.token).user_id, identity.id)

    async def test_repeat_login_is_idempotent(self):
        self.provider.add_user("code-2", "dana@example.com", name="Dana Renamed", picture=None)

        first = await federation_service.federate(self.provider, self.repo, self.tokens, "code-1")
        second = await federation_service.federate(self.provider, self.repo, self.tokens, "code-2")

        self.assertEqual(self.tokens.verify(first.token).user_id, self.tokens.verify(second.token).user_id)
        self.assertEqual(self.repo.count(), 1)
        # existing identity reused unchanged
        self.assertEqual(second.identity.display_name, "Dana")

    async def test_reuses_password_identity_with_same_username(self):
        existing = auth_service.register(self.repo, "dana@example.com", "pw", rounds=4)

        result = await federation_service.federate(self.provider, self.repo, self.tokens, "code-1")

        self.assertEqual(result.identity.id, existing.id)
        self.assertEqual(result.identity.credential_secret, existing.credential_secret)
        self.assertIsNone(result.identity.display_name)
        self.assertEqual(self.repo.count(), 1)

    async def test_missing_code_rejected_before_any_call(self):
        for code in (None, ""):
            with self.assertRaises(ValidationError):
                await federation_service.federate(self.provider, self.repo, self.tokens, code)
        self.assertEqual(self.provider.calls, [])

    async def test_exchange_failure_creates_nothing(self):
        with self.assertRaises(FederationExchangeError) as ctx:
            await federation_service.federate(self.provider, self.repo, self.tokens, "bad-code")

        self.assertIsInstance(ctx.exception, FederationError)
        self.assertEqual(self.repo.count(), 0)
        self.assertEqual(self.provider.calls, [("exchange_code", "bad-code")])

    async def test_profile_failure_creates_nothing(self):
        self.provider.codes["code-3"] = "orphan-access-token"

        with self.assertRaises(FederationProfileError):
            await federation_service.federate(self.provider, self.repo, self.tokens, "code-3")

        self.assertEqual(self.repo.count(), 0)


class TestReconcileIdentity(unittest.TestCase):

    def test_lost_insert_race_returns_stored_identity(self):
        repo = InMemoryIdentityRepository()
        stored = repo.insert("eve@example.com", None, "Eve", None, "google")

        class RacingRepo:
            """First lookup misses, as if another request inserted in between."""
            def __init__(self):
                self.lookups = 0

            def find_by_username(self, username):
                self.lookups += 1
                return None if self.lookups == 1 else repo.find_by_username(username)

            def insert(self, **kwargs):
                return repo.insert(**kwargs)

        identity = federation_service.reconcile_identity(
            RacingRepo(), ProviderProfile(email="eve@example.com", name="Other"), "google",
        )

        self.assertEqual(identity, stored)
        self.assertEqual(repo.count(), 1)


if __name__ == '__main__':
    unittest.main()
