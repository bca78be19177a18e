"""In-memory implementation of IdentityRepository.

Identities live for the lifetime of the process. A single lock guards
both indexes and the id counter, so concurrent request handlers never
observe a half-inserted identity or assign the same id twice.
"""

import itertools
import threading
from datetime import datetime, timezone

from domain.model.identity import Identity


class InMemoryIdentityRepository:
    def __init__(self):
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._by_username: dict[str, Identity] = {}
        self._by_id: dict[int, Identity] = {}

    # ── write operations ─────────────────────────────────────

    def insert(
        self,
        username: str,
        credential_secret: str | None,
        display_name: str | None,
        avatar_url: str | None,
        provider: str,
    ) -> Identity | None:
        with self._lock:
            if username in self._by_username:
                return None

            identity = Identity(
                id=next(self._ids),
                username=username,
                credential_secret=credential_secret,
                display_name=display_name,
                avatar_url=avatar_url,
                provider=provider,
                created_at=datetime.now(timezone.utc),
            )
            self._by_username[username] = identity
            self._by_id[identity.id] = identity
            return identity

    # ── read operations ──────────────────────────────────────

    def find_by_username(self, username: str) -> Identity | None:
        with self._lock:
            return self._by_username.get(username)

    def find_by_id(self, user_id: int) -> Identity | None:
        with self._lock:
            return self._by_id.get(user_id)

    def count(self) -> int:
        with self._lock:
            return len(self._by_id)
