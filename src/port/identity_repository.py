from typing import Protocol

from domain.model.identity import Identity


class IdentityRepository(Protocol):
    """Protocol defining the interface for identity storage."""
    def insert(
        self,
        username: str,
        credential_secret: str | None,
        display_name: str | None,
        avatar_url: str | None,
        provider: str,
    ) -> Identity | None:
        """Create a new identity. Return None if the username is already taken."""
        ...

    def find_by_username(self, username: str) -> Identity | None:
        """Find an identity by exact username. Return None if not found."""
        ...

    def find_by_id(self, user_id: int) -> Identity | None:
        """Find an identity by ID. Return None if not found."""
        ...

    def count(self) -> int:
        """Return the number of stored identities."""
        ...
