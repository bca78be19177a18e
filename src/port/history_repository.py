from typing import Protocol

from domain.model.history import HistoryEntry


class HistoryRepository(Protocol):
    """Protocol for per-user conversion history partitions."""
    def list_entries(self, user_id: int) -> list[HistoryEntry]:
        """Return the user's entries in insertion order (empty if none)."""
        ...

    def append(
        self, user_id: int, from_currency: str, to_currency: str, amount: float, result: float,
    ) -> HistoryEntry:
        ...

    def delete(self, user_id: int, entry_id: int) -> bool:
        """Delete an entry from the user's partition. Return False if absent."""
        ...
