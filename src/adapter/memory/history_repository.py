"""In-memory implementation of HistoryRepository."""

import itertools
import threading
from collections import defaultdict

from domain.model.history import HistoryEntry


class InMemoryHistoryRepository:
    def __init__(self):
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._partitions: defaultdict[int, list[HistoryEntry]] = defaultdict(list)

    def list_entries(self, user_id: int) -> list[HistoryEntry]:
        with self._lock:
            return list(self._partitions.get(user_id, []))

    def append(
        self, user_id: int, from_currency: str, to_currency: str, amount: float, result: float,
    ) -> HistoryEntry:
        with self._lock:
            entry = HistoryEntry(
                id=next(self._ids),
                from_currency=from_currency,
                to_currency=to_currency,
                amount=amount,
                result=result,
            )
            self._partitions[user_id].append(entry)
            return entry

    def delete(self, user_id: int, entry_id: int) -> bool:
        with self._lock:
            entries = self._partitions.get(user_id)
            if not entries:
                return False
            for index, entry in enumerate(entries):
                if entry.id == entry_id:
                    del entries[index]
                    return True
            return False
