"""History service — per-user conversion history records.

The user id comes from an already-verified session; this module never
looks at credentials or tokens.
"""

from domain.model.errors import NotFoundError, ValidationError
from domain.model.history import HistoryEntry
from port.history_repository import HistoryRepository


def list_history(repo: HistoryRepository, user_id: int) -> list[HistoryEntry]:
    return repo.list_entries(user_id)


def add_history(
    repo: HistoryRepository,
    user_id: int,
    from_currency: str | None,
    to_currency: str | None,
    amount: float | None,
    result: float | None,
) -> HistoryEntry:
    """Append a record to the user's history.

    Raises:
        ValidationError: a field is missing (amount/result may be 0)
    """
    if not from_currency or not to_currency or amount is None or result is None:
        raise ValidationError("Missing required fields")
    return repo.append(user_id, from_currency, to_currency, amount, result)


def delete_history(repo: HistoryRepository, user_id: int, entry_id: int) -> None:
    """Delete a record from the user's history.

    Raises:
        NotFoundError: no such record in this user's history
    """
    if not repo.delete(user_id, entry_id):
        raise NotFoundError("History entry not found")
