from dataclasses import dataclass


@dataclass(frozen=True)
class HistoryEntry:
    """A single currency conversion record owned by one user."""
    id: int
    from_currency: str
    to_currency: str
    amount: float
    result: float
