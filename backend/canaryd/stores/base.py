"""Port interface for score stores.

A score store keeps one sorted set per key: members are text, ordered by a
numeric score. The repository depends only on this protocol, not on a
concrete backend.
"""
from typing import List, Protocol, runtime_checkable


@runtime_checkable
class ScoreStore(Protocol):
    """Sorted-set operations the measurement repository relies on.

    Each call must be atomic on its own. Implementations raise
    ``StorageError`` for backend failures.
    """

    async def init(self) -> None:
        """Prepare the backend (create tables, etc.)."""
        ...

    async def add(self, key: str, member: str, score: float) -> None:
        """Insert member under key with score, or update the score of an existing member."""
        ...

    async def range_by_score_desc(self, key: str, min_score: float) -> List[str]:
        """Members of key with score >= min_score, highest score first."""
        ...

    async def remove_by_score(self, key: str, max_score: float) -> int:
        """Delete members of key with score <= max_score. Returns the number removed."""
        ...

    async def ping(self) -> bool:
        """Check that the backend is reachable."""
        ...

    async def close(self) -> None:
        """Release connections."""
        ...
