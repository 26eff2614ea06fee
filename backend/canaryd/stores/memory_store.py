"""In-memory score store.

Keeps every sorted set in a dict. Suitable for tests and single-process
deployments where persistence is not required.
"""
from typing import Dict, List


class InMemoryScoreStore:
    """In-memory implementation of ScoreStore.

    No operation awaits while touching the data, so each call is atomic
    with respect to the event loop.
    """

    def __init__(self) -> None:
        self._sets: Dict[str, Dict[str, float]] = {}

    async def init(self) -> None:
        pass

    async def add(self, key: str, member: str, score: float) -> None:
        self._sets.setdefault(key, {})[member] = float(score)

    async def range_by_score_desc(self, key: str, min_score: float) -> List[str]:
        members = self._sets.get(key, {})
        # Equal scores are ordered by member, reversed, like Redis ZREVRANGEBYSCORE
        ordered = sorted(members.items(), key=lambda item: (item[1], item[0]), reverse=True)
        return [member for member, score in ordered if score >= min_score]

    async def remove_by_score(self, key: str, max_score: float) -> int:
        members = self._sets.get(key)
        if not members:
            return 0
        doomed = [member for member, score in members.items() if score <= max_score]
        for member in doomed:
            del members[member]
        if not members:
            del self._sets[key]
        return len(doomed)

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        pass
