"""Redis score store - native sorted sets."""
import logging
from typing import List

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from ..exceptions import StorageError

logger = logging.getLogger(__name__)


class RedisScoreStore:
    """ScoreStore backed by a Redis server.

    Maps directly onto ZADD, ZREVRANGEBYSCORE and ZREMRANGEBYSCORE, each of
    which Redis executes atomically.
    """

    def __init__(self, url: str, timeout: float = 5.0, client=None):
        self.url = url
        self.client = client if client is not None else aioredis.from_url(
            url,
            decode_responses=True,
            socket_timeout=timeout,
            socket_connect_timeout=timeout,
        )

    async def init(self) -> None:
        pass

    async def add(self, key: str, member: str, score: float) -> None:
        try:
            await self.client.zadd(key, {member: score})
        except RedisError as e:
            raise StorageError("add", key, str(e)) from e

    async def range_by_score_desc(self, key: str, min_score: float) -> List[str]:
        try:
            return list(await self.client.zrevrangebyscore(key, "+inf", min_score))
        except RedisError as e:
            raise StorageError("range", key, str(e)) from e

    async def remove_by_score(self, key: str, max_score: float) -> int:
        try:
            return int(await self.client.zremrangebyscore(key, "-inf", max_score))
        except RedisError as e:
            raise StorageError("remove", key, str(e)) from e

    async def ping(self) -> bool:
        try:
            return bool(await self.client.ping())
        except RedisError as e:
            logger.warning(f"Score store ping failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.aclose()
