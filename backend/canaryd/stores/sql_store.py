"""SQL score store - sorted sets emulated on one SQLAlchemy table."""
import logging
from typing import List

from sqlalchemy import delete, select, text
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError

from ..database import create_engine, create_session_factory, init_db
from ..exceptions import StorageError
from ..models import ScoreEntry

logger = logging.getLogger(__name__)


class SQLScoreStore:
    """ScoreStore backed by SQLite or PostgreSQL.

    Every operation is a single statement committed in its own transaction:
    - add: INSERT ... ON CONFLICT (key, member) DO UPDATE SET score
    - range_by_score_desc: SELECT ... ORDER BY score DESC, member DESC
    - remove_by_score: DELETE ... WHERE score <= max
    """

    def __init__(self, url: str, timeout: float = 30):
        self.url = url
        self.engine = create_engine(url, timeout=timeout)
        self.session_factory = create_session_factory(self.engine)

    async def init(self) -> None:
        try:
            await init_db(self.engine)
        except SQLAlchemyError as e:
            raise StorageError("init", "score_entries", str(e)) from e

    def _insert(self):
        if self.engine.dialect.name == "postgresql":
            return pg_insert(ScoreEntry)
        return sqlite_insert(ScoreEntry)

    async def add(self, key: str, member: str, score: float) -> None:
        stmt = self._insert().values(key=key, member=member, score=float(score))
        stmt = stmt.on_conflict_do_update(
            index_elements=["key", "member"],
            set_={"score": stmt.excluded.score},
        )
        try:
            async with self.session_factory() as session:
                await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError("add", key, str(e)) from e

    async def range_by_score_desc(self, key: str, min_score: float) -> List[str]:
        query = (
            select(ScoreEntry.member)
            .where(ScoreEntry.key == key, ScoreEntry.score >= min_score)
            .order_by(ScoreEntry.score.desc(), ScoreEntry.member.desc())
        )
        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise StorageError("range", key, str(e)) from e

    async def remove_by_score(self, key: str, max_score: float) -> int:
        stmt = delete(ScoreEntry).where(ScoreEntry.key == key, ScoreEntry.score <= max_score)
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount or 0
        except SQLAlchemyError as e:
            raise StorageError("remove", key, str(e)) from e

    async def ping(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Score store ping failed: {e}")
            return False

    async def close(self) -> None:
        await self.engine.dispose()
