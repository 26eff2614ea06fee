"""ScoreEntry model - one member of a per-check sorted set."""
from sqlalchemy import Column, Integer, Float, String, Text, Index, UniqueConstraint

from ..database import Base


class ScoreEntry(Base):
    """A sorted-set member stored under a key with its score."""

    __tablename__ = "score_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String, nullable=False)  # measurements:<check_id>
    member = Column(Text, nullable=False)  # Serialized measurement JSON
    score = Column(Float, nullable=False)  # Measurement timestamp (epoch seconds)

    __table_args__ = (
        # Same member under the same key only updates its score
        UniqueConstraint("key", "member", name="uq_score_entries_key_member"),
        Index("ix_score_entries_key_score", "key", "score"),
    )
