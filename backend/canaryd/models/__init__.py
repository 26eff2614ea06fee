"""Database models."""
from .score_entry import ScoreEntry

__all__ = ["ScoreEntry"]
