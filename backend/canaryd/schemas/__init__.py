"""Pydantic schemas for API request/response models."""
from .measurement import Check, Measurement

__all__ = [
    "Check",
    "Measurement",
]
