"""canaryd - health-check measurement collector."""

__version__ = "1.0.0"
