"""Allow running with ``python -m canaryd``."""
from .main import run

run()
