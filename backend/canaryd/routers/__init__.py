"""API routers."""
from .measurements import router as measurements_router

__all__ = ["measurements_router"]
