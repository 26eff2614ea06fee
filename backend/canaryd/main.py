"""Main FastAPI application for the measurement collector."""
import asyncio
import logging
import os
import signal
import time
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, settings, get_storage_url
from .exceptions import MalformedEntryError, StorageError
from .routers import measurements_router
from .services.ingestion import IngestionService
from .services.query import QueryService
from .services.repository import MeasurementRepository
from .stores import ScoreStore, create_score_store

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - build the store and services, close on shutdown."""
    config: Settings = app.state.settings

    store = app.state.store
    if store is None:
        store = create_score_store(get_storage_url(config), timeout=config.storage_timeout)
        app.state.store = store
    await store.init()

    repository = MeasurementRepository(
        store,
        timeout=config.storage_timeout,
        skip_malformed=config.skip_malformed_entries,
        clock=app.state.clock or time.time,
    )
    app.state.repository = repository
    app.state.ingestion = IngestionService(repository, config.retention)
    app.state.query = QueryService(repository, config.default_range)

    logger.info(f"fn=main listening=true port={config.port} retention={config.retention}")

    yield

    await store.close()
    logger.info("Shutdown complete")


def create_app(
    config: Optional[Settings] = None,
    store: Optional[ScoreStore] = None,
    clock: Optional[Callable[[], float]] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Settings to use instead of the environment-loaded ones.
        store: Score store to use instead of building one from the storage URL.
        clock: Time source in epoch seconds, defaults to time.time.
    """
    config = config or settings

    app = FastAPI(
        title="canaryd",
        description="Collects health-check measurements and serves recent time windows",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.store = store
    app.state.clock = clock

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(measurements_router)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}", exc_info=exc)
        if config.exit_on_storage_error:
            logger.critical("Storage failure is fatal, terminating process")
            os.kill(os.getpid(), signal.SIGTERM)
        return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})

    @app.exception_handler(MalformedEntryError)
    async def malformed_entry_handler(request: Request, exc: MalformedEntryError):
        logger.error(f"{exc} on {request.url.path}")
        return JSONResponse(status_code=500, content={"detail": "Stored measurement could not be decoded"})

    # Health check endpoint
    @app.get("/health")
    async def health_check(request: Request):
        repository: MeasurementRepository = request.app.state.repository
        try:
            storage_ok = await asyncio.wait_for(repository.store.ping(), timeout=config.storage_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Score store ping timed out after {config.storage_timeout}s")
            storage_ok = False
        return {
            "status": "healthy" if storage_ok else "degraded",
            "storage": "ok" if storage_ok else "unavailable",
            "decode_errors": repository.decode_errors,
        }

    return app


# Create the application instance
app = create_app()


def run():
    """Run the collector with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
