"""Seminar Storage Application.

Entry point for the presentation storage service. Presenters upload their
slides, images or notes; the service keeps exactly one current file per
presenter and hands back a relative storage path for the caller to persist.

Modules:
    - presentations: upload validation, presenter-scoped storage, error log
    - config: YAML settings loading
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from seminar_storage.config import get_config
from seminar_storage.presentations.router import router as presentations_router
from seminar_storage.presentations.router import set_storage_service
from seminar_storage.presentations.service import FileStorageService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# multipart logs every parsed form field at DEBUG.
for _noisy in ("multipart", "python_multipart"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    config = get_config()

    configured_level = getattr(logging, config.logging.level.upper(), None)
    if configured_level is not None:
        logging.getLogger().setLevel(configured_level)
        logger.info("Root logger level set to %s", config.logging.level.upper())

    service = FileStorageService.from_settings(config.storage)
    set_storage_service(service)
    logger.info(
        "File storage ready: root=%s error_log=%s",
        service.storage_root,
        service.error_log.path,
    )

    yield  # Application runs here

    # Shutdown
    service.error_log.close()
    set_storage_service(None)
    logger.info("Application shutdown complete")


app = FastAPI(
    title="Seminar Storage API",
    description="Centralized storage for files uploaded by seminar presenters",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(presentations_router)


@app.get("/health")
async def health() -> dict:
    """Health check endpoint.

    Returns:
        dict: Status object indicating the server is running.
    """
    return {"status": "ok"}
