"""Main entry point for the open-venues service.

Startup sequence:
1. Initialize DI container
2. Load the initial venue catalog (the service refuses to start on failure)
3. Schedule the periodic catalog refresh
4. Serve HTTP with FastAPI
"""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from app.config import Settings
from app.container import Container
from app.errors import QueryValidationError, StartupError
from app.routers import (
    venue_router,
    set_venue_handler,
    get_handler,
    query_validation_error_handler,
)
from app.middleware import PrometheusMiddleware

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Global container and scheduler
container: Container = None
scheduler: AsyncIOScheduler = None


async def run_catalog_refresh_job():
    """Background job: reload the venue catalog from the CSV source."""
    logger.info("[Scheduler] Running CatalogRefreshJob")
    start_time = time.perf_counter()
    replaced = await container.catalog_refresher_service.refresh()
    duration = time.perf_counter() - start_time
    logger.info(
        f"[Scheduler] CatalogRefreshJob completed in {duration:.3f}s (replaced={replaced})"
    )


def start_background_jobs(settings: Settings):
    """Start the catalog refresh job using APScheduler."""
    global scheduler
    scheduler = AsyncIOScheduler()

    scheduler.add_job(
        run_catalog_refresh_job,
        trigger=IntervalTrigger(minutes=settings.catalog_refresh_minutes),
        id="catalog_refresh",
        name="Venue Catalog Refresh",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    logger.info(
        f"[Scheduler] Scheduled catalog refresh every "
        f"{settings.catalog_refresh_minutes} minutes"
    )

    scheduler.start()
    logger.info("[Scheduler] Background jobs started")


async def startup_sequence(settings: Settings):
    """Build the container and load the initial catalog.

    Raises:
        StartupError: If CSV_URL is not configured or the initial load fails
    """
    global container

    logger.info("[Main] Starting startup sequence")

    if not settings.csv_url:
        raise StartupError("CSV_URL is not configured")

    logger.info("[Main] Initializing DI container")
    container = Container(settings)

    logger.info("[Main] Injecting handler into router")
    set_venue_handler(container.venue_handler)

    logger.info("[Main] Loading venue catalog (initial load)")
    try:
        await container.catalog_refresher_service.load_initial_catalog()
    except Exception:
        await container.shutdown()
        raise
    logger.info(f"[Main] Initial catalog loaded: {container.catalog_store.size()} venues")

    logger.info("[Main] Starting periodic jobs")
    start_background_jobs(settings)

    logger.info("[Main] Startup sequence completed")


async def shutdown_sequence():
    """Clean up resources on shutdown."""
    global container, scheduler

    logger.info("[Main] Starting shutdown sequence")

    if scheduler:
        logger.info("[Main] Stopping scheduler")
        scheduler.shutdown(wait=False)

    if container:
        logger.info("[Main] Shutting down container")
        await container.shutdown()

    logger.info("[Main] Shutdown sequence completed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan context manager for startup and shutdown."""
    settings = Settings()
    await startup_sequence(settings)
    yield
    await shutdown_sequence()


settings = Settings()
app = FastAPI(
    title="Open Venues API",
    description="Venues near a location that are open right now",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(PrometheusMiddleware)
app.add_exception_handler(QueryValidationError, query_validation_error_handler)

# Register router at app creation time (before uvicorn starts)
app.include_router(venue_router)


@app.get("/health")
def health():
    """Health check endpoint with catalog status."""
    return get_handler().health()


@app.get("/metrics", response_class=PlainTextResponse)
def metrics():
    """Prometheus metrics endpoint for scraping."""
    return PlainTextResponse(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


if __name__ == "__main__":
    import uvicorn

    logger.info("[Main] Starting open-venues server")
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
