"""Wellness API: FastAPI application factory.

The app factory creates a FastAPI instance with:
- CORS middleware (configurable origins)
- Lifespan handler for startup/shutdown of the database pool
- Health endpoint at GET /api/health
- Routers for mood, medications, supplements, habits, reminders,
  analytics, and export
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wellness import __version__
from wellness.api.deps import init_database, shutdown_database
from wellness.api.middleware import register_error_handlers
from wellness.api.models import HealthResponse
from wellness.api.routers.analytics import router as analytics_router
from wellness.api.routers.export import router as export_router
from wellness.api.routers.habits import router as habits_router
from wellness.api.routers.medications import router as medications_router
from wellness.api.routers.mood import router as mood_router
from wellness.api.routers.reminders import router as reminders_router
from wellness.api.routers.supplements import router as supplements_router
from wellness.config import WellnessConfig

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database pool on startup and close it on shutdown.

    A database that cannot be reached does not stop the app from starting;
    data endpoints answer 503 until it is restarted with a working database.
    """
    config: WellnessConfig = app.state.config
    try:
        await init_database(config.database)
        logger.info("Database pool ready for %s", config.database.name)
    except Exception:
        logger.warning(
            "Failed to initialize database %s; data endpoints will be unavailable",
            config.database.name,
            exc_info=True,
        )

    yield

    await shutdown_database()


def create_app(
    cors_origins: list[str] | None = None,
    config: WellnessConfig | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    cors_origins:
        Allowed CORS origins. Defaults to ``config.api.cors_origins``.
    config:
        Parsed configuration; defaults to ``WellnessConfig()``.
    """
    if config is None:
        config = WellnessConfig()
    if cors_origins is None:
        cors_origins = config.api.cors_origins

    app = FastAPI(
        title="Wellness Tracker API",
        version=__version__,
        lifespan=lifespan,
    )
    app.router.redirect_slashes = False
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(mood_router)
    app.include_router(medications_router)
    app.include_router(supplements_router)
    app.include_router(habits_router)
    app.include_router(reminders_router)
    app.include_router(analytics_router)
    app.include_router(export_router)

    @app.get("/api/health", response_model=HealthResponse)
    async def health():
        return {"status": "ok"}

    return app
