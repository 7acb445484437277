"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workout_log.api.v1 import api_router
from workout_log.core.config import get_settings
from workout_log.db.base import Base
from workout_log.db.session import engine
from workout_log.models import *  # noqa: F401, F403 - register all models
from workout_log.services.session_store import InMemorySessionStore

settings = get_settings()
logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: optionally create tables (use Alembic in production); shutdown: cleanup."""
    if settings.storage_backend == "database" and settings.auto_create_tables:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    logger.info("Starting %s with %s storage", settings.app_name, settings.storage_backend)
    yield
    await engine.dispose()


def create_application() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.session_store = InMemorySessionStore()
    # CORS: allow everything in debug, localhost in dev; in production use CORS_ORIGINS env (comma-separated)
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def root():
        return {"status": "ok", "message": "Workout Log API"}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()
