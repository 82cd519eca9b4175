"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from studybuddy.catalog.router import router as catalog_router
from studybuddy.catalog.seed import seed_catalog
from studybuddy.config import get_settings
from studybuddy.database import close_db, get_session, init_db
from studybuddy.exercises.router import router as exercises_router
from studybuddy.health.router import router as health_router
from studybuddy.middleware import setup_middleware
from studybuddy.problems.router import router as problems_router
from studybuddy.redis_client import close_redis, init_redis
from studybuddy.shop.router import router as shop_router
from studybuddy.solutions.router import router as solutions_router
from studybuddy.statistics.router import router as statistics_router
from studybuddy.users.router import router as users_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_db(settings.database_url)
    await init_redis(settings.redis_url)

    # Seed the exercise and solution catalogs (idempotent)
    if settings.seed_catalog_on_startup:
        try:
            async for db in get_session():
                await seed_catalog(db)
                break
        except Exception:
            logger.warning("catalog_seed_failed", exc_info=True)

    yield

    await close_db()
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="StudyBuddy API",
        description="Backend API for StudyBuddy: solve problems, move, earn and spend tokens",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(users_router)
    app.include_router(problems_router)
    app.include_router(solutions_router)
    app.include_router(exercises_router)
    app.include_router(shop_router)
    app.include_router(statistics_router)
    app.include_router(catalog_router)

    return app


app = create_app()
