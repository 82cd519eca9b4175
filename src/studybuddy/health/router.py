"""Health, readiness, and version endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.config import get_settings
from studybuddy.database import get_session
from studybuddy.db.models import Exercise, Solution
from studybuddy.redis_client import check_redis

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe: returns 200 if the process is alive."""
    return {"status": "healthy"}


@router.get("/ready")
async def readiness(
    db: AsyncSession = Depends(get_session),  # noqa: B008
) -> dict[str, object]:
    """Readiness probe: database reachable, catalogs seeded, Redis reachable."""
    checks: dict[str, object] = {}

    try:
        exercises = (await db.execute(select(func.count()).select_from(Exercise))).scalar_one()
        solutions = (await db.execute(select(func.count()).select_from(Solution))).scalar_one()
        checks["database"] = "ok"
        checks["catalog"] = "ok" if exercises and solutions else "empty"
    except Exception as exc:
        checks["database"] = f"error: {exc}"

    checks["redis"] = await check_redis()

    all_ok = all(v == "ok" for v in checks.values())
    return {"status": "ready" if all_ok else "degraded", "checks": checks}


@router.get("/version")
async def version() -> dict[str, str]:
    """Return API version and environment."""
    settings = get_settings()
    return {
        "version": settings.app_version,
        "environment": settings.environment,
    }
