"""Development-only catalog seeding endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.catalog.seed import seed_catalog
from studybuddy.config import get_settings
from studybuddy.database import get_session

router = APIRouter(prefix="/api/v1", tags=["Catalog"])


@router.post("/seed")
async def seed(db: AsyncSession = Depends(get_session)) -> dict[str, object]:
    """Seed the exercise and solution catalogs. Only available in debug mode."""
    if not get_settings().debug:
        raise HTTPException(status_code=404, detail="Not Found")
    inserted = await seed_catalog(db)
    return {"message": "Seed data inserted successfully", "inserted": inserted}
