"""Statistics endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.database import get_session
from studybuddy.schemas import UserIdRequest
from studybuddy.statistics.schemas import StatisticsResponse
from studybuddy.statistics.service import get_statistics

router = APIRouter(prefix="/api/v1", tags=["Statistics"])


@router.post("/statistics", response_model=StatisticsResponse)
async def statistics(
    body: UserIdRequest,
    db: AsyncSession = Depends(get_session),
) -> StatisticsResponse:
    """Dashboard numbers for one user."""
    return await get_statistics(db, str(body.user_id))
