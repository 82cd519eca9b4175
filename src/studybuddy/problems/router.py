"""Problem endpoints: record OCR results and list them."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.database import get_session, unit_of_work
from studybuddy.problems.schemas import ProblemCreateRequest, ProblemResponse
from studybuddy.problems.service import create_problem, list_problems
from studybuddy.schemas import UserIdRequest

router = APIRouter(prefix="/api/v1/problems", tags=["Problems"])


@router.post("", response_model=ProblemResponse)
async def create(
    body: ProblemCreateRequest,
    db: AsyncSession = Depends(get_session),
) -> ProblemResponse:
    """Store a photographed problem's OCR text."""
    async with unit_of_work(db):
        problem = await create_problem(db, str(body.user_id), body.ocr_text, image_url=body.image_url)
    return ProblemResponse.model_validate(problem)


@router.post("/user", response_model=list[ProblemResponse])
async def get_user_problems(
    body: UserIdRequest,
    db: AsyncSession = Depends(get_session),
) -> list[ProblemResponse]:
    """List the user's problems."""
    problems = await list_problems(db, str(body.user_id))
    return [ProblemResponse.model_validate(p) for p in problems]
