"""Solution endpoints: public listing, purchase, gated content."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.database import get_session
from studybuddy.economy.coordinator import purchase_solution
from studybuddy.schemas import UserIdRequest
from studybuddy.shop.schemas import PurchaseResponse
from studybuddy.solutions.schemas import (
    PublicSolutionResponse,
    SolutionDetailResponse,
    SolutionPurchaseRequest,
)
from studybuddy.solutions.service import get_owned_solution, list_solutions

router = APIRouter(prefix="/api/v1/solutions", tags=["Solutions"])


@router.get("", response_model=list[PublicSolutionResponse])
async def search_solutions(
    q: str | None = Query(None, max_length=200),
    category: str | None = Query(None, max_length=64),
    db: AsyncSession = Depends(get_session),
) -> list[PublicSolutionResponse]:
    """List catalog solutions without their content."""
    solutions = await list_solutions(db, query=q, category=category)
    return [PublicSolutionResponse.model_validate(s) for s in solutions]


@router.post("/purchase", response_model=PurchaseResponse)
async def purchase(
    body: SolutionPurchaseRequest,
    db: AsyncSession = Depends(get_session),
) -> PurchaseResponse:
    """Unlock a solution at its catalog price."""
    result = await purchase_solution(
        db,
        str(body.user_id),
        str(body.solution_id),
        problem_id=str(body.problem_id) if body.problem_id else None,
    )
    return PurchaseResponse(
        item_id=result.item_id,
        tokens_spent=result.tokens_spent,
        new_balance=result.new_balance,
    )


@router.post("/{solution_id}", response_model=SolutionDetailResponse)
async def get_solution_content(
    solution_id: str,
    body: UserIdRequest,
    db: AsyncSession = Depends(get_session),
) -> SolutionDetailResponse:
    """Full solution, for owners only."""
    solution = await get_owned_solution(db, str(body.user_id), solution_id)
    return SolutionDetailResponse.model_validate(solution)
