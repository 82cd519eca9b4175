"""User endpoints: anonymous sign-in, profile, entitlements and history."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.database import get_session
from studybuddy.economy.completion import list_attempts
from studybuddy.economy.entitlements import list_owned_solutions, list_shop_purchases
from studybuddy.exercises.schemas import AttemptResponse
from studybuddy.schemas import UserIdRequest
from studybuddy.shop.schemas import ShopPurchaseResponse
from studybuddy.solutions.schemas import PublicSolutionResponse
from studybuddy.users.schemas import EntitlementsResponse, ProfileUpdateRequest, UserResponse
from studybuddy.users.service import get_or_create_user, require_user, update_profile

router = APIRouter(prefix="/api/v1", tags=["Users"])


@router.post("/auth/user", response_model=UserResponse)
async def get_or_create_anonymous_user(
    body: UserIdRequest,
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    """Return the user, creating it with the starting balance on first contact."""
    user, _created = await get_or_create_user(db, str(body.user_id))
    return UserResponse.model_validate(user)


@router.post("/user/profile", response_model=UserResponse)
async def update_my_profile(
    body: ProfileUpdateRequest,
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    """Edit display fields of the profile."""
    user = await require_user(db, str(body.user_id))
    user = await update_profile(
        db,
        user,
        first_name=body.first_name,
        last_name=body.last_name,
        profile_image_url=body.profile_image_url,
    )
    await db.commit()
    return UserResponse.model_validate(user)


@router.post("/user/entitlements", response_model=EntitlementsResponse)
async def get_entitlements(
    body: UserIdRequest,
    db: AsyncSession = Depends(get_session),
) -> EntitlementsResponse:
    """Everything the user has unlocked: solutions and shop items."""
    user_id = str(body.user_id)
    solutions = await list_owned_solutions(db, user_id)
    purchases = await list_shop_purchases(db, user_id)
    return EntitlementsResponse(
        solutions=[PublicSolutionResponse.model_validate(s) for s in solutions],
        shop_items=[ShopPurchaseResponse.model_validate(p) for p in purchases],
    )


@router.post("/user/solutions", response_model=list[PublicSolutionResponse])
async def get_my_solutions(
    body: UserIdRequest,
    db: AsyncSession = Depends(get_session),
) -> list[PublicSolutionResponse]:
    """Solutions the user has purchased."""
    solutions = await list_owned_solutions(db, str(body.user_id))
    return [PublicSolutionResponse.model_validate(s) for s in solutions]


@router.post("/user/exercises", response_model=list[AttemptResponse])
async def get_my_exercises(
    body: UserIdRequest,
    db: AsyncSession = Depends(get_session),
) -> list[AttemptResponse]:
    """The user's exercise attempts, newest first."""
    attempts = await list_attempts(db, str(body.user_id))
    return [AttemptResponse.model_validate(a) for a in attempts]
