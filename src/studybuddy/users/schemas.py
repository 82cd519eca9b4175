"""Request/response schemas for user endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from studybuddy.schemas import ApiModel, UserIdRequest
from studybuddy.shop.schemas import ShopPurchaseResponse
from studybuddy.solutions.schemas import PublicSolutionResponse


class UserResponse(ApiModel):
    """Full user record including balance and counters."""

    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    tokens: int
    total_exercises: int
    total_problems: int
    streak: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileUpdateRequest(UserIdRequest):
    """Update profile fields. Economic fields are not accepted here."""

    first_name: str | None = Field(None, min_length=1, max_length=64)
    last_name: str | None = Field(None, min_length=1, max_length=64)
    profile_image_url: str | None = Field(None, max_length=512)


class EntitlementsResponse(ApiModel):
    """Everything a user has unlocked."""

    solutions: list[PublicSolutionResponse]
    shop_items: list[ShopPurchaseResponse]
