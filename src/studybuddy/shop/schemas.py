"""Request/response schemas for shop endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from studybuddy.schemas import ApiModel, UserIdRequest


class ShopItemResponse(ApiModel):
    title: str
    token_cost: int
    description: str


class ShopPurchaseRequest(UserIdRequest):
    """Buy a catalog item. The price is never part of the request."""

    item_id: str = Field(..., min_length=1, max_length=32)


class ShopPurchaseResponse(ApiModel):
    id: str
    item_id: str
    item_title: str
    tokens_spent: int
    purchased_at: datetime | None = None


class PurchaseResponse(ApiModel):
    """Outcome of a successful purchase."""

    message: str = "Purchase successful"
    item_id: str
    tokens_spent: int
    new_balance: int
