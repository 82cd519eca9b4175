"""Shop endpoints: catalog, purchase, purchase history."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.database import get_session
from studybuddy.economy.coordinator import purchase_shop_item
from studybuddy.economy.entitlements import list_shop_purchases
from studybuddy.schemas import UserIdRequest
from studybuddy.shop.catalog import SHOP_CATALOG
from studybuddy.shop.schemas import (
    PurchaseResponse,
    ShopItemResponse,
    ShopPurchaseRequest,
    ShopPurchaseResponse,
)

router = APIRouter(prefix="/api/v1/shop", tags=["Shop"])


@router.get("/catalog", response_model=dict[str, ShopItemResponse])
async def get_catalog() -> dict[str, ShopItemResponse]:
    """The server-side shop catalog keyed by item id."""
    return {item_id: ShopItemResponse.model_validate(item) for item_id, item in SHOP_CATALOG.items()}


@router.post("/purchase", response_model=PurchaseResponse)
async def purchase(
    body: ShopPurchaseRequest,
    db: AsyncSession = Depends(get_session),
) -> PurchaseResponse:
    """Buy a shop item at its catalog price."""
    result = await purchase_shop_item(db, str(body.user_id), body.item_id)
    return PurchaseResponse(
        item_id=result.item_id,
        tokens_spent=result.tokens_spent,
        new_balance=result.new_balance,
    )


@router.post("/purchases", response_model=list[ShopPurchaseResponse])
async def get_purchases(
    body: UserIdRequest,
    db: AsyncSession = Depends(get_session),
) -> list[ShopPurchaseResponse]:
    """The user's shop purchases."""
    purchases = await list_shop_purchases(db, str(body.user_id))
    return [ShopPurchaseResponse.model_validate(p) for p in purchases]
