"""Shop API tests: catalog and purchases."""

import pytest
from httpx import AsyncClient

from tests.factories import create_user, read_balance


@pytest.mark.asyncio
async def test_catalog(client: AsyncClient) -> None:
    response = await client.get("/api/v1/shop/catalog")
    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"1", "2", "3", "4"}
    assert data["2"] == {"title": "Avatar Skin", "tokenCost": 30, "description": "Astronaut theme"}


@pytest.mark.asyncio
async def test_buy_item_once(client: AsyncClient) -> None:
    user_id = await create_user(tokens=50)
    body = {"userId": user_id, "itemId": "2"}

    first = await client.post("/api/v1/shop/purchase", json=body)
    assert first.status_code == 200
    assert first.json()["newBalance"] == 20
    assert first.json()["tokensSpent"] == 30

    second = await client.post("/api/v1/shop/purchase", json=body)
    assert second.status_code == 409
    assert second.json()["code"] == "already_owned"
    assert await read_balance(user_id) == 20


@pytest.mark.asyncio
async def test_unknown_item(client: AsyncClient) -> None:
    user_id = await create_user(tokens=100)
    response = await client.post("/api/v1/shop/purchase", json={"userId": user_id, "itemId": "999"})
    assert response.status_code == 404
    assert response.json()["code"] == "item_not_found"


@pytest.mark.asyncio
async def test_not_enough_tokens(client: AsyncClient) -> None:
    user_id = await create_user(tokens=10)
    response = await client.post("/api/v1/shop/purchase", json={"userId": user_id, "itemId": "3"})
    assert response.status_code == 402
    assert await read_balance(user_id) == 10


@pytest.mark.asyncio
async def test_client_price_is_rejected(client: AsyncClient) -> None:
    user_id = await create_user(tokens=100)
    response = await client.post(
        "/api/v1/shop/purchase",
        json={"userId": user_id, "itemId": "1", "tokenCost": 1},
    )
    assert response.status_code == 422
    assert await read_balance(user_id) == 100


@pytest.mark.asyncio
async def test_purchase_history(client: AsyncClient) -> None:
    user_id = await create_user(tokens=100)
    await client.post("/api/v1/shop/purchase", json={"userId": user_id, "itemId": "3"})

    response = await client.post("/api/v1/shop/purchases", json={"userId": user_id})
    assert response.status_code == 200
    purchases = response.json()
    assert len(purchases) == 1
    assert purchases[0]["itemId"] == "3"
    assert purchases[0]["itemTitle"] == "Study Theme"
    assert purchases[0]["tokensSpent"] == 20
