"""Problem API tests."""

import uuid

import pytest
from httpx import AsyncClient

from studybuddy.db.models import Problem
from tests.factories import count_rows, create_user, read_user


@pytest.mark.asyncio
async def test_create_problem_counts_on_user(client: AsyncClient) -> None:
    user_id = await create_user(tokens=100)

    response = await client.post(
        "/api/v1/problems",
        json={"userId": user_id, "ocrText": "x^2 - 5x + 6 = 0", "imageUrl": "https://example.com/p.png"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["ocrText"] == "x^2 - 5x + 6 = 0"
    assert data["userId"] == user_id

    user = await read_user(user_id)
    assert user is not None
    assert user.total_problems == 1
    assert user.tokens == 100


@pytest.mark.asyncio
async def test_create_problem_unknown_user(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/problems",
        json={"userId": str(uuid.uuid4()), "ocrText": "2 + 2"},
    )
    assert response.status_code == 404
    assert await count_rows(Problem) == 0


@pytest.mark.asyncio
async def test_empty_ocr_text_rejected(client: AsyncClient) -> None:
    user_id = await create_user()
    response = await client.post("/api/v1/problems", json={"userId": user_id, "ocrText": ""})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_user_problems(client: AsyncClient) -> None:
    user_id = await create_user()
    other = await create_user()
    await client.post("/api/v1/problems", json={"userId": user_id, "ocrText": "first"})
    await client.post("/api/v1/problems", json={"userId": user_id, "ocrText": "second"})
    await client.post("/api/v1/problems", json={"userId": other, "ocrText": "not mine"})

    response = await client.post("/api/v1/problems/user", json={"userId": user_id})
    assert response.status_code == 200
    assert sorted(p["ocrText"] for p in response.json()) == ["first", "second"]
