"""Solution API tests: listing, purchase, gated content."""

import uuid

import pytest
from httpx import AsyncClient

from studybuddy.db.models import UserSolution
from tests.factories import count_rows, create_problem, create_solution, create_user, read_balance


@pytest.mark.asyncio
async def test_listing_hides_content(client: AsyncClient) -> None:
    await create_solution(token_cost=10)

    response = await client.get("/api/v1/solutions")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["tokenCost"] == 10
    assert "content" not in data[0]


@pytest.mark.asyncio
async def test_listing_filters(client: AsyncClient) -> None:
    await create_solution(title="Quadratic Equation Solution", category="algebra")
    await create_solution(title="Pythagorean Theorem", description="Right triangles", category="geometry")

    by_query = await client.get("/api/v1/solutions", params={"q": "quadratic"})
    by_category = await client.get("/api/v1/solutions", params={"category": "geometry"})

    assert [s["title"] for s in by_query.json()] == ["Quadratic Equation Solution"]
    assert [s["title"] for s in by_category.json()] == ["Pythagorean Theorem"]


@pytest.mark.asyncio
async def test_purchase_then_read_content(client: AsyncClient) -> None:
    user_id = await create_user(tokens=100)
    solution_id = await create_solution(token_cost=10)

    locked = await client.post(f"/api/v1/solutions/{solution_id}", json={"userId": user_id})
    assert locked.status_code == 403
    assert locked.json()["code"] == "entitlement_required"

    response = await client.post("/api/v1/solutions/purchase", json={"userId": user_id, "solutionId": solution_id})
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Purchase successful"
    assert data["tokensSpent"] == 10
    assert data["newBalance"] == 90

    unlocked = await client.post(f"/api/v1/solutions/{solution_id}", json={"userId": user_id})
    assert unlocked.status_code == 200
    assert "x = 2 or x = 3" in unlocked.json()["content"]


@pytest.mark.asyncio
async def test_purchase_insufficient_funds(client: AsyncClient) -> None:
    user_id = await create_user(tokens=5)
    solution_id = await create_solution(token_cost=10)

    response = await client.post("/api/v1/solutions/purchase", json={"userId": user_id, "solutionId": solution_id})
    assert response.status_code == 402
    assert response.json() == {"detail": "Insufficient tokens", "code": "insufficient_funds"}
    assert await read_balance(user_id) == 5


@pytest.mark.asyncio
async def test_purchase_twice_conflict(client: AsyncClient) -> None:
    user_id = await create_user(tokens=100)
    solution_id = await create_solution(token_cost=10)
    body = {"userId": user_id, "solutionId": solution_id}

    assert (await client.post("/api/v1/solutions/purchase", json=body)).status_code == 200
    second = await client.post("/api/v1/solutions/purchase", json=body)

    assert second.status_code == 409
    assert second.json()["code"] == "already_owned"
    assert await read_balance(user_id) == 90
    assert await count_rows(UserSolution, user_id=user_id) == 1


@pytest.mark.asyncio
async def test_purchase_unknown_solution(client: AsyncClient) -> None:
    user_id = await create_user(tokens=100)
    response = await client.post(
        "/api/v1/solutions/purchase",
        json={"userId": user_id, "solutionId": str(uuid.uuid4())},
    )
    assert response.status_code == 404
    assert response.json()["code"] == "solution_not_found"


@pytest.mark.asyncio
async def test_client_price_is_rejected(client: AsyncClient) -> None:
    user_id = await create_user(tokens=100)
    solution_id = await create_solution(token_cost=10)

    response = await client.post(
        "/api/v1/solutions/purchase",
        json={"userId": user_id, "solutionId": solution_id, "tokenCost": 0},
    )
    assert response.status_code == 422
    assert await read_balance(user_id) == 100


@pytest.mark.asyncio
async def test_owned_solutions_listing(client: AsyncClient) -> None:
    user_id = await create_user(tokens=100)
    solution_id = await create_solution(token_cost=10)
    await client.post("/api/v1/solutions/purchase", json={"userId": user_id, "solutionId": solution_id})

    response = await client.post("/api/v1/user/solutions", json={"userId": user_id})
    assert response.status_code == 200
    assert [s["id"] for s in response.json()] == [solution_id]


@pytest.mark.asyncio
async def test_purchase_linked_to_own_problem(client: AsyncClient) -> None:
    user_id = await create_user(tokens=100)
    problem_id = await create_problem(user_id)
    solution_id = await create_solution(token_cost=10)

    response = await client.post(
        "/api/v1/solutions/purchase",
        json={"userId": user_id, "solutionId": solution_id, "problemId": problem_id},
    )
    assert response.status_code == 200
    assert response.json()["newBalance"] == 90


@pytest.mark.asyncio
async def test_purchase_with_unknown_problem(client: AsyncClient) -> None:
    user_id = await create_user(tokens=100)
    solution_id = await create_solution(token_cost=10)

    response = await client.post(
        "/api/v1/solutions/purchase",
        json={"userId": user_id, "solutionId": solution_id, "problemId": str(uuid.uuid4())},
    )
    assert response.status_code == 404
    assert response.json()["code"] == "problem_not_found"
    assert await read_balance(user_id) == 100


@pytest.mark.asyncio
async def test_purchase_with_another_users_problem(client: AsyncClient) -> None:
    owner = await create_user(tokens=100)
    buyer = await create_user(tokens=100)
    problem_id = await create_problem(owner)
    solution_id = await create_solution(token_cost=10)

    response = await client.post(
        "/api/v1/solutions/purchase",
        json={"userId": buyer, "solutionId": solution_id, "problemId": problem_id},
    )
    assert response.status_code == 404
    assert response.json()["code"] == "problem_not_found"
    assert await read_balance(buyer) == 100
    assert await count_rows(UserSolution) == 0
