"""Entitlement ledger tests."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.db.models import ShopPurchase, UserSolution
from studybuddy.economy.entitlements import (
    grant_shop_item,
    grant_solution,
    list_owned_solutions,
    list_shop_purchases,
    owns_solution,
)
from studybuddy.economy.errors import AlreadyOwned
from tests.factories import count_rows, create_solution, create_user


@pytest.mark.asyncio
async def test_grant_solution_records_ownership(db_session: AsyncSession) -> None:
    user_id = await create_user()
    solution_id = await create_solution(token_cost=10)

    row = await grant_solution(db_session, user_id, solution_id, 10)
    await db_session.commit()

    assert row.tokens_spent == 10
    assert await owns_solution(db_session, user_id, solution_id) is True
    await db_session.rollback()


@pytest.mark.asyncio
async def test_owns_solution_false_for_other_user(db_session: AsyncSession) -> None:
    owner = await create_user()
    other = await create_user()
    solution_id = await create_solution()
    await grant_solution(db_session, owner, solution_id, 10)
    await db_session.commit()

    assert await owns_solution(db_session, other, solution_id) is False
    await db_session.rollback()


@pytest.mark.asyncio
async def test_duplicate_solution_grant_raises_already_owned(db_session: AsyncSession) -> None:
    user_id = await create_user()
    solution_id = await create_solution()
    await grant_solution(db_session, user_id, solution_id, 10)
    await db_session.commit()

    with pytest.raises(AlreadyOwned):
        await grant_solution(db_session, user_id, solution_id, 10)
    await db_session.rollback()

    assert await count_rows(UserSolution, user_id=user_id) == 1


@pytest.mark.asyncio
async def test_duplicate_shop_grant_raises_already_owned(db_session: AsyncSession) -> None:
    user_id = await create_user()
    await grant_shop_item(db_session, user_id, "2", "Avatar Skin", 30)
    await db_session.commit()

    with pytest.raises(AlreadyOwned):
        await grant_shop_item(db_session, user_id, "2", "Avatar Skin", 30)
    await db_session.rollback()

    assert await count_rows(ShopPurchase, user_id=user_id) == 1


@pytest.mark.asyncio
async def test_same_item_for_different_users(db_session: AsyncSession) -> None:
    first = await create_user()
    second = await create_user()
    await grant_shop_item(db_session, first, "3", "Study Theme", 20)
    await grant_shop_item(db_session, second, "3", "Study Theme", 20)
    await db_session.commit()

    assert await count_rows(ShopPurchase, item_id="3") == 2


@pytest.mark.asyncio
async def test_list_entitlements(db_session: AsyncSession) -> None:
    user_id = await create_user()
    solution_id = await create_solution(title="Owned")
    await create_solution(title="Not owned")
    await grant_solution(db_session, user_id, solution_id, 10)
    await grant_shop_item(db_session, user_id, "1", "Premium Solutions", 50)
    await db_session.commit()

    solutions = await list_owned_solutions(db_session, user_id)
    purchases = await list_shop_purchases(db_session, user_id)
    await db_session.rollback()

    assert [s.title for s in solutions] == ["Owned"]
    assert [p.item_id for p in purchases] == ["1"]


@pytest.mark.asyncio
async def test_list_entitlements_empty(db_session: AsyncSession) -> None:
    user_id = await create_user()
    assert await list_owned_solutions(db_session, user_id) == []
    assert await list_shop_purchases(db_session, user_id) == []
    await db_session.rollback()
