"""Entitlement ledger: append-only records of unlocked solutions and shop items.

The (user, item) unique constraints are the only duplicate guard. Grants
must run inside the caller's unit of work; a violation is surfaced as
AlreadyOwned and the caller's rollback discards any debit made earlier in
the same unit.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.db.models import ShopPurchase, Solution, UserSolution
from studybuddy.economy.errors import AlreadyOwned


UNIQUE_VIOLATION = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION
    message = str(orig)
    return "UNIQUE constraint failed" in message or "duplicate key value" in message


async def _insert_or_already_owned(db: AsyncSession, row: UserSolution | ShopPurchase) -> None:
    db.add(row)
    try:
        await db.flush()
    except IntegrityError as exc:
        if not _is_unique_violation(exc):
            raise
        raise AlreadyOwned from exc


async def grant_solution(
    db: AsyncSession,
    user_id: str,
    solution_id: str,
    cost: int,
    problem_id: str | None = None,
) -> UserSolution:
    """Record a solution purchase. Raises AlreadyOwned on a duplicate."""
    row = UserSolution(
        user_id=user_id,
        solution_id=solution_id,
        problem_id=problem_id,
        tokens_spent=cost,
    )
    await _insert_or_already_owned(db, row)
    return row


async def grant_shop_item(
    db: AsyncSession,
    user_id: str,
    item_id: str,
    item_title: str,
    cost: int,
) -> ShopPurchase:
    """Record a shop purchase. Raises AlreadyOwned on a duplicate."""
    row = ShopPurchase(
        user_id=user_id,
        item_id=item_id,
        item_title=item_title,
        tokens_spent=cost,
    )
    await _insert_or_already_owned(db, row)
    return row


async def owns_solution(db: AsyncSession, user_id: str, solution_id: str) -> bool:
    """True if the user has purchased the solution."""
    result = await db.execute(
        select(UserSolution.id).where(
            UserSolution.user_id == user_id,
            UserSolution.solution_id == solution_id,
        )
    )
    return result.first() is not None


async def list_owned_solutions(db: AsyncSession, user_id: str) -> list[Solution]:
    """Solutions the user has unlocked, most recently purchased first."""
    result = await db.execute(
        select(Solution)
        .join(UserSolution, UserSolution.solution_id == Solution.id)
        .where(UserSolution.user_id == user_id)
        .order_by(UserSolution.accessed_at.desc())
    )
    return list(result.scalars().all())


async def list_shop_purchases(db: AsyncSession, user_id: str) -> list[ShopPurchase]:
    """Shop items the user has bought, most recent first."""
    result = await db.execute(
        select(ShopPurchase)
        .where(ShopPurchase.user_id == user_id)
        .order_by(ShopPurchase.purchased_at.desc())
    )
    return list(result.scalars().all())
