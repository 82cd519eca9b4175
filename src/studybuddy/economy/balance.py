"""Balance store: single-statement credit and conditional debit.

Balances are never read into Python, adjusted and written back. Both
operations are one UPDATE evaluated under the row lock, so concurrent
callers for the same user serialize in the database.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.db.models import User
from studybuddy.economy.errors import UserNotFound


async def get_balance(db: AsyncSession, user_id: str) -> int | None:
    """Current balance, or None if the user does not exist."""
    result = await db.execute(select(User.tokens).where(User.id == user_id))
    return result.scalar_one_or_none()


async def credit(
    db: AsyncSession,
    user_id: str,
    amount: int,
    *,
    count_exercise: bool = False,
) -> int:
    """Add ``amount`` tokens. Returns the new balance.

    With ``count_exercise`` the user's ``total_exercises`` counter is bumped
    in the same statement.
    """
    if amount < 0:
        msg = "credit amount must be non-negative"
        raise ValueError(msg)

    values: dict[str, object] = {
        "tokens": User.tokens + amount,
        "updated_at": datetime.now(timezone.utc),
    }
    if count_exercise:
        values["total_exercises"] = User.total_exercises + 1

    result = await db.execute(
        update(User)
        .where(User.id == user_id)
        .values(**values)
        .returning(User.tokens)
        .execution_options(synchronize_session=False)
    )
    new_balance = result.scalar_one_or_none()
    if new_balance is None:
        raise UserNotFound
    return new_balance


async def conditional_debit(db: AsyncSession, user_id: str, amount: int) -> int | None:
    """Subtract ``amount`` only if the balance covers it.

    Returns the new balance, or None when no row matched (insufficient
    funds or unknown user). Nothing is written in the None case.
    """
    if amount < 0:
        msg = "debit amount must be non-negative"
        raise ValueError(msg)

    result = await db.execute(
        update(User)
        .where(User.id == user_id, User.tokens >= amount)
        .values(
            tokens=User.tokens - amount,
            updated_at=datetime.now(timezone.utc),
        )
        .returning(User.tokens)
        .execution_options(synchronize_session=False)
    )
    return result.scalar_one_or_none()
