"""Problem capture: store OCR text and count it on the user."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.db.models import Problem, User
from studybuddy.economy.errors import UserNotFound


async def create_problem(
    db: AsyncSession,
    user_id: str,
    ocr_text: str,
    image_url: str | None = None,
) -> Problem:
    """Record a problem and bump the user's ``total_problems`` in the same transaction."""
    result = await db.execute(
        update(User)
        .where(User.id == user_id)
        .values(total_problems=User.total_problems + 1, updated_at=datetime.now(timezone.utc))
        .returning(User.id)
        .execution_options(synchronize_session=False)
    )
    if result.scalar_one_or_none() is None:
        raise UserNotFound

    problem = Problem(user_id=user_id, ocr_text=ocr_text, image_url=image_url)
    db.add(problem)
    await db.flush()
    return problem


async def list_problems(db: AsyncSession, user_id: str) -> list[Problem]:
    """A user's problems, newest first."""
    result = await db.execute(
        select(Problem).where(Problem.user_id == user_id).order_by(Problem.created_at.desc())
    )
    return list(result.scalars().all())
