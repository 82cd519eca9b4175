"""User business logic: anonymous upsert-on-miss and profile edits."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from studybuddy.config import get_settings
from studybuddy.db.models import User
from studybuddy.economy.errors import UserNotFound

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


async def get_user(db: AsyncSession, user_id: str, *, refresh: bool = False) -> User | None:
    """Fetch a user by id. ``refresh`` bypasses the session identity map."""
    stmt = select(User).where(User.id == user_id)
    if refresh:
        stmt = stmt.execution_options(populate_existing=True)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def require_user(db: AsyncSession, user_id: str) -> User:
    """Fetch a user or raise UserNotFound."""
    user = await get_user(db, user_id)
    if user is None:
        raise UserNotFound
    return user


async def get_or_create_user(db: AsyncSession, user_id: str) -> tuple[User, bool]:
    """
    Get an existing anonymous user or create one with the starting balance.

    Two first contacts racing on the same id both end up with the same row:
    the loser's insert hits the primary key and it re-reads.

    Returns:
        Tuple of (user, created) where created is True if a new user was made.
    """
    user = await get_user(db, user_id)
    if user is not None:
        return user, False

    now = datetime.now(timezone.utc)
    user = User(
        id=user_id,
        email=f"anonymous-{user_id}@local",
        first_name="Anonymous",
        last_name="User",
        tokens=get_settings().starting_tokens,
        total_exercises=0,
        total_problems=0,
        streak=0,
        created_at=now,
        updated_at=now,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        existing = await get_user(db, user_id)
        if existing is None:
            raise
        return existing, False

    logger.info("user_created", user_id=user_id, tokens=user.tokens)
    return user, True


async def update_profile(
    db: AsyncSession,
    user: User,
    first_name: str | None = None,
    last_name: str | None = None,
    profile_image_url: str | None = None,
) -> User:
    """Update profile fields. Balance and counters are not reachable from here."""
    if first_name is not None:
        user.first_name = first_name
    if last_name is not None:
        user.last_name = last_name
    if profile_image_url is not None:
        user.profile_image_url = profile_image_url
    user.updated_at = datetime.now(timezone.utc)

    await db.flush()
    return user
