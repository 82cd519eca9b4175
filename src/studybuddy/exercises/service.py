"""Exercise catalog reads."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.db.models import Exercise
from studybuddy.economy.errors import ExerciseNotFound


async def list_exercises(db: AsyncSession) -> list[Exercise]:
    """All catalog exercises, easiest first."""
    result = await db.execute(
        select(Exercise).order_by(Exercise.difficulty.asc(), Exercise.token_reward.asc(), Exercise.name)
    )
    return list(result.scalars().all())


async def get_exercise(db: AsyncSession, exercise_id: str) -> Exercise:
    """Fetch one exercise or raise ExerciseNotFound."""
    exercise = await db.get(Exercise, exercise_id)
    if exercise is None:
        raise ExerciseNotFound
    return exercise
