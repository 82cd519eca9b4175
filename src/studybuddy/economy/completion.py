"""Exercise completion tracker.

Attempt lifecycle: Started (completed = false) -> Completed (terminal).
The transition is a conditional UPDATE keyed on id, owner and the
not-yet-completed state, so only one of several concurrent completions
can match the row.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Row, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.db.models import Exercise, User, UserExercise
from studybuddy.economy.errors import ExerciseNotFound, UserNotFound


async def start_attempt(db: AsyncSession, user_id: str, exercise_id: str) -> UserExercise:
    """Create an attempt in the Started state."""
    user = await db.get(User, user_id)
    if user is None:
        raise UserNotFound
    exercise = await db.get(Exercise, exercise_id)
    if exercise is None:
        raise ExerciseNotFound

    attempt = UserExercise(
        user_id=user_id,
        exercise_id=exercise_id,
        completed=False,
        reps_completed=0,
        tokens_earned=0,
        completed_at=None,
    )
    db.add(attempt)
    await db.flush()
    return attempt


async def mark_completed(
    db: AsyncSession,
    attempt_id: str,
    user_id: str,
    reps_completed: int,
) -> str | None:
    """Flip a Started attempt to Completed.

    Returns the attempt's exercise id, or None when no Started attempt with
    this id belongs to the user.
    """
    result = await db.execute(
        update(UserExercise)
        .where(
            UserExercise.id == attempt_id,
            UserExercise.user_id == user_id,
            UserExercise.completed.is_(False),
        )
        .values(
            completed=True,
            reps_completed=reps_completed,
            completed_at=datetime.now(timezone.utc),
        )
        .returning(UserExercise.exercise_id)
        .execution_options(synchronize_session=False)
    )
    return result.scalar_one_or_none()


async def get_exercise_reward(db: AsyncSession, exercise_id: str) -> int | None:
    """Current catalog reward for an exercise."""
    result = await db.execute(
        select(Exercise.token_reward).where(Exercise.id == exercise_id)
    )
    return result.scalar_one_or_none()


async def stamp_tokens_earned(db: AsyncSession, attempt_id: str, amount: int) -> Row[Any]:
    """Record the reward on a just-completed attempt and return the final row."""
    result = await db.execute(
        update(UserExercise)
        .where(UserExercise.id == attempt_id)
        .values(tokens_earned=amount)
        .returning(
            UserExercise.id,
            UserExercise.user_id,
            UserExercise.exercise_id,
            UserExercise.completed,
            UserExercise.reps_completed,
            UserExercise.tokens_earned,
            UserExercise.completed_at,
            UserExercise.created_at,
        )
        .execution_options(synchronize_session=False)
    )
    return result.one()


async def explain_rejected_completion(db: AsyncSession, attempt_id: str, user_id: str) -> str:
    """Classify why a completion matched nothing. Diagnostic only.

    Runs after the failed unit has been rolled back and never feeds back
    into the decision.
    """
    result = await db.execute(
        select(UserExercise.user_id, UserExercise.completed).where(UserExercise.id == attempt_id)
    )
    row = result.one_or_none()
    if row is None:
        return "missing"
    if row.user_id != user_id:
        return "not_owner"
    if row.completed:
        return "already_completed"
    return "unknown"


async def list_attempts(db: AsyncSession, user_id: str) -> list[UserExercise]:
    """A user's attempts, newest first."""
    result = await db.execute(
        select(UserExercise)
        .where(UserExercise.user_id == user_id)
        .order_by(UserExercise.created_at.desc())
    )
    return list(result.scalars().all())
