"""Per-user statistics: recent activity, token spending, exercise breakdown."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.db.models import Exercise, ShopPurchase, UserExercise, UserSolution
from studybuddy.statistics.schemas import (
    DailyExerciseEntry,
    ExerciseTypeEntry,
    SpendingEntry,
    StatisticsResponse,
    UserCounters,
)
from studybuddy.users.service import require_user

HISTORY_DAYS = 7


async def _exercise_history(db: AsyncSession, user_id: str, now: datetime) -> list[DailyExerciseEntry]:
    cutoff = now - timedelta(days=HISTORY_DAYS)
    day = func.date(UserExercise.completed_at).label("day")
    result = await db.execute(
        select(
            day,
            func.count().label("exercises_completed"),
            func.coalesce(func.sum(UserExercise.tokens_earned), 0).label("tokens_earned"),
        )
        .where(
            UserExercise.user_id == user_id,
            UserExercise.completed.is_(True),
            UserExercise.completed_at >= cutoff,
        )
        .group_by(day)
        .order_by(day)
    )
    return [
        DailyExerciseEntry(
            date=str(row.day),
            exercises_completed=int(row.exercises_completed),
            tokens_earned=int(row.tokens_earned),
        )
        for row in result
    ]


async def _spending(db: AsyncSession, user_id: str) -> list[SpendingEntry]:
    entries = []
    for category, model in (("Solutions", UserSolution), ("Shop Items", ShopPurchase)):
        result = await db.execute(
            select(
                func.coalesce(func.sum(model.tokens_spent), 0),
                func.count(model.id),
            ).where(model.user_id == user_id)
        )
        amount, count = result.one()
        # Categories with nothing spent are left out of the breakdown.
        if amount > 0:
            entries.append(SpendingEntry(category=category, amount=int(amount), count=int(count)))
    return entries


async def _exercise_types(db: AsyncSession, user_id: str) -> list[ExerciseTypeEntry]:
    completed = func.count(UserExercise.id).label("completed")
    result = await db.execute(
        select(
            Exercise.name,
            completed,
            func.coalesce(func.sum(UserExercise.tokens_earned), 0).label("tokens_earned"),
        )
        .join(Exercise, UserExercise.exercise_id == Exercise.id)
        .where(
            UserExercise.user_id == user_id,
            UserExercise.completed.is_(True),
        )
        .group_by(Exercise.id, Exercise.name)
        .order_by(completed.desc(), Exercise.name)
    )
    return [
        ExerciseTypeEntry(name=row.name, completed=int(row.completed), tokens_earned=int(row.tokens_earned))
        for row in result
    ]


async def get_statistics(db: AsyncSession, user_id: str) -> StatisticsResponse:
    """Build the statistics payload. Raises UserNotFound for unknown users."""
    user = await require_user(db, user_id)
    now = datetime.now(timezone.utc)
    return StatisticsResponse(
        user=UserCounters(
            tokens=user.tokens,
            total_exercises=user.total_exercises,
            total_problems=user.total_problems,
            streak=user.streak,
        ),
        exercise_history=await _exercise_history(db, user_id, now),
        token_spending=await _spending(db, user_id),
        exercise_types=await _exercise_types(db, user_id),
    )
