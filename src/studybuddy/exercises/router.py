"""Exercise endpoints: catalog, start an attempt, complete it."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.database import get_session
from studybuddy.economy.completion import start_attempt
from studybuddy.economy.coordinator import complete_exercise
from studybuddy.exercises.schemas import (
    AttemptResponse,
    CompleteExerciseRequest,
    CompleteExerciseResponse,
    ExerciseResponse,
    StartExerciseRequest,
)
from studybuddy.exercises.service import get_exercise, list_exercises

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1/exercises", tags=["Exercises"])


@router.get("", response_model=list[ExerciseResponse])
async def get_exercises(db: AsyncSession = Depends(get_session)) -> list[ExerciseResponse]:
    """List the exercise catalog."""
    exercises = await list_exercises(db)
    return [ExerciseResponse.model_validate(e) for e in exercises]


@router.get("/{exercise_id}", response_model=ExerciseResponse)
async def get_exercise_detail(
    exercise_id: str,
    db: AsyncSession = Depends(get_session),
) -> ExerciseResponse:
    """Get one exercise."""
    return ExerciseResponse.model_validate(await get_exercise(db, exercise_id))


@router.post("/start", response_model=AttemptResponse)
async def start(
    body: StartExerciseRequest,
    db: AsyncSession = Depends(get_session),
) -> AttemptResponse:
    """Open a new attempt for the user."""
    attempt = await start_attempt(db, str(body.user_id), str(body.exercise_id))
    await db.commit()
    logger.info("exercise_started", user_id=attempt.user_id, attempt_id=attempt.id, exercise_id=attempt.exercise_id)
    return AttemptResponse.model_validate(attempt)


@router.post("/complete", response_model=CompleteExerciseResponse)
async def complete(
    body: CompleteExerciseRequest,
    db: AsyncSession = Depends(get_session),
) -> CompleteExerciseResponse:
    """Complete an attempt. The reward comes from the catalog, never the client."""
    result = await complete_exercise(
        db,
        str(body.user_id),
        str(body.user_exercise_id),
        body.reps_completed,
    )
    return CompleteExerciseResponse(
        exercise=AttemptResponse.model_validate(result.attempt),
        tokens_earned=result.tokens_earned,
        new_balance=result.new_balance,
    )
