"""Request/response schemas for exercise endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import Field

from studybuddy.schemas import ApiModel, UserIdRequest


class ExerciseResponse(ApiModel):
    id: str
    name: str
    description: str
    reps: int
    token_reward: int
    difficulty: int
    estimated_time: str
    instructions: list[str]


class StartExerciseRequest(UserIdRequest):
    exercise_id: UUID


class CompleteExerciseRequest(UserIdRequest):
    """Finish an attempt. Only the rep count comes from the client."""

    user_exercise_id: UUID
    reps_completed: Annotated[int, Field(ge=0, strict=True)]


class AttemptResponse(ApiModel):
    id: str
    user_id: str
    exercise_id: str
    completed: bool
    reps_completed: int
    tokens_earned: int
    completed_at: datetime | None = None
    created_at: datetime | None = None


class CompleteExerciseResponse(ApiModel):
    exercise: AttemptResponse
    tokens_earned: int
    new_balance: int
