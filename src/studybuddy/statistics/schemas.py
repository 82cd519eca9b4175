"""Response schemas for the statistics endpoint."""

from __future__ import annotations

from studybuddy.schemas import ApiModel


class UserCounters(ApiModel):
    tokens: int
    total_exercises: int
    total_problems: int
    streak: int


class DailyExerciseEntry(ApiModel):
    date: str
    exercises_completed: int
    tokens_earned: int


class SpendingEntry(ApiModel):
    category: str
    amount: int
    count: int


class ExerciseTypeEntry(ApiModel):
    name: str
    completed: int
    tokens_earned: int


class StatisticsResponse(ApiModel):
    user: UserCounters
    exercise_history: list[DailyExerciseEntry]
    token_spending: list[SpendingEntry]
    exercise_types: list[ExerciseTypeEntry]
