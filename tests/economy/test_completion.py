"""Exercise completion tracker tests."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.economy.completion import (
    explain_rejected_completion,
    get_exercise_reward,
    list_attempts,
    mark_completed,
    start_attempt,
)
from studybuddy.economy.errors import ExerciseNotFound, UserNotFound
from tests.factories import create_exercise, create_user, read_attempt, start_attempt_row

MISSING_ID = "00000000-0000-0000-0000-000000000000"


@pytest.mark.asyncio
async def test_start_attempt_is_started_state(db_session: AsyncSession) -> None:
    user_id = await create_user()
    exercise_id = await create_exercise()

    attempt = await start_attempt(db_session, user_id, exercise_id)
    await db_session.commit()

    assert attempt.completed is False
    assert attempt.reps_completed == 0
    assert attempt.tokens_earned == 0
    assert attempt.completed_at is None


@pytest.mark.asyncio
async def test_start_attempt_unknown_user(db_session: AsyncSession) -> None:
    exercise_id = await create_exercise()
    with pytest.raises(UserNotFound):
        await start_attempt(db_session, MISSING_ID, exercise_id)
    await db_session.rollback()


@pytest.mark.asyncio
async def test_start_attempt_unknown_exercise(db_session: AsyncSession) -> None:
    user_id = await create_user()
    with pytest.raises(ExerciseNotFound):
        await start_attempt(db_session, user_id, MISSING_ID)
    await db_session.rollback()


@pytest.mark.asyncio
async def test_mark_completed_once(db_session: AsyncSession) -> None:
    user_id = await create_user()
    exercise_id = await create_exercise()
    attempt_id = await start_attempt_row(user_id, exercise_id)

    assert await mark_completed(db_session, attempt_id, user_id, 12) == exercise_id
    await db_session.commit()
    assert await mark_completed(db_session, attempt_id, user_id, 12) is None
    await db_session.rollback()

    attempt = await read_attempt(attempt_id)
    assert attempt is not None
    assert attempt.completed is True
    assert attempt.reps_completed == 12
    assert attempt.completed_at is not None


@pytest.mark.asyncio
async def test_mark_completed_wrong_owner(db_session: AsyncSession) -> None:
    owner = await create_user()
    intruder = await create_user()
    attempt_id = await start_attempt_row(owner, await create_exercise())

    assert await mark_completed(db_session, attempt_id, intruder, 10) is None
    await db_session.rollback()

    attempt = await read_attempt(attempt_id)
    assert attempt is not None
    assert attempt.completed is False


@pytest.mark.asyncio
async def test_get_exercise_reward(db_session: AsyncSession) -> None:
    exercise_id = await create_exercise(token_reward=18)
    assert await get_exercise_reward(db_session, exercise_id) == 18
    assert await get_exercise_reward(db_session, MISSING_ID) is None
    await db_session.rollback()


@pytest.mark.asyncio
async def test_explain_rejected_completion(db_session: AsyncSession) -> None:
    owner = await create_user()
    intruder = await create_user()
    exercise_id = await create_exercise()
    open_attempt = await start_attempt_row(owner, exercise_id)
    done_attempt = await start_attempt_row(owner, exercise_id)
    await mark_completed(db_session, done_attempt, owner, 10)
    await db_session.commit()

    assert await explain_rejected_completion(db_session, MISSING_ID, owner) == "missing"
    assert await explain_rejected_completion(db_session, open_attempt, intruder) == "not_owner"
    assert await explain_rejected_completion(db_session, done_attempt, owner) == "already_completed"
    assert await explain_rejected_completion(db_session, open_attempt, owner) == "unknown"
    await db_session.rollback()


@pytest.mark.asyncio
async def test_list_attempts_only_own(db_session: AsyncSession) -> None:
    user_id = await create_user()
    other = await create_user()
    exercise_id = await create_exercise()
    await start_attempt_row(user_id, exercise_id)
    await start_attempt_row(user_id, exercise_id)
    await start_attempt_row(other, exercise_id)

    attempts = await list_attempts(db_session, user_id)
    await db_session.rollback()

    assert len(attempts) == 2
    assert {a.user_id for a in attempts} == {user_id}
