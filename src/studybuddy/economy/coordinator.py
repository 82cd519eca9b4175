"""Transaction coordinator for the token economy.

Three recipes, each one all-or-nothing unit of work:

- complete_exercise: Started -> Completed, reward from the catalog, credit
- purchase_solution: conditional debit + solution entitlement
- purchase_shop_item: conditional debit + shop entitlement

This module is the only writer of balances, completion state, rewards and
entitlement rows. Prices and rewards always come from server-side
catalogs; callers cannot supply them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.database import unit_of_work
from studybuddy.db.models import Problem, Solution
from studybuddy.economy.balance import conditional_debit, credit, get_balance
from studybuddy.economy.completion import (
    explain_rejected_completion,
    get_exercise_reward,
    mark_completed,
    stamp_tokens_earned,
)
from studybuddy.economy.entitlements import grant_shop_item, grant_solution
from studybuddy.economy.errors import (
    ExerciseCatalogMissing,
    InsufficientFunds,
    ItemNotFound,
    NotFoundOrAlreadyCompleted,
    ProblemNotFound,
    SolutionNotFound,
    StudyBuddyError,
    UserNotFound,
)
from studybuddy.shop.catalog import get_shop_item

logger = structlog.get_logger()


@dataclass(frozen=True)
class CompletedAttempt:
    """Attempt row as it stands after completion."""

    id: str
    user_id: str
    exercise_id: str
    completed: bool
    reps_completed: int
    tokens_earned: int
    completed_at: datetime | None
    created_at: datetime | None


@dataclass(frozen=True)
class CompletionResult:
    attempt: CompletedAttempt
    tokens_earned: int
    new_balance: int


@dataclass(frozen=True)
class PurchaseResult:
    item_id: str
    tokens_spent: int
    new_balance: int


# ---------------------------------------------------------------------------
# CompleteExercise
# ---------------------------------------------------------------------------


async def complete_exercise(
    db: AsyncSession,
    user_id: str,
    attempt_id: str,
    reps_completed: int,
) -> CompletionResult:
    """Complete an attempt and pay out the exercise's catalog reward.

    Raises:
        NotFoundOrAlreadyCompleted: no Started attempt with this id belongs to the user.
        ExerciseCatalogMissing: the attempt's exercise is gone from the catalog.
    """
    if reps_completed < 0:
        msg = "reps_completed must be non-negative"
        raise ValueError(msg)

    try:
        async with unit_of_work(db):
            exercise_id = await mark_completed(db, attempt_id, user_id, reps_completed)
            if exercise_id is None:
                raise NotFoundOrAlreadyCompleted

            reward = await get_exercise_reward(db, exercise_id)
            if reward is None:
                raise ExerciseCatalogMissing

            row = await stamp_tokens_earned(db, attempt_id, reward)
            new_balance = await credit(db, user_id, reward, count_exercise=True)
    except NotFoundOrAlreadyCompleted:
        try:
            reason = await explain_rejected_completion(db, attempt_id, user_id)
        except SQLAlchemyError:
            logger.warning("completion_diagnosis_failed", user_id=user_id, attempt_id=attempt_id, exc_info=True)
            reason = "unknown"
        finally:
            await db.rollback()
        logger.info(
            "exercise_completion_rejected",
            user_id=user_id,
            attempt_id=attempt_id,
            reason=reason,
        )
        raise
    except ExerciseCatalogMissing:
        logger.error("exercise_catalog_missing", user_id=user_id, attempt_id=attempt_id)
        raise

    logger.info(
        "exercise_completed",
        user_id=user_id,
        attempt_id=attempt_id,
        exercise_id=exercise_id,
        tokens_earned=reward,
        new_balance=new_balance,
    )
    return CompletionResult(
        attempt=CompletedAttempt(**row._asdict()),
        tokens_earned=reward,
        new_balance=new_balance,
    )


# ---------------------------------------------------------------------------
# Purchases
# ---------------------------------------------------------------------------


async def _debit_or_raise(db: AsyncSession, user_id: str, cost: int) -> int:
    new_balance = await conditional_debit(db, user_id, cost)
    if new_balance is not None:
        return new_balance
    # The debit matched nothing; find out whether the user exists at all.
    if await get_balance(db, user_id) is None:
        raise UserNotFound
    raise InsufficientFunds


async def _owns_problem(db: AsyncSession, user_id: str, problem_id: str) -> bool:
    result = await db.execute(
        select(Problem.id).where(Problem.id == problem_id, Problem.user_id == user_id)
    )
    return result.first() is not None


async def purchase_solution(
    db: AsyncSession,
    user_id: str,
    solution_id: str,
    problem_id: str | None = None,
) -> PurchaseResult:
    """Unlock a solution for its catalog price.

    Raises:
        SolutionNotFound, ProblemNotFound, UserNotFound, InsufficientFunds, AlreadyOwned.
    """
    try:
        async with unit_of_work(db):
            result = await db.execute(select(Solution.token_cost).where(Solution.id == solution_id))
            cost = result.scalar_one_or_none()
            if cost is None:
                raise SolutionNotFound

            if problem_id is not None and not await _owns_problem(db, user_id, problem_id):
                raise ProblemNotFound

            new_balance = await _debit_or_raise(db, user_id, cost)
            await grant_solution(db, user_id, solution_id, cost, problem_id=problem_id)
    except StudyBuddyError as exc:
        logger.info(
            "purchase_rejected",
            kind="solution",
            user_id=user_id,
            item_id=solution_id,
            reason=exc.code,
        )
        raise

    logger.info(
        "solution_purchased",
        user_id=user_id,
        solution_id=solution_id,
        tokens_spent=cost,
        new_balance=new_balance,
    )
    return PurchaseResult(item_id=solution_id, tokens_spent=cost, new_balance=new_balance)


async def purchase_shop_item(
    db: AsyncSession,
    user_id: str,
    item_id: str,
) -> PurchaseResult:
    """Buy a shop item for the price held in the server catalog.

    Raises:
        ItemNotFound, UserNotFound, InsufficientFunds, AlreadyOwned.
    """
    item = get_shop_item(item_id)
    if item is None:
        logger.info("purchase_rejected", kind="shop", user_id=user_id, item_id=item_id, reason=ItemNotFound.code)
        raise ItemNotFound

    try:
        async with unit_of_work(db):
            new_balance = await _debit_or_raise(db, user_id, item.token_cost)
            await grant_shop_item(db, user_id, item_id, item.title, item.token_cost)
    except StudyBuddyError as exc:
        logger.info(
            "purchase_rejected",
            kind="shop",
            user_id=user_id,
            item_id=item_id,
            reason=exc.code,
        )
        raise

    logger.info(
        "shop_item_purchased",
        user_id=user_id,
        item_id=item_id,
        tokens_spent=item.token_cost,
        new_balance=new_balance,
    )
    return PurchaseResult(item_id=item_id, tokens_spent=item.token_cost, new_balance=new_balance)
