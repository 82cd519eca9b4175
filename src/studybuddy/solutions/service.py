"""Solution catalog reads and gated content access."""

from __future__ import annotations

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.db.models import Solution
from studybuddy.economy.entitlements import owns_solution
from studybuddy.economy.errors import EntitlementRequired, SolutionNotFound


async def list_solutions(
    db: AsyncSession,
    query: str | None = None,
    category: str | None = None,
) -> list[Solution]:
    """Catalog listing, best match first."""
    stmt = select(Solution)
    if query:
        pattern = f"%{query.strip()}%"
        stmt = stmt.where(or_(Solution.title.ilike(pattern), Solution.description.ilike(pattern)))
    if category:
        stmt = stmt.where(Solution.category == category.lower())
    stmt = stmt.order_by(Solution.similarity.desc(), Solution.token_cost.asc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_owned_solution(db: AsyncSession, user_id: str, solution_id: str) -> Solution:
    """Return a solution with its content, only to a user who bought it.

    Ownership is checked first so unowned ids reveal nothing about the catalog.
    """
    if not await owns_solution(db, user_id, solution_id):
        raise EntitlementRequired
    solution = await db.get(Solution, solution_id)
    if solution is None:
        raise SolutionNotFound
    return solution
