"""ORM models for users, catalogs, attempts and entitlements.

Column names match the 001_initial_schema migration. Primary keys are
UUID strings so ids can be issued by clients (anonymous users) or by the
database alike.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from studybuddy.db.base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class User(Base):
    """Maps to the 'users' table. Holds the token balance."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("tokens >= 0", name="users_tokens_non_negative"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    email: Mapped[str | None] = mapped_column(String(320), unique=True, nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(64), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(64), nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    tokens: Mapped[int] = mapped_column(Integer, nullable=False, default=100, server_default="100")
    total_exercises: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    total_problems: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=_utcnow, server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=_utcnow, server_default=func.now())


# ---------------------------------------------------------------------------
# Problems (OCR results)
# ---------------------------------------------------------------------------


class Problem(Base):
    """A photographed problem and its OCR text."""

    __tablename__ = "problems"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    ocr_text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=_utcnow, server_default=func.now())


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------


class Solution(Base):
    """Solution catalog row. ``content`` is only served to owners."""

    __tablename__ = "solutions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    difficulty: Mapped[str] = mapped_column(String(16), nullable=False)  # beginner | intermediate | advanced
    token_cost: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False)
    similarity: Mapped[int] = mapped_column(Integer, nullable=False, default=100, server_default="100")
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=_utcnow, server_default=func.now())


class Exercise(Base):
    """Exercise catalog row. ``token_reward`` is the only source of reward amounts."""

    __tablename__ = "exercises"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    token_reward: Mapped[int] = mapped_column(Integer, nullable=False)
    difficulty: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-3
    estimated_time: Mapped[str] = mapped_column(String(32), nullable=False)
    instructions: Mapped[list[str]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list
    )
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=_utcnow, server_default=func.now())


# ---------------------------------------------------------------------------
# Exercise attempts
# ---------------------------------------------------------------------------


class UserExercise(Base):
    """One row per started exercise. ``completed`` flips false -> true exactly once."""

    __tablename__ = "user_exercises"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    exercise_id: Mapped[str] = mapped_column(String(36), ForeignKey("exercises.id"), nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    reps_completed: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    tokens_earned: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=_utcnow, server_default=func.now())


# ---------------------------------------------------------------------------
# Entitlements
# ---------------------------------------------------------------------------


class UserSolution(Base):
    """Purchased solution. At most one row per (user, solution)."""

    __tablename__ = "user_solutions"
    __table_args__ = (
        UniqueConstraint("user_id", "solution_id", name="user_solutions_user_solution_unique"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
    solution_id: Mapped[str] = mapped_column(String(36), ForeignKey("solutions.id"), nullable=False)
    problem_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("problems.id"), nullable=True)
    tokens_spent: Mapped[int] = mapped_column(Integer, nullable=False)
    accessed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=_utcnow, server_default=func.now())


class ShopPurchase(Base):
    """Purchased shop item. At most one row per (user, item)."""

    __tablename__ = "shop_purchases"
    __table_args__ = (
        UniqueConstraint("user_id", "item_id", name="shop_purchases_user_item_unique"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
    item_id: Mapped[str] = mapped_column(String(32), nullable=False)
    item_title: Mapped[str] = mapped_column(Text, nullable=False)
    tokens_spent: Mapped[int] = mapped_column(Integer, nullable=False)
    purchased_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=_utcnow, server_default=func.now())
