"""Initial schema: users, problems, catalogs, attempts, entitlements.

Creates users (with the non-negative balance check), problems, solutions,
exercises, user_exercises, user_solutions and shop_purchases. The unique
constraints on user_solutions and shop_purchases are the duplicate-purchase
guard used by the purchase transactions.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18
"""

from collections.abc import Sequence

from alembic import op

revision: str = "001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # --- Users ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id VARCHAR(36) PRIMARY KEY,
            email VARCHAR(320) UNIQUE,
            first_name VARCHAR(64),
            last_name VARCHAR(64),
            profile_image_url TEXT,
            tokens INTEGER NOT NULL DEFAULT 100,
            total_exercises INTEGER NOT NULL DEFAULT 0,
            total_problems INTEGER NOT NULL DEFAULT 0,
            streak INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMPTZ DEFAULT NOW(),
            updated_at TIMESTAMPTZ DEFAULT NOW(),
            CONSTRAINT users_tokens_non_negative CHECK (tokens >= 0)
        )
    """)

    # --- Problems ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS problems (
            id VARCHAR(36) PRIMARY KEY,
            user_id VARCHAR(36) NOT NULL REFERENCES users(id),
            image_url TEXT,
            ocr_text TEXT NOT NULL,
            created_at TIMESTAMPTZ DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS ix_problems_user_id ON problems(user_id)")

    # --- Solution catalog ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS solutions (
            id VARCHAR(36) PRIMARY KEY,
            title TEXT NOT NULL,
            description TEXT NOT NULL,
            difficulty VARCHAR(16) NOT NULL,
            token_cost INTEGER NOT NULL,
            content TEXT NOT NULL,
            category VARCHAR(64) NOT NULL,
            similarity INTEGER NOT NULL DEFAULT 100,
            created_at TIMESTAMPTZ DEFAULT NOW()
        )
    """)

    # --- Exercise catalog ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS exercises (
            id VARCHAR(36) PRIMARY KEY,
            name TEXT NOT NULL,
            description TEXT NOT NULL,
            reps INTEGER NOT NULL,
            token_reward INTEGER NOT NULL,
            difficulty INTEGER NOT NULL,
            estimated_time VARCHAR(32) NOT NULL,
            instructions JSONB NOT NULL DEFAULT '[]',
            created_at TIMESTAMPTZ DEFAULT NOW()
        )
    """)

    # --- Exercise attempts ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS user_exercises (
            id VARCHAR(36) PRIMARY KEY,
            user_id VARCHAR(36) NOT NULL REFERENCES users(id),
            exercise_id VARCHAR(36) NOT NULL REFERENCES exercises(id),
            completed BOOLEAN NOT NULL DEFAULT false,
            reps_completed INTEGER NOT NULL DEFAULT 0,
            tokens_earned INTEGER NOT NULL DEFAULT 0,
            completed_at TIMESTAMPTZ,
            created_at TIMESTAMPTZ DEFAULT NOW()
        )
    """)
    op.execute("CREATE INDEX IF NOT EXISTS ix_user_exercises_user_id ON user_exercises(user_id)")

    # --- Solution entitlements ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS user_solutions (
            id VARCHAR(36) PRIMARY KEY,
            user_id VARCHAR(36) NOT NULL REFERENCES users(id),
            solution_id VARCHAR(36) NOT NULL REFERENCES solutions(id),
            problem_id VARCHAR(36) REFERENCES problems(id),
            tokens_spent INTEGER NOT NULL,
            accessed_at TIMESTAMPTZ DEFAULT NOW(),
            CONSTRAINT user_solutions_user_solution_unique UNIQUE (user_id, solution_id)
        )
    """)

    # --- Shop purchases ---
    op.execute("""
        CREATE TABLE IF NOT EXISTS shop_purchases (
            id VARCHAR(36) PRIMARY KEY,
            user_id VARCHAR(36) NOT NULL REFERENCES users(id),
            item_id VARCHAR(32) NOT NULL,
            item_title TEXT NOT NULL,
            tokens_spent INTEGER NOT NULL,
            purchased_at TIMESTAMPTZ DEFAULT NOW(),
            CONSTRAINT shop_purchases_user_item_unique UNIQUE (user_id, item_id)
        )
    """)


def downgrade() -> None:
    for table in [
        "shop_purchases",
        "user_solutions",
        "user_exercises",
        "exercises",
        "solutions",
        "problems",
        "users",
    ]:
        op.execute(f"DROP TABLE IF EXISTS {table} CASCADE")  # noqa: S608
