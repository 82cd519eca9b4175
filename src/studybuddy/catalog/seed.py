"""Catalog seed data: exercises and solutions shipped with the app."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.db.models import Exercise, Solution

logger = logging.getLogger(__name__)

SOLUTION_SEED_DATA: list[dict] = [
    {
        "title": "Quadratic Equation Solution",
        "description": "Solving quadratic equations using factorization method",
        "difficulty": "intermediate",
        "token_cost": 10,
        "content": "To solve x² - 5x + 6 = 0, we factor: (x-2)(x-3) = 0, so x = 2 or x = 3",
        "category": "algebra",
        "similarity": 95,
    },
    {
        "title": "Basic Quadratic Concepts",
        "description": "Introduction to quadratic equations and the quadratic formula",
        "difficulty": "beginner",
        "token_cost": 8,
        "content": "Basic concepts and quadratic formula application",
        "category": "algebra",
        "similarity": 87,
    },
    {
        "title": "Advanced Quadratic Methods",
        "description": "Complex quadratic equations with multiple methods and graphical interpretation",
        "difficulty": "advanced",
        "token_cost": 15,
        "content": "Advanced methods including completing the square and graphical analysis",
        "category": "algebra",
        "similarity": 82,
    },
]

EXERCISE_SEED_DATA: list[dict] = [
    # Upper body
    {
        "name": "Push-ups",
        "description": "Classic upper body strengthening exercise",
        "reps": 10,
        "token_reward": 10,
        "difficulty": 1,
        "estimated_time": "2-3 minutes",
        "instructions": [
            "Place hands shoulder-width apart",
            "Keep body in straight line",
            "Lower chest to floor",
            "Push back up maintaining form",
        ],
    },
    {
        "name": "Wall Push-ups",
        "description": "Beginner-friendly upper body exercise",
        "reps": 15,
        "token_reward": 8,
        "difficulty": 1,
        "estimated_time": "2-3 minutes",
        "instructions": [
            "Stand arm's length from wall",
            "Place palms flat against wall",
            "Lean in and push back out",
            "Keep body straight throughout",
        ],
    },
    {
        "name": "Pike Push-ups",
        "description": "Advanced shoulder and tricep exercise",
        "reps": 8,
        "token_reward": 15,
        "difficulty": 3,
        "estimated_time": "3-4 minutes",
        "instructions": [
            "Start in downward dog position",
            "Walk feet closer to hands",
            "Lower head toward floor",
            "Push back up focusing on shoulders",
        ],
    },
    # Lower body
    {
        "name": "Squats",
        "description": "Fundamental lower body strengthening",
        "reps": 15,
        "token_reward": 12,
        "difficulty": 2,
        "estimated_time": "3-4 minutes",
        "instructions": [
            "Stand with feet shoulder-width apart",
            "Lower down as if sitting",
            "Keep knees behind toes",
            "Drive through heels to stand",
        ],
    },
    {
        "name": "Lunges",
        "description": "Single-leg strength and balance exercise",
        "reps": 10,
        "token_reward": 14,
        "difficulty": 2,
        "estimated_time": "4-5 minutes",
        "instructions": [
            "Step forward into lunge position",
            "Lower back knee toward ground",
            "Keep front knee over ankle",
            "Alternate legs each rep",
        ],
    },
    {
        "name": "Calf Raises",
        "description": "Lower leg strengthening exercise",
        "reps": 20,
        "token_reward": 8,
        "difficulty": 1,
        "estimated_time": "2-3 minutes",
        "instructions": [
            "Stand with feet hip-width apart",
            "Rise up onto toes",
            "Hold briefly at the top",
            "Lower slowly with control",
        ],
    },
    {
        "name": "Jump Squats",
        "description": "Explosive lower body power exercise",
        "reps": 12,
        "token_reward": 18,
        "difficulty": 3,
        "estimated_time": "3-4 minutes",
        "instructions": [
            "Start in squat position",
            "Jump up explosively",
            "Land softly back in squat",
            "Maintain good form throughout",
        ],
    },
    # Core
    {
        "name": "Plank",
        "description": "Core stability and strength hold",
        "reps": 30,
        "token_reward": 15,
        "difficulty": 2,
        "estimated_time": "3-4 minutes",
        "instructions": [
            "Start in push-up position",
            "Lower to forearms",
            "Keep body straight",
            "Hold for specified seconds",
        ],
    },
    {
        "name": "Mountain Climbers",
        "description": "Dynamic core and cardio exercise",
        "reps": 20,
        "token_reward": 16,
        "difficulty": 2,
        "estimated_time": "3-4 minutes",
        "instructions": [
            "Start in plank position",
            "Bring one knee to chest",
            "Quickly switch legs",
            "Keep hips level throughout",
        ],
    },
    {
        "name": "Russian Twists",
        "description": "Rotational core strengthening",
        "reps": 16,
        "token_reward": 12,
        "difficulty": 2,
        "estimated_time": "3-4 minutes",
        "instructions": [
            "Sit with knees bent",
            "Lean back slightly",
            "Rotate torso side to side",
            "Keep core engaged throughout",
        ],
    },
    # Full body & cardio
    {
        "name": "Jumping Jacks",
        "description": "Full body cardio and coordination",
        "reps": 20,
        "token_reward": 10,
        "difficulty": 1,
        "estimated_time": "2-3 minutes",
        "instructions": [
            "Start with feet together",
            "Jump while spreading legs",
            "Raise arms overhead",
            "Return to starting position",
        ],
    },
    {
        "name": "Burpees",
        "description": "Ultimate full-body conditioning exercise",
        "reps": 8,
        "token_reward": 25,
        "difficulty": 3,
        "estimated_time": "4-5 minutes",
        "instructions": [
            "Start standing",
            "Drop to squat, hands on floor",
            "Jump feet back to plank",
            "Do push-up, jump feet forward, jump up",
        ],
    },
    {
        "name": "High Knees",
        "description": "Cardio exercise for leg strength and endurance",
        "reps": 30,
        "token_reward": 12,
        "difficulty": 2,
        "estimated_time": "3-4 minutes",
        "instructions": [
            "Run in place",
            "Bring knees up to waist height",
            "Pump arms naturally",
            "Land on balls of feet",
        ],
    },
    # Mobility
    {
        "name": "Arm Circles",
        "description": "Shoulder mobility and warm-up exercise",
        "reps": 20,
        "token_reward": 6,
        "difficulty": 1,
        "estimated_time": "2-3 minutes",
        "instructions": [
            "Extend arms to sides",
            "Make small circles forward",
            "Then make circles backward",
            "Keep movements controlled",
        ],
    },
    {
        "name": "Leg Swings",
        "description": "Hip mobility and warm-up exercise",
        "reps": 15,
        "token_reward": 7,
        "difficulty": 1,
        "estimated_time": "2-3 minutes",
        "instructions": [
            "Hold onto wall for support",
            "Swing one leg forward and back",
            "Keep movements controlled",
            "Switch legs after completing reps",
        ],
    },
]


async def _table_is_empty(db: AsyncSession, model: type[Exercise] | type[Solution]) -> bool:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one() == 0


async def seed_catalog(db: AsyncSession) -> dict[str, int]:
    """Insert the built-in catalogs into empty tables. Idempotent.

    Returns the number of rows inserted per catalog.
    """
    inserted = {"exercises": 0, "solutions": 0}

    if await _table_is_empty(db, Exercise):
        db.add_all(Exercise(**data) for data in EXERCISE_SEED_DATA)
        inserted["exercises"] = len(EXERCISE_SEED_DATA)

    if await _table_is_empty(db, Solution):
        db.add_all(Solution(**data) for data in SOLUTION_SEED_DATA)
        inserted["solutions"] = len(SOLUTION_SEED_DATA)

    await db.commit()
    if any(inserted.values()):
        logger.info("Seeded catalog: %d exercises, %d solutions", inserted["exercises"], inserted["solutions"])
    return inserted
