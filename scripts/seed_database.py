#!/usr/bin/env python
"""
Database seeding script for initial data population.

This script is designed to run when the Docker infrastructure starts up.
It will:

1. Wait for PostgreSQL to accept connections
2. Create the tables if they don't exist
3. Create the admin user if it doesn't exist
4. Create the sample recipes that are not already present (matched by title)

Run with: python scripts/seed_database.py

Environment Variables:
    ADMIN_EMAIL: Email of the admin account (default: admin@recipebox.local)
    DATABASE_URL: PostgreSQL connection string
"""

import asyncio
import sys

from sqlalchemy import select, text

from recipebox.config import get_settings
from recipebox.database import AsyncSessionLocal, Base, async_engine
from recipebox.logging_config import configure_logging, get_logger
from recipebox.models import Recipe, User

configure_logging()
logger = get_logger(__name__)

SAMPLE_RECIPES = [
    {
        "title": "Easy Spaghetti Bolognese",
        "description": "A classic Italian pasta dish that kids and adults love!",
        "ingredients": [
            "400g spaghetti",
            "500g ground beef",
            "1 onion, diced",
            "2 garlic cloves, minced",
            "800g canned tomatoes",
            "Salt and pepper to taste",
            "Parmesan cheese for serving",
        ],
        "instructions": [
            "Cook spaghetti according to package directions",
            "Brown the ground beef in a large pan",
            "Add onion and garlic, cook until soft",
            "Add canned tomatoes and simmer for 20 minutes",
            "Season with salt and pepper",
            "Serve over spaghetti with parmesan cheese",
        ],
        "prep_time": 15,
        "cook_time": 30,
        "servings": 4,
        "difficulty": "BEGINNER",
        "category": "Pasta",
    },
    {
        "title": "Chicken Stir Fry",
        "description": "A quick and healthy dinner packed with vegetables",
        "ingredients": [
            "500g chicken breast, sliced",
            "2 cups mixed vegetables",
            "3 tbsp soy sauce",
            "2 tbsp vegetable oil",
            "1 tbsp ginger, minced",
            "2 garlic cloves, minced",
            "Rice for serving",
        ],
        "instructions": [
            "Heat oil in a wok or large pan",
            "Cook chicken until browned",
            "Add vegetables, ginger, and garlic",
            "Stir fry for 5 minutes",
            "Add soy sauce and cook for 2 more minutes",
            "Serve over rice",
        ],
        "prep_time": 10,
        "cook_time": 15,
        "servings": 4,
        "difficulty": "BEGINNER",
        "category": "Asian",
    },
    {
        "title": "Homemade Pizza",
        "description": "Make your own delicious pizza from scratch!",
        "ingredients": [
            "500g pizza dough",
            "200ml pizza sauce",
            "300g mozzarella cheese",
            "Your favorite toppings",
            "Olive oil",
            "Italian herbs",
        ],
        "instructions": [
            "Preheat oven to 220°C (425°F)",
            "Roll out pizza dough",
            "Spread pizza sauce evenly",
            "Add cheese and toppings",
            "Drizzle with olive oil",
            "Bake for 12-15 minutes until golden",
        ],
        "prep_time": 20,
        "cook_time": 15,
        "servings": 2,
        "difficulty": "INTERMEDIATE",
        "category": "Italian",
    },
]


async def wait_for_postgres(max_retries: int = 30, retry_delay: int = 2) -> bool:
    """Wait for PostgreSQL to be available."""
    logger.info("Waiting for PostgreSQL to be ready...")

    for attempt in range(max_retries):
        try:
            async with async_engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("PostgreSQL is ready")
            return True
        except Exception as e:
            logger.debug(f"PostgreSQL not ready (attempt {attempt + 1}/{max_retries}): {e}")
            await asyncio.sleep(retry_delay)

    logger.error("PostgreSQL did not become ready in time")
    return False


async def init_database() -> None:
    """Initialize database tables."""
    logger.info("Initializing database tables...")
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized")


async def create_admin_user(admin_email: str) -> bool:
    """Create the admin account if it doesn't exist. Returns True if created."""
    async with AsyncSessionLocal() as session:
        existing = await session.scalar(select(User).where(User.email == admin_email))
        if existing is not None:
            logger.info(f"Admin user already exists: {admin_email}")
            return False

        session.add(User(email=admin_email, name="Admin User", role="ADMIN"))
        await session.commit()

    logger.info(f"Admin user created: {admin_email}")
    return True


async def create_sample_recipes() -> int:
    """Create sample recipes whose titles are not yet taken."""
    created = 0
    async with AsyncSessionLocal() as session:
        for data in SAMPLE_RECIPES:
            existing = await session.scalar(
                select(Recipe.id).where(Recipe.title == data["title"]).limit(1)
            )
            if existing is not None:
                continue

            session.add(Recipe(**data))
            created += 1
            logger.info(f"Created recipe: {data['title']}")

        await session.commit()

    return created


async def seed_database() -> dict:
    """
    Main seeding function.

    Returns:
        Dictionary with seeding results.
    """
    results = {
        "status": "unknown",
        "admin_created": False,
        "recipes_created": 0,
    }

    if not await wait_for_postgres():
        results["status"] = "failed"
        results["error"] = "PostgreSQL not available"
        return results

    try:
        await init_database()
        results["admin_created"] = await create_admin_user(get_settings().admin_email)
        results["recipes_created"] = await create_sample_recipes()
    finally:
        await async_engine.dispose()

    results["status"] = "completed"
    logger.info(f"Seeding completed: {results}")
    return results


def main():
    """Entry point for the seed script."""
    logger.info("=" * 60)
    logger.info("Database Seeding Script")
    logger.info("=" * 60)

    try:
        results = asyncio.run(seed_database())

        logger.info("Seeding Results:")
        for key, value in results.items():
            logger.info(f"  {key}: {value}")

        sys.exit(0 if results["status"] == "completed" else 1)

    except KeyboardInterrupt:
        logger.info("Seeding interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.exception(f"Seeding failed with error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
