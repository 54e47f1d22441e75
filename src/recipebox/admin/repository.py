"""Aggregate queries for the admin dashboard."""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from recipebox.models import Recipe, SavedRecipe, ShoppingList, User


@dataclass
class PlatformStats:
    """Platform-wide record counts."""

    total_users: int = 0
    total_recipes: int = 0
    total_shopping_lists: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass
class UserSummary:
    id: str
    name: str | None
    email: str
    role: str
    skill_level: str | None
    created_at: datetime
    saved_recipes: int


@dataclass
class RecipeSummary:
    id: str
    title: str
    description: str | None
    difficulty: str | None
    created_at: datetime
    saves: int


class AdminRepository:
    """Read-only queries over users, recipes and shopping lists."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_stats(self) -> PlatformStats:
        return PlatformStats(
            total_users=await self._count(User.id),
            total_recipes=await self._count(Recipe.id),
            total_shopping_lists=await self._count(ShoppingList.id),
        )

    async def recent_users(self, limit: int = 10) -> list[UserSummary]:
        """Newest users with the number of recipes each has saved."""
        saved_count = (
            select(func.count(SavedRecipe.id))
            .where(SavedRecipe.user_id == User.id)
            .correlate(User)
            .scalar_subquery()
        )
        result = await self.session.execute(
            select(User, saved_count).order_by(User.created_at.desc()).limit(limit)
        )
        return [
            UserSummary(
                id=user.id,
                name=user.name,
                email=user.email,
                role=user.role,
                skill_level=user.skill_level,
                created_at=user.created_at,
                saved_recipes=count or 0,
            )
            for user, count in result.all()
        ]

    async def recent_recipes(self, limit: int = 10) -> list[RecipeSummary]:
        """Newest recipes with how many users saved each."""
        save_count = (
            select(func.count(SavedRecipe.id))
            .where(SavedRecipe.recipe_id == Recipe.id)
            .correlate(Recipe)
            .scalar_subquery()
        )
        result = await self.session.execute(
            select(Recipe, save_count).order_by(Recipe.created_at.desc()).limit(limit)
        )
        return [
            RecipeSummary(
                id=recipe.id,
                title=recipe.title,
                description=recipe.description,
                difficulty=recipe.difficulty,
                created_at=recipe.created_at,
                saves=count or 0,
            )
            for recipe, count in result.all()
        ]

    async def _count(self, column: Any) -> int:
        return await self.session.scalar(select(func.count(column))) or 0
