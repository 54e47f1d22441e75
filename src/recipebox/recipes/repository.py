"""Repository for recipes and users' saved-recipe collections."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from recipebox.exceptions import RecipeNotFoundError, SavedRecipeNotFoundError
from recipebox.logging_config import get_logger
from recipebox.models import Recipe, SavedRecipe
from recipebox.schemas import RecipeDraft

logger = get_logger(__name__)


class RecipeRepository:
    """Storage for recipe records and saved-recipe links."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_recipe(self, recipe_id: str) -> Recipe:
        recipe = await self.session.get(Recipe, recipe_id)
        if recipe is None:
            raise RecipeNotFoundError(recipe_id)
        return recipe

    async def save_recipe(
        self, user_id: str, draft: RecipeDraft, is_custom: bool = False
    ) -> tuple[Recipe, SavedRecipe]:
        """
        Store a recipe and add it to the user's collection.

        Both rows are written in the same transaction.
        """
        recipe = Recipe(
            title=draft.title,
            description=draft.description,
            ingredients=draft.ingredients,
            instructions=draft.instructions,
            prep_time=draft.prep_time,
            cook_time=draft.cook_time,
            servings=draft.servings,
            difficulty=draft.difficulty,
            category=draft.category,
            is_custom=is_custom,
        )
        saved = SavedRecipe(user_id=user_id, recipe=recipe)
        self.session.add_all([recipe, saved])
        await self.session.commit()

        logger.info(f"Saved recipe {recipe.id} ('{recipe.title}') for user {user_id}")
        return recipe, saved

    async def list_saved(self, user_id: str) -> list[SavedRecipe]:
        """Get a user's saved recipes, most recently saved first."""
        result = await self.session.execute(
            select(SavedRecipe)
            .options(selectinload(SavedRecipe.recipe))
            .where(SavedRecipe.user_id == user_id)
            .order_by(SavedRecipe.saved_at.desc())
        )
        return list(result.scalars().all())

    async def delete_saved(self, saved_id: str, user_id: str) -> None:
        """Remove a recipe from the user's collection; the recipe itself stays."""
        result = await self.session.execute(
            select(SavedRecipe).where(SavedRecipe.id == saved_id, SavedRecipe.user_id == user_id)
        )
        saved = result.scalar_one_or_none()
        if saved is None:
            raise SavedRecipeNotFoundError(saved_id)

        await self.session.delete(saved)
        await self.session.commit()
        logger.info(f"Removed saved recipe {saved_id} for user {user_id}")
