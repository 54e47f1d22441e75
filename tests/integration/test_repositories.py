"""Integration tests for the repositories against PostgreSQL.

Run with:
    pytest tests/integration/test_repositories.py -v -m integration

Requirements:
    - PostgreSQL database (use Docker: docker-compose up -d db)
"""

import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from recipebox.admin.repository import AdminRepository
from recipebox.database import Base
from recipebox.exceptions import (
    RecipeNotFoundError,
    SavedRecipeNotFoundError,
    ShoppingListAccessError,
    ShoppingListItemNotFoundError,
    ShoppingListNotFoundError,
)
from recipebox.models import Recipe, SavedRecipe, ShoppingListItem, User
from recipebox.recipes.repository import RecipeRepository
from recipebox.schemas import RecipeDraft
from recipebox.shopping.importer import NewShoppingListItem, import_ingredients
from recipebox.shopping.repository import ShoppingListRepository
from recipebox.users.repository import UserRepository

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def session(database_url):
    """Session on a freshly created schema, dropped after the test."""
    engine = create_async_engine(database_url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def users(session):
    cook = User(id="user-1", email="cook@example.com", name="Cook")
    other = User(id="user-2", email="other@example.com", name="Other")
    session.add_all([cook, other])
    await session.commit()
    return cook, other


@pytest_asyncio.fixture
async def recipe(session):
    recipe = Recipe(
        title="Chicken Stir Fry",
        ingredients=["500g chicken breast, sliced", "3 tbsp soy sauce", "Rice for serving"],
        instructions=["Cook chicken", "Add sauce"],
        difficulty="BEGINNER",
    )
    session.add(recipe)
    await session.commit()
    return recipe


class TestShoppingListRepository:
    """Tests for ShoppingListRepository."""

    @pytest.mark.asyncio
    async def test_import_recipe(self, session, users, recipe):
        repo = ShoppingListRepository(session)
        shopping_list = await repo.create_list("user-1", "Groceries")

        count = await import_ingredients(recipe.ingredients, shopping_list.id, recipe.id, repo)

        assert count == 3
        stored = await repo.get_owned_list(shopping_list.id, "user-1")
        assert [(i.quantity, i.ingredient) for i in stored.items] == [
            ("500g", "chicken breast, sliced"),
            ("3 tbsp", "soy sauce"),
            (None, "Rice for serving"),
        ]
        assert [i.position for i in stored.items] == [0, 1, 2]
        assert all(i.recipe_id == recipe.id for i in stored.items)
        assert not any(i.checked for i in stored.items)

    @pytest.mark.asyncio
    async def test_import_appends_after_existing_items(self, session, users, recipe):
        repo = ShoppingListRepository(session)
        shopping_list = await repo.create_list("user-1", "Groceries")
        await repo.add_item(shopping_list.id, "user-1", "milk", "1 l")

        await import_ingredients(["2 eggs"], shopping_list.id, recipe.id, repo)

        stored = await repo.get_owned_list(shopping_list.id, "user-1")
        assert [i.ingredient for i in stored.items] == ["milk", "eggs"]
        assert [i.position for i in stored.items] == [0, 1]

    @pytest.mark.asyncio
    async def test_failed_batch_writes_nothing(self, session, users):
        """Test that a batch with an invalid list ID is rolled back entirely."""
        repo = ShoppingListRepository(session)
        shopping_list = await repo.create_list("user-1", "Groceries")

        with pytest.raises(IntegrityError):
            await repo.create_items(
                [
                    NewShoppingListItem(shopping_list.id, None, "eggs", "2"),
                    NewShoppingListItem("missing-list", None, "flour", "1 cup"),
                ]
            )

        result = await session.execute(select(ShoppingListItem))
        assert result.scalars().all() == []

    @pytest.mark.asyncio
    async def test_ownership(self, session, users):
        repo = ShoppingListRepository(session)
        shopping_list = await repo.create_list("user-1", "Groceries")

        with pytest.raises(ShoppingListAccessError):
            await repo.get_owned_list(shopping_list.id, "user-2")
        with pytest.raises(ShoppingListNotFoundError):
            await repo.get_owned_list("missing", "user-1")

    @pytest.mark.asyncio
    async def test_copy_list_unchecks_items(self, session, users):
        repo = ShoppingListRepository(session)
        shopping_list = await repo.create_list("user-1", "Groceries")
        item = await repo.add_item(shopping_list.id, "user-1", "bread")
        await repo.set_item_checked(item.id, "user-1", True)

        copy = await repo.copy_list(shopping_list.id, "user-1")

        assert copy.name == "Groceries (Copy)"
        assert [(i.ingredient, i.checked) for i in copy.items] == [("bread", False)]

    @pytest.mark.asyncio
    async def test_items_of_other_users_are_hidden(self, session, users):
        repo = ShoppingListRepository(session)
        shopping_list = await repo.create_list("user-1", "Groceries")
        item = await repo.add_item(shopping_list.id, "user-1", "bread")

        with pytest.raises(ShoppingListItemNotFoundError):
            await repo.delete_item(item.id, "user-2")

    @pytest.mark.asyncio
    async def test_delete_list_cascades(self, session, users):
        repo = ShoppingListRepository(session)
        shopping_list = await repo.create_list("user-1", "Groceries")
        await repo.add_item(shopping_list.id, "user-1", "bread")

        await repo.delete_list(shopping_list.id, "user-1")

        assert await repo.list_for_user("user-1") == []
        result = await session.execute(select(ShoppingListItem))
        assert result.scalars().all() == []


class TestRecipeRepository:
    """Tests for RecipeRepository."""

    @pytest.mark.asyncio
    async def test_save_and_list(self, session, users):
        repo = RecipeRepository(session)
        draft = RecipeDraft(title="Pancakes", ingredients=["2 cups flour", "", "2 eggs"])

        recipe, saved = await repo.save_recipe("user-1", draft)

        assert recipe.ingredients == ["2 cups flour", "2 eggs"]
        listed = await repo.list_saved("user-1")
        assert [s.id for s in listed] == [saved.id]
        assert listed[0].recipe.title == "Pancakes"
        assert await repo.list_saved("user-2") == []

    @pytest.mark.asyncio
    async def test_delete_saved_keeps_recipe(self, session, users):
        repo = RecipeRepository(session)
        recipe, saved = await repo.save_recipe("user-1", RecipeDraft(title="Soup"))

        with pytest.raises(SavedRecipeNotFoundError):
            await repo.delete_saved(saved.id, "user-2")

        await repo.delete_saved(saved.id, "user-1")

        assert await repo.list_saved("user-1") == []
        assert (await repo.get_recipe(recipe.id)).title == "Soup"
        assert await session.scalar(select(SavedRecipe.id)) is None

    @pytest.mark.asyncio
    async def test_get_missing_recipe(self, session):
        with pytest.raises(RecipeNotFoundError):
            await RecipeRepository(session).get_recipe("missing")


class TestUserAndAdminRepositories:
    @pytest.mark.asyncio
    async def test_update_settings(self, session, users):
        repo = UserRepository(session)

        user = await repo.update_settings("user-1", dietary_restrictions=["vegetarian"])

        assert user.dietary_restrictions == ["vegetarian"]
        assert user.name == "Cook"

    @pytest.mark.asyncio
    async def test_update_unknown_field(self, session, users):
        with pytest.raises(ValueError):
            await UserRepository(session).update_settings("user-1", role="ADMIN")

    @pytest.mark.asyncio
    async def test_dashboard_counts(self, session, users, recipe):
        await RecipeRepository(session).save_recipe("user-1", RecipeDraft(title="Soup"))
        await ShoppingListRepository(session).create_list("user-2", "Weekend")
        repo = AdminRepository(session)

        stats = await repo.get_stats()
        recent_users = await repo.recent_users()
        recent_recipes = await repo.recent_recipes()

        assert stats.to_dict() == {
            "total_users": 2,
            "total_recipes": 2,
            "total_shopping_lists": 1,
        }
        saves = {u.id: u.saved_recipes for u in recent_users}
        assert saves == {"user-1": 1, "user-2": 0}
        assert {r.title: r.saves for r in recent_recipes} == {
            "Chicken Stir Fry": 0,
            "Soup": 1,
        }
