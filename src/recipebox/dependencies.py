"""FastAPI dependencies shared by the routers."""

from collections.abc import AsyncIterator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from recipebox.admin.repository import AdminRepository
from recipebox.config import get_settings
from recipebox.connectors.recipe_search import RecipeSearchConnector
from recipebox.database import get_db
from recipebox.exceptions import UserNotFoundError
from recipebox.logging_config import get_logger, set_context
from recipebox.models import User
from recipebox.recipes.repository import RecipeRepository
from recipebox.shopping.repository import ShoppingListRepository
from recipebox.users.repository import UserRepository

logger = get_logger(__name__)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_recipe_repository(db: AsyncSession = Depends(get_db)) -> RecipeRepository:
    return RecipeRepository(db)


def get_shopping_repository(db: AsyncSession = Depends(get_db)) -> ShoppingListRepository:
    return ShoppingListRepository(db)


def get_admin_repository(db: AsyncSession = Depends(get_db)) -> AdminRepository:
    return AdminRepository(db)


async def get_recipe_search() -> AsyncIterator[RecipeSearchConnector]:
    """Recipe search connector, closed after the request."""
    async with RecipeSearchConnector() as connector:
        yield connector


async def get_current_user_id(request: Request) -> str:
    """
    Read the caller's user ID from the identity header.

    Authentication happens upstream; the header is trusted as-is.
    """
    header = get_settings().user_id_header
    user_id = (request.headers.get(header) or "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    set_context(user_id=user_id)
    return user_id


async def get_current_user(
    user_id: str = Depends(get_current_user_id),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    try:
        return await users.get_user(user_id)
    except UserNotFoundError:
        logger.warning(f"Request for unknown user {user_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user
