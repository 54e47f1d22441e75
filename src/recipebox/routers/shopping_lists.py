"""API routes for shopping lists and importing recipe ingredients into them."""

from datetime import datetime
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from recipebox.dependencies import (
    get_current_user,
    get_recipe_repository,
    get_shopping_repository,
)
from recipebox.exceptions import (
    RecipeNotFoundError,
    ShoppingListAccessError,
    ShoppingListItemNotFoundError,
    ShoppingListNotFoundError,
)
from recipebox.logging_config import LoggingContext, get_logger
from recipebox.models import User
from recipebox.recipes.repository import RecipeRepository
from recipebox.shopping.importer import import_ingredients
from recipebox.shopping.repository import ShoppingListRepository

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/shopping-lists", tags=["shopping-lists"])


# =============================================================================
# Request/Response Schemas
# =============================================================================


class ShoppingListItemResponse(BaseModel):
    """Single item on a shopping list."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    shopping_list_id: str
    recipe_id: str | None = None
    ingredient: str
    quantity: str | None = None
    checked: bool = False
    position: int = 0


class ShoppingListResponse(BaseModel):
    """Shopping list with its items in display order."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    created_at: datetime
    items: list[ShoppingListItemResponse] = Field(default_factory=list)


class ShoppingListsResponse(BaseModel):
    shopping_lists: list[ShoppingListResponse]
    total: int


class CreateShoppingListRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=200)


class AddItemRequest(BaseModel):
    """Manually entered shopping-list item."""

    model_config = ConfigDict(str_strip_whitespace=True)

    ingredient: str = Field(min_length=1)
    quantity: str | None = None


class UpdateItemRequest(BaseModel):
    checked: bool


class AddRecipeRequest(BaseModel):
    """Import every ingredient of a recipe into a shopping list."""

    recipe_id: str = Field(min_length=1, validation_alias=AliasChoices("recipe_id", "recipeId"))
    shopping_list_id: str = Field(
        min_length=1, validation_alias=AliasChoices("shopping_list_id", "shoppingListId")
    )


class AddRecipeResponse(BaseModel):
    success: bool
    items_added: int


# =============================================================================
# Helpers
# =============================================================================


def _raise_list_error(error: Exception) -> NoReturn:
    if isinstance(error, ShoppingListNotFoundError):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Shopping list not found",
        )
    if isinstance(error, ShoppingListAccessError):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Shopping list belongs to another user",
        )
    raise error


# =============================================================================
# List Endpoints
# =============================================================================


@router.get("", response_model=ShoppingListsResponse)
async def list_shopping_lists(
    user: User = Depends(get_current_user),
    shopping: ShoppingListRepository = Depends(get_shopping_repository),
) -> ShoppingListsResponse:
    """Get the current user's shopping lists, newest first."""
    lists = await shopping.list_for_user(user.id)
    return ShoppingListsResponse(
        shopping_lists=[ShoppingListResponse.model_validate(sl) for sl in lists],
        total=len(lists),
    )


@router.post("", response_model=ShoppingListResponse, status_code=status.HTTP_201_CREATED)
async def create_shopping_list(
    request: CreateShoppingListRequest,
    user: User = Depends(get_current_user),
    shopping: ShoppingListRepository = Depends(get_shopping_repository),
) -> ShoppingListResponse:
    """Create an empty shopping list."""
    try:
        shopping_list = await shopping.create_list(user.id, request.name)
    except Exception as e:
        logger.error(f"Failed to create shopping list: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create shopping list",
        )
    return ShoppingListResponse.model_validate(shopping_list)


@router.post("/add-recipe", response_model=AddRecipeResponse, status_code=status.HTTP_201_CREATED)
async def add_recipe_to_shopping_list(
    request: AddRecipeRequest,
    user: User = Depends(get_current_user),
    shopping: ShoppingListRepository = Depends(get_shopping_repository),
    recipes: RecipeRepository = Depends(get_recipe_repository),
) -> AddRecipeResponse:
    """
    Add every ingredient of a recipe to a shopping list.

    Each ingredient line is split into quantity and name, and all items are
    created together: either the whole recipe is added or nothing is.
    """
    try:
        await shopping.get_owned_list(request.shopping_list_id, user.id)
    except (ShoppingListNotFoundError, ShoppingListAccessError) as e:
        _raise_list_error(e)

    try:
        recipe = await recipes.get_recipe(request.recipe_id)
    except RecipeNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Recipe not found",
        )

    # Rows loaded above are expired if the batch is rolled back
    with LoggingContext(list_id=request.shopping_list_id):
        try:
            added = await import_ingredients(
                recipe.ingredients, request.shopping_list_id, request.recipe_id, shopping
            )
        except Exception as e:
            logger.error(f"Failed to add recipe {request.recipe_id} to shopping list: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Failed to add recipe to shopping list",
            )

    return AddRecipeResponse(success=True, items_added=added)


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shopping_list(
    list_id: str,
    user: User = Depends(get_current_user),
    shopping: ShoppingListRepository = Depends(get_shopping_repository),
) -> None:
    """Delete a shopping list and all of its items."""
    try:
        await shopping.delete_list(list_id, user.id)
    except (ShoppingListNotFoundError, ShoppingListAccessError) as e:
        _raise_list_error(e)


@router.post(
    "/{list_id}/copy", response_model=ShoppingListResponse, status_code=status.HTTP_201_CREATED
)
async def copy_shopping_list(
    list_id: str,
    user: User = Depends(get_current_user),
    shopping: ShoppingListRepository = Depends(get_shopping_repository),
) -> ShoppingListResponse:
    """Duplicate a shopping list; every copied item starts unchecked."""
    try:
        copy = await shopping.copy_list(list_id, user.id)
    except (ShoppingListNotFoundError, ShoppingListAccessError) as e:
        _raise_list_error(e)
    return ShoppingListResponse.model_validate(copy)


# =============================================================================
# Item Endpoints
# =============================================================================


@router.post(
    "/{list_id}/items",
    response_model=ShoppingListItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_shopping_list_item(
    list_id: str,
    request: AddItemRequest,
    user: User = Depends(get_current_user),
    shopping: ShoppingListRepository = Depends(get_shopping_repository),
) -> ShoppingListItemResponse:
    """Add a single item to the end of a shopping list."""
    try:
        item = await shopping.add_item(list_id, user.id, request.ingredient, request.quantity)
    except (ShoppingListNotFoundError, ShoppingListAccessError) as e:
        _raise_list_error(e)
    return ShoppingListItemResponse.model_validate(item)


@router.patch("/items/{item_id}", response_model=ShoppingListItemResponse)
async def update_shopping_list_item(
    item_id: str,
    request: UpdateItemRequest,
    user: User = Depends(get_current_user),
    shopping: ShoppingListRepository = Depends(get_shopping_repository),
) -> ShoppingListItemResponse:
    """Check or uncheck an item."""
    try:
        item = await shopping.set_item_checked(item_id, user.id, request.checked)
    except ShoppingListItemNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item not found",
        )
    return ShoppingListItemResponse.model_validate(item)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shopping_list_item(
    item_id: str,
    user: User = Depends(get_current_user),
    shopping: ShoppingListRepository = Depends(get_shopping_repository),
) -> None:
    """Remove an item from its shopping list."""
    try:
        await shopping.delete_item(item_id, user.id)
    except ShoppingListItemNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item not found",
        )
