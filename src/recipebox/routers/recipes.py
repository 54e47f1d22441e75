"""API routes for recipe search and personal recipe collections."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from recipebox.connectors.base import ConnectorError, ConnectorNotConfiguredError
from recipebox.connectors.recipe_search import RecipeSearchConnector
from recipebox.dependencies import get_current_user, get_recipe_repository, get_recipe_search
from recipebox.exceptions import RecipeNotFoundError, SavedRecipeNotFoundError
from recipebox.logging_config import get_logger
from recipebox.models import User
from recipebox.recipes.repository import RecipeRepository
from recipebox.schemas import RecipeDraft

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


# Request/Response schemas
class RecipeSearchRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    query: str = Field(min_length=1, max_length=500)


class RecipeSearchResponse(BaseModel):
    """Recipe suggestions from the language model; not yet saved."""

    recipes: list[RecipeDraft]
    total: int


class RecipeResponse(BaseModel):
    """Stored recipe."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    prep_time: int | None = None
    cook_time: int | None = None
    servings: int | None = None
    difficulty: str | None = None
    category: str | None = None
    is_custom: bool = False
    created_at: datetime


class SaveRecipeResponse(BaseModel):
    recipe: RecipeResponse
    saved_recipe_id: str


class SavedRecipeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    saved_at: datetime
    recipe: RecipeResponse


class SavedRecipesResponse(BaseModel):
    saved_recipes: list[SavedRecipeResponse]
    total: int


# =============================================================================
# Search
# =============================================================================


@router.post("/search", response_model=RecipeSearchResponse)
async def search_recipes(
    request: RecipeSearchRequest,
    user: User = Depends(get_current_user),
    connector: RecipeSearchConnector = Depends(get_recipe_search),
) -> RecipeSearchResponse:
    """
    Search for recipes with the language model.

    Suggestions are tailored to the user's skill level and are returned
    without being stored; use ``/recipes/save`` to keep one.
    """
    skill_level = user.skill_level or "BEGINNER"

    try:
        recipes = await connector.search_recipes(request.query, skill_level)
    except ConnectorNotConfiguredError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Recipe search is not configured",
        )
    except ConnectorError as e:
        if e.is_client_error:
            logger.error(f"Recipe search rejected by provider ({e.status_code}), check API settings")
        else:
            logger.error(f"Recipe search failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to search recipes",
        )

    return RecipeSearchResponse(recipes=recipes, total=len(recipes))


# =============================================================================
# Collection
# =============================================================================


@router.post("/save", response_model=SaveRecipeResponse, status_code=status.HTTP_201_CREATED)
async def save_recipe(
    draft: RecipeDraft,
    user: User = Depends(get_current_user),
    recipes: RecipeRepository = Depends(get_recipe_repository),
) -> SaveRecipeResponse:
    """Store a recipe and add it to the current user's collection."""
    try:
        recipe, saved = await recipes.save_recipe(user.id, draft)
    except Exception as e:
        logger.error(f"Failed to save recipe '{draft.title}': {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save recipe",
        )

    return SaveRecipeResponse(
        recipe=RecipeResponse.model_validate(recipe),
        saved_recipe_id=saved.id,
    )


@router.get("/saved", response_model=SavedRecipesResponse)
async def list_saved_recipes(
    user: User = Depends(get_current_user),
    recipes: RecipeRepository = Depends(get_recipe_repository),
) -> SavedRecipesResponse:
    """Get the current user's saved recipes, most recent first."""
    saved = await recipes.list_saved(user.id)
    return SavedRecipesResponse(
        saved_recipes=[SavedRecipeResponse.model_validate(s) for s in saved],
        total=len(saved),
    )


@router.delete("/saved/{saved_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_saved_recipe(
    saved_id: str,
    user: User = Depends(get_current_user),
    recipes: RecipeRepository = Depends(get_recipe_repository),
) -> None:
    """Remove a recipe from the current user's collection."""
    try:
        await recipes.delete_saved(saved_id, user.id)
    except SavedRecipeNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Saved recipe {saved_id} not found",
        )


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(
    recipe_id: str,
    user: User = Depends(get_current_user),
    recipes: RecipeRepository = Depends(get_recipe_repository),
) -> RecipeResponse:
    """Get a stored recipe."""
    try:
        recipe = await recipes.get_recipe(recipe_id)
    except RecipeNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Recipe {recipe_id} not found",
        )
    return RecipeResponse.model_validate(recipe)
