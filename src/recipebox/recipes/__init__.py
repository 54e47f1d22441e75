"""Recipe storage and personal recipe collections."""

from recipebox.recipes.repository import RecipeRepository

__all__ = ["RecipeRepository"]
