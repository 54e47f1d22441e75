"""API routers for the recipebox application."""

from recipebox.routers.admin import router as admin_router
from recipebox.routers.recipes import router as recipes_router
from recipebox.routers.shopping_lists import router as shopping_lists_router
from recipebox.routers.users import router as users_router

__all__ = [
    "admin_router",
    "recipes_router",
    "shopping_lists_router",
    "users_router",
]
