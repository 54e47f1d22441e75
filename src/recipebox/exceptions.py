"""Domain exceptions raised by repositories and translated by the routers."""


class RecipeBoxError(Exception):
    """Base exception for recipebox errors."""


class NotFoundError(RecipeBoxError):
    """Raised when a requested record does not exist for the caller."""

    resource = "Resource"

    def __init__(self, identifier: str):
        super().__init__(f"{self.resource} {identifier} not found")
        self.identifier = identifier


class AccessDeniedError(RecipeBoxError):
    """Raised when a record exists but belongs to another user."""


class UserNotFoundError(NotFoundError):
    resource = "User"


class RecipeNotFoundError(NotFoundError):
    resource = "Recipe"


class SavedRecipeNotFoundError(NotFoundError):
    resource = "Saved recipe"


class ShoppingListNotFoundError(NotFoundError):
    resource = "Shopping list"


class ShoppingListItemNotFoundError(NotFoundError):
    resource = "Shopping list item"


class ShoppingListAccessError(AccessDeniedError):
    """Raised when a shopping list is owned by someone other than the caller."""

    def __init__(self, list_id: str):
        super().__init__(f"Shopping list {list_id} belongs to another user")
        self.list_id = list_id
