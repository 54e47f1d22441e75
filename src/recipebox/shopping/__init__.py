"""Shopping lists and importing recipe ingredients into them."""

from recipebox.shopping.importer import (
    NewShoppingListItem,
    ShoppingItemWriter,
    build_items,
    import_ingredients,
)
from recipebox.shopping.repository import ShoppingListRepository

__all__ = [
    "NewShoppingListItem",
    "ShoppingItemWriter",
    "ShoppingListRepository",
    "build_items",
    "import_ingredients",
]
