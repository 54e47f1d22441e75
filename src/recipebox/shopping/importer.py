"""Import a recipe's ingredient lines into a shopping list."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

from recipebox.logging_config import get_logger
from recipebox.normalize.ingredient_line import parse_ingredient_line

logger = get_logger(__name__)


@dataclass(frozen=True)
class NewShoppingListItem:
    """Creation request for one shopping-list item."""

    shopping_list_id: str
    recipe_id: str | None
    ingredient: str
    quantity: str | None
    checked: bool = False


class ShoppingItemWriter(Protocol):
    """Persists shopping-list items."""

    async def create_items(self, items: Sequence[NewShoppingListItem]) -> int:
        """
        Create all items in one atomic write.

        Either every item is created, in the given order, or none is and the
        error propagates. Returns the number of items created.
        """
        ...


def build_items(
    lines: Iterable[str],
    list_id: str,
    recipe_id: str | None,
) -> list[NewShoppingListItem]:
    """Parse each ingredient line into an unchecked item, keeping input order."""
    items = []
    for line in lines:
        parsed = parse_ingredient_line(line)
        items.append(
            NewShoppingListItem(
                shopping_list_id=list_id,
                recipe_id=recipe_id,
                ingredient=parsed.name,
                quantity=parsed.quantity,
                checked=False,
            )
        )
    return items


async def import_ingredients(
    lines: Sequence[str],
    list_id: str,
    recipe_id: str | None,
    writer: ShoppingItemWriter,
) -> int:
    """
    Add one shopping-list item per ingredient line.

    Blank lines are not filtered: they become items with an empty name, so
    the returned count always equals ``len(lines)``. Persistence errors from
    the writer propagate unchanged.

    Args:
        lines: Ingredient lines in display order.
        list_id: Target shopping list.
        recipe_id: Source recipe the lines came from.
        writer: Storage that performs the bulk write.

    Returns:
        Number of items created.
    """
    if not lines:
        logger.debug(f"No ingredient lines to import into list {list_id}")
        return 0

    items = build_items(lines, list_id, recipe_id)
    created = await writer.create_items(items)

    logger.info(
        f"Imported {created} ingredients from recipe {recipe_id} into list {list_id}",
        extra={"items_created": created, "lines": len(lines)},
    )
    return created
