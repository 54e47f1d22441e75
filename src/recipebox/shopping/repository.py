"""Repository for shopping lists and their items."""

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from recipebox.exceptions import (
    ShoppingListAccessError,
    ShoppingListItemNotFoundError,
    ShoppingListNotFoundError,
)
from recipebox.logging_config import get_logger
from recipebox.models import ShoppingList, ShoppingListItem
from recipebox.shopping.importer import NewShoppingListItem

logger = get_logger(__name__)


class ShoppingListRepository:
    """
    Storage for shopping lists, scoped to the owning user.

    Also serves as the ``ShoppingItemWriter`` for recipe imports: bulk
    creation happens in a single transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # =========================================================================
    # Lists
    # =========================================================================

    async def list_for_user(self, user_id: str) -> list[ShoppingList]:
        """Get a user's lists, newest first, with items in display order."""
        result = await self.session.execute(
            select(ShoppingList)
            .options(selectinload(ShoppingList.items))
            .execution_options(populate_existing=True)
            .where(ShoppingList.user_id == user_id)
            .order_by(ShoppingList.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_owned_list(self, list_id: str, user_id: str) -> ShoppingList:
        """
        Get a list with its items, checking ownership.

        Raises:
            ShoppingListNotFoundError: No list with this ID exists.
            ShoppingListAccessError: The list belongs to another user.
        """
        result = await self.session.execute(
            select(ShoppingList)
            .options(selectinload(ShoppingList.items))
            .execution_options(populate_existing=True)
            .where(ShoppingList.id == list_id)
        )
        shopping_list = result.scalar_one_or_none()

        if shopping_list is None:
            raise ShoppingListNotFoundError(list_id)
        if shopping_list.user_id != user_id:
            raise ShoppingListAccessError(list_id)

        return shopping_list

    async def create_list(self, user_id: str, name: str) -> ShoppingList:
        shopping_list = ShoppingList(user_id=user_id, name=name.strip(), items=[])
        self.session.add(shopping_list)
        await self.session.commit()

        logger.info(f"Created shopping list {shopping_list.id} for user {user_id}")
        return shopping_list

    async def delete_list(self, list_id: str, user_id: str) -> None:
        """Delete a list and, by cascade, all of its items."""
        shopping_list = await self.get_owned_list(list_id, user_id)
        await self.session.delete(shopping_list)
        await self.session.commit()

        logger.info(f"Deleted shopping list {list_id}")

    async def copy_list(self, list_id: str, user_id: str) -> ShoppingList:
        """Duplicate a list with all items unchecked."""
        original = await self.get_owned_list(list_id, user_id)

        copy = ShoppingList(
            user_id=user_id,
            name=f"{original.name} (Copy)",
            items=[
                ShoppingListItem(
                    ingredient=item.ingredient,
                    quantity=item.quantity,
                    checked=False,
                    position=position,
                )
                for position, item in enumerate(original.items)
            ],
        )
        self.session.add(copy)
        await self.session.commit()

        logger.info(f"Copied shopping list {list_id} to {copy.id} ({len(copy.items)} items)")
        return copy

    # =========================================================================
    # Items
    # =========================================================================

    async def add_item(
        self,
        list_id: str,
        user_id: str,
        ingredient: str,
        quantity: str | None = None,
    ) -> ShoppingListItem:
        """Add a single manually entered item to the end of a list."""
        await self.get_owned_list(list_id, user_id)

        item = ShoppingListItem(
            shopping_list_id=list_id,
            ingredient=ingredient.strip(),
            quantity=(quantity or "").strip() or None,
            checked=False,
            position=await self._next_position(list_id),
        )
        self.session.add(item)
        await self.session.commit()
        return item

    async def set_item_checked(
        self, item_id: str, user_id: str, checked: bool
    ) -> ShoppingListItem:
        item = await self._get_owned_item(item_id, user_id)
        item.checked = checked
        await self.session.commit()
        return item

    async def delete_item(self, item_id: str, user_id: str) -> None:
        item = await self._get_owned_item(item_id, user_id)
        await self.session.delete(item)
        await self.session.commit()

    async def create_items(self, items: Sequence[NewShoppingListItem]) -> int:
        """
        Create items in bulk inside one transaction.

        Items are appended after any existing items of their list, in the
        order given. On failure the transaction is rolled back and the error
        re-raised, so no partial batch is ever stored.
        """
        if not items:
            return 0

        try:
            next_positions: dict[str, int] = {}
            rows = []
            for item in items:
                list_id = item.shopping_list_id
                if list_id not in next_positions:
                    next_positions[list_id] = await self._next_position(list_id)
                rows.append(
                    ShoppingListItem(
                        shopping_list_id=list_id,
                        recipe_id=item.recipe_id,
                        ingredient=item.ingredient,
                        quantity=item.quantity,
                        checked=item.checked,
                        position=next_positions[list_id],
                    )
                )
                next_positions[list_id] += 1

            self.session.add_all(rows)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            logger.error(f"Bulk creation of {len(items)} shopping list items failed")
            raise

        return len(rows)

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _next_position(self, list_id: str) -> int:
        current = await self.session.scalar(
            select(func.max(ShoppingListItem.position)).where(
                ShoppingListItem.shopping_list_id == list_id
            )
        )
        return 0 if current is None else current + 1

    async def _get_owned_item(self, item_id: str, user_id: str) -> ShoppingListItem:
        """Items on other users' lists are reported as missing."""
        result = await self.session.execute(
            select(ShoppingListItem)
            .join(ShoppingList, ShoppingListItem.shopping_list_id == ShoppingList.id)
            .where(ShoppingListItem.id == item_id, ShoppingList.user_id == user_id)
        )
        item = result.scalar_one_or_none()
        if item is None:
            raise ShoppingListItemNotFoundError(item_id)
        return item
