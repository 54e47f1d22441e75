"""SQLAlchemy database models."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipebox.database import Base, ValidatedJSON


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
    """User account with cooking profile."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String, nullable=True)
    role: Mapped[str] = mapped_column(String(20), default="USER", nullable=False)  # USER, ADMIN
    skill_level: Mapped[str | None] = mapped_column(
        String(20), nullable=True
    )  # BEGINNER, INTERMEDIATE, ADVANCED
    favorite_dishes: Mapped[list[str]] = mapped_column(ValidatedJSON(list[str]), default=list)
    dietary_restrictions: Mapped[list[str]] = mapped_column(
        ValidatedJSON(list[str]), default=list
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    saved_recipes: Mapped[list["SavedRecipe"]] = relationship(
        "SavedRecipe", back_populates="user", cascade="all, delete-orphan"
    )
    shopping_lists: Mapped[list["ShoppingList"]] = relationship(
        "ShoppingList", back_populates="user", cascade="all, delete-orphan"
    )

    @property
    def is_admin(self) -> bool:
        return self.role == "ADMIN"


class Recipe(Base):
    """Recipe with ingredients and instructions."""

    __tablename__ = "recipes"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    ingredients: Mapped[list[str]] = mapped_column(ValidatedJSON(list[str]), default=list)
    instructions: Mapped[list[str]] = mapped_column(ValidatedJSON(list[str]), default=list)
    prep_time: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    cook_time: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    servings: Mapped[int | None] = mapped_column(Integer, nullable=True)
    difficulty: Mapped[str | None] = mapped_column(String(20), nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_custom: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    saved_by: Mapped[list["SavedRecipe"]] = relationship(
        "SavedRecipe", back_populates="recipe", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("idx_recipes_created_at", "created_at"),)


class SavedRecipe(Base):
    """A recipe in a user's personal collection."""

    __tablename__ = "saved_recipes"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    recipe_id: Mapped[str] = mapped_column(
        String, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    saved_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    user: Mapped["User"] = relationship("User", back_populates="saved_recipes")
    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="saved_by")

    __table_args__ = (
        UniqueConstraint("user_id", "recipe_id", name="uq_saved_recipe_user_recipe"),
        Index("idx_saved_recipes_user_id", "user_id"),
    )


class ShoppingList(Base):
    """Named shopping list owned by a user."""

    __tablename__ = "shopping_lists"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    user: Mapped["User"] = relationship("User", back_populates="shopping_lists")
    items: Mapped[list["ShoppingListItem"]] = relationship(
        "ShoppingListItem",
        back_populates="shopping_list",
        cascade="all, delete-orphan",
        order_by="ShoppingListItem.position",
    )

    __table_args__ = (Index("idx_shopping_lists_user_id", "user_id"),)


class ShoppingListItem(Base):
    """One line on a shopping list."""

    __tablename__ = "shopping_list_items"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=new_id)
    shopping_list_id: Mapped[str] = mapped_column(
        String, ForeignKey("shopping_lists.id", ondelete="CASCADE"), nullable=False
    )
    recipe_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("recipes.id", ondelete="SET NULL"), nullable=True
    )
    ingredient: Mapped[str] = mapped_column(Text, nullable=False)
    quantity: Mapped[str | None] = mapped_column(Text, nullable=True)
    checked: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    shopping_list: Mapped["ShoppingList"] = relationship("ShoppingList", back_populates="items")

    __table_args__ = (
        Index("idx_shopping_list_items_list_position", "shopping_list_id", "position"),
    )
