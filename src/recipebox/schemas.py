"""Common data schemas shared by the connectors, repositories and routers."""

import re
from typing import Any, Literal, get_args

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

SkillLevel = Literal["BEGINNER", "INTERMEDIATE", "ADVANCED"]
Difficulty = Literal["BEGINNER", "INTERMEDIATE", "ADVANCED"]
UserRole = Literal["USER", "ADMIN"]


def clean_text_list(values: Any) -> list[str]:
    """Trim every entry of a list of strings and drop blank entries."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    cleaned = []
    for value in values:
        text = str(value).strip()
        if text:
            cleaned.append(text)
    return cleaned


class RecipeDraft(BaseModel):
    """
    Recipe data before it is stored.

    Produced by the recipe search connector and accepted by the save
    endpoint. Accepts the camelCase keys the language model returns.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str = Field(min_length=1)
    description: str | None = None
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    prep_time: int | None = Field(
        default=None, ge=0, validation_alias=AliasChoices("prep_time", "prepTime")
    )
    cook_time: int | None = Field(
        default=None, ge=0, validation_alias=AliasChoices("cook_time", "cookTime")
    )
    servings: int | None = Field(default=None, ge=1)
    difficulty: Difficulty | None = None
    category: str | None = None

    @field_validator("ingredients", "instructions", mode="before")
    @classmethod
    def _clean_lines(cls, value: Any) -> list[str]:
        return clean_text_list(value)

    @field_validator("prep_time", "cook_time", "servings", mode="before")
    @classmethod
    def _leading_number(cls, value: Any) -> Any:
        # "15 minutes" -> 15
        if isinstance(value, str):
            match = re.match(r"\s*(\d+)", value)
            return int(match.group(1)) if match else None
        return value

    @field_validator("difficulty", mode="before")
    @classmethod
    def _known_difficulty(cls, value: Any) -> Any:
        # Free-form labels such as "Easy" are dropped, not rejected
        if isinstance(value, str):
            value = value.strip().upper()
        return value if value in get_args(Difficulty) else None
