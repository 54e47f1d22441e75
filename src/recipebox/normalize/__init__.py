"""Normalize free-text recipe data into structured records."""

from recipebox.normalize.ingredient_line import (
    RECOGNIZED_UNITS,
    ParsedIngredient,
    build_ingredient_pattern,
    parse_ingredient_line,
)

__all__ = [
    "RECOGNIZED_UNITS",
    "ParsedIngredient",
    "build_ingredient_pattern",
    "parse_ingredient_line",
]
