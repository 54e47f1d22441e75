"""Split free-text ingredient lines into a quantity expression and a name."""

import re
from dataclasses import dataclass

# =============================================================================
# Grammar
# =============================================================================

# Unit words recognized directly after a leading numeric run. Matching is
# case-insensitive and a unit only counts when whitespace follows it.
RECOGNIZED_UNITS: tuple[str, ...] = (
    "cup",
    "cups",
    "tbsp",
    "tsp",
    "tablespoon",
    "tablespoons",
    "teaspoon",
    "teaspoons",
    "lb",
    "lbs",
    "pound",
    "pounds",
    "oz",
    "ounce",
    "ounces",
    "g",
    "kg",
    "ml",
    "l",
    "pinch",
    "dash",
)


def build_ingredient_pattern(units: tuple[str, ...] = RECOGNIZED_UNITS) -> re.Pattern[str]:
    """
    Compile the quantity/name pattern for a unit vocabulary.

    The quantity is a digit followed by any run of digits, spaces, ``.`` or
    ``/``, optionally followed by one unit word. Whitespace and a non-empty
    remainder must follow.
    """
    alternation = "|".join(re.escape(unit) for unit in units)
    return re.compile(
        rf"(?P<quantity>\d[\d\s./]*(?:\s*(?:{alternation}))?)\s+(?P<name>.+)",
        re.IGNORECASE | re.DOTALL,
    )


INGREDIENT_PATTERN = build_ingredient_pattern()


# =============================================================================
# Parsing
# =============================================================================


@dataclass(frozen=True)
class ParsedIngredient:
    """An ingredient line split into an optional quantity and a name."""

    quantity: str | None
    name: str


def parse_ingredient_line(
    line: str,
    pattern: re.Pattern[str] = INGREDIENT_PATTERN,
) -> ParsedIngredient:
    """
    Parse an ingredient line such as ``"400g spaghetti"``.

    Never raises. Lines without a leading quantity, or with nothing after
    it, come back with ``quantity=None`` and the whole trimmed line as name.

    Examples:
        "400g spaghetti" -> ParsedIngredient("400g", "spaghetti")
        "2 large eggs" -> ParsedIngredient("2", "large eggs")
        "1/2 cup sugar" -> ParsedIngredient("1/2 cup", "sugar")
        "Salt to taste" -> ParsedIngredient(None, "Salt to taste")
    """
    text = line.strip()

    match = pattern.fullmatch(text)
    if match is None:
        return ParsedIngredient(quantity=None, name=text)

    return ParsedIngredient(
        quantity=match.group("quantity").strip(),
        name=match.group("name").strip(),
    )
