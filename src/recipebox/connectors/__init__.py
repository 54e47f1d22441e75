"""Connectors for external APIs."""

from recipebox.connectors.base import (
    ConnectorError,
    ConnectorNotConfiguredError,
    ConnectorResponse,
)
from recipebox.connectors.recipe_search import RecipeSearchConnector

__all__ = [
    "ConnectorError",
    "ConnectorNotConfiguredError",
    "ConnectorResponse",
    "RecipeSearchConnector",
]
