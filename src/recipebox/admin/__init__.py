"""Admin dashboard queries."""

from recipebox.admin.repository import (
    AdminRepository,
    PlatformStats,
    RecipeSummary,
    UserSummary,
)

__all__ = ["AdminRepository", "PlatformStats", "RecipeSummary", "UserSummary"]
