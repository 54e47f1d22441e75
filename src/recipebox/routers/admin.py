"""API routes for the admin dashboard."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict

from recipebox.admin.repository import AdminRepository
from recipebox.dependencies import get_admin_repository, require_admin
from recipebox.logging_config import get_logger
from recipebox.models import User

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


class PlatformStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_users: int = 0
    total_recipes: int = 0
    total_shopping_lists: int = 0


class RecentUserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str | None = None
    email: str
    role: str
    skill_level: str | None = None
    created_at: datetime
    saved_recipes: int


class RecentRecipeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    difficulty: str | None = None
    created_at: datetime
    saves: int


class DashboardResponse(BaseModel):
    """Platform activity overview."""

    stats: PlatformStatsResponse
    recent_users: list[RecentUserResponse]
    recent_recipes: list[RecentRecipeResponse]


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    limit: Annotated[int, Query(ge=1, le=100, description="Recent entries to return")] = 10,
    admin: User = Depends(require_admin),
    repo: AdminRepository = Depends(get_admin_repository),
) -> DashboardResponse:
    """Platform totals plus the newest users and recipes."""
    logger.info(f"Admin dashboard requested by {admin.id}, limit={limit}")

    stats = await repo.get_stats()
    users = await repo.recent_users(limit=limit)
    recipes = await repo.recent_recipes(limit=limit)

    return DashboardResponse(
        stats=PlatformStatsResponse.model_validate(stats),
        recent_users=[RecentUserResponse.model_validate(u) for u in users],
        recent_recipes=[RecentRecipeResponse.model_validate(r) for r in recipes],
    )
