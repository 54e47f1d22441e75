"""API routes for the current user's settings and onboarding."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field, field_validator

from recipebox.dependencies import get_current_user, get_user_repository
from recipebox.logging_config import get_logger
from recipebox.models import User
from recipebox.schemas import SkillLevel, UserRole, clean_text_list
from recipebox.users.repository import UserRepository

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/users", tags=["users"])


class UserSettingsResponse(BaseModel):
    """Profile of the current user."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str | None = None
    role: UserRole
    skill_level: SkillLevel | None = None
    favorite_dishes: list[str] = Field(default_factory=list)
    dietary_restrictions: list[str] = Field(default_factory=list)


class UpdateSettingsRequest(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    name: str | None = None
    skill_level: SkillLevel | None = None
    favorite_dishes: list[str] | None = None
    dietary_restrictions: list[str] | None = None

    @field_validator("favorite_dishes", "dietary_restrictions", mode="before")
    @classmethod
    def _clean_lists(cls, value: Any) -> Any:
        return None if value is None else clean_text_list(value)


class OnboardingRequest(BaseModel):
    skill_level: SkillLevel
    favorite_dishes: list[str] = Field(default_factory=list)

    @field_validator("favorite_dishes", mode="before")
    @classmethod
    def _clean_dishes(cls, value: Any) -> list[str]:
        return clean_text_list(value)


class OnboardingResponse(BaseModel):
    message: str
    email: str


@router.get("/me/settings", response_model=UserSettingsResponse)
async def get_settings(user: User = Depends(get_current_user)) -> UserSettingsResponse:
    """Get the current user's profile."""
    return UserSettingsResponse.model_validate(user)


@router.put("/me/settings", response_model=UserSettingsResponse)
async def update_settings(
    request: UpdateSettingsRequest,
    user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
) -> UserSettingsResponse:
    """Update name, skill level, favorite dishes or dietary restrictions."""
    changes = request.model_dump(exclude_unset=True)
    # Lists are replaced, never cleared to null
    for field in ("favorite_dishes", "dietary_restrictions"):
        if field in changes and changes[field] is None:
            changes[field] = []

    try:
        updated = await users.update_settings(user.id, **changes)
    except Exception as e:
        logger.error(f"Failed to update settings for user {user.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update settings",
        )
    return UserSettingsResponse.model_validate(updated)


@router.post("/me/onboarding", response_model=OnboardingResponse)
async def complete_onboarding(
    request: OnboardingRequest,
    user: User = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
) -> OnboardingResponse:
    """Store the skill level and favorite dishes chosen during onboarding."""
    try:
        updated = await users.complete_onboarding(
            user.id, request.skill_level, request.favorite_dishes
        )
    except Exception as e:
        logger.error(f"Failed to complete onboarding for user {user.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
    return OnboardingResponse(message="Onboarding completed", email=updated.email)
