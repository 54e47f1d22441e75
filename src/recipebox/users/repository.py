"""Repository for user accounts and cooking profiles."""

from sqlalchemy.ext.asyncio import AsyncSession

from recipebox.exceptions import UserNotFoundError
from recipebox.logging_config import get_logger
from recipebox.models import User

logger = get_logger(__name__)

# Profile fields a user may change through settings
PROFILE_FIELDS = ("name", "skill_level", "favorite_dishes", "dietary_restrictions")


class UserRepository:
    """Storage for users."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_user(self, user_id: str) -> User:
        user = await self.session.get(User, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def update_settings(self, user_id: str, **changes: object) -> User:
        """
        Update profile fields on a user.

        Only the keyword arguments passed are changed; unknown field names
        raise ``ValueError``.
        """
        unknown = set(changes) - set(PROFILE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")

        user = await self.get_user(user_id)
        for field, value in changes.items():
            setattr(user, field, value)
        await self.session.commit()

        logger.info(f"Updated settings for user {user_id}: {', '.join(sorted(changes)) or 'none'}")
        return user

    async def complete_onboarding(
        self, user_id: str, skill_level: str, favorite_dishes: list[str]
    ) -> User:
        """Record the answers from the onboarding wizard."""
        return await self.update_settings(
            user_id, skill_level=skill_level, favorite_dishes=favorite_dishes
        )
