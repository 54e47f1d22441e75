"""User accounts and cooking profiles."""

from recipebox.users.repository import PROFILE_FIELDS, UserRepository

__all__ = ["PROFILE_FIELDS", "UserRepository"]
