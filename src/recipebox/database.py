"""Database configuration and session management."""

from collections.abc import AsyncIterator
from typing import Any

from pydantic import TypeAdapter, ValidationError
from sqlalchemy import JSON
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator

from recipebox.config import get_settings

_settings = get_settings()


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class ValidatedJSON(TypeDecorator):
    """
    JSON column whose contents are validated against a Python type.

    Values are checked with a pydantic ``TypeAdapter`` both when they are
    written and when they are loaded, so structured fields such as ingredient
    lists always round-trip as typed data instead of opaque strings.
    """

    impl = JSON
    cache_ok = True

    def __init__(self, value_type: Any, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.value_type = value_type
        self._adapter = TypeAdapter(value_type)

    def process_bind_param(self, value: Any, dialect: Any) -> Any:
        if value is None:
            return None
        try:
            return self._adapter.dump_python(self._adapter.validate_python(value), mode="json")
        except ValidationError as e:
            raise ValueError(f"Invalid value for {self.value_type}: {e}") from e

    def process_result_value(self, value: Any, dialect: Any) -> Any:
        if value is None:
            return None
        return self._adapter.validate_python(value)


# Async engine for FastAPI endpoints and scripts
async_engine = create_async_engine(_settings.database_url, echo=_settings.is_development)
AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncIterator[AsyncSession]:
    """Dependency for FastAPI endpoints."""
    async with AsyncSessionLocal() as session:
        yield session
