"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipebox.config import get_settings
from recipebox.database import Base, async_engine
from recipebox.logging_config import configure_logging, get_logger
from recipebox.middleware import RequestIDMiddleware
from recipebox.routers import (
    admin_router,
    recipes_router,
    shopping_lists_router,
    users_router,
)

# Configure logging on module load
configure_logging()
logger = get_logger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    # Startup
    logger.info(f"Starting Recipebox API ({settings.environment})")

    # Create database tables if they don't exist
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized")

    if not settings.recipe_search_enabled:
        logger.warning("OPENAI_API_KEY is not set, recipe search is disabled")

    yield

    # Shutdown
    logger.info("Shutting down Recipebox API")
    await async_engine.dispose()


app = FastAPI(
    title="Recipebox API",
    description="Recipe discovery with shopping lists built from saved recipes",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)

# Include routers
app.include_router(recipes_router)
app.include_router(shopping_lists_router)
app.include_router(users_router)
app.include_router(admin_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "recipebox-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Recipebox API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
