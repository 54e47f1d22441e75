"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "postgresql+asyncpg://localhost/recipebox"

    # Recipe search (OpenAI-compatible chat completions API)
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.7
    recipe_search_timeout: float = 30.0  # request timeout in seconds
    recipe_search_max_retries: int = 3
    recipe_search_result_count: int = 5

    # Identity is supplied by a trusted upstream (gateway or auth service)
    user_id_header: str = "X-User-ID"

    # Seed data
    admin_email: str = "admin@recipebox.local"

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = ""  # "json" or "text"; empty picks json in production
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"

    @property
    def recipe_search_enabled(self) -> bool:
        """Recipe search needs an API key to reach the language model."""
        return bool(self.openai_api_key)

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
