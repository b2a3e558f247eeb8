"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Scaling policy
    default_servings: int = Field(default=4, gt=0)  # used when a recipe has no servings
    default_category: str = "Other"

    # Fraction formatting
    rounding_decimals: int = Field(default=2, ge=0)
    fraction_tolerance: float = Field(default=1e-6, gt=0)
    fraction_max_length: int = Field(default=8, gt=0)  # longer fractions render as decimals

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    allowed_origins: str = "http://localhost:3000,http://localhost:8000"

    @property
    def origins(self) -> list[str]:
        """Get the allowed CORS origins as a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
