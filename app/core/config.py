"""
Application Configuration
Centralized configuration management using environment variables
"""

# Load .env early so Pydantic BaseSettings picks up values when instantiated.
from dotenv import load_dotenv

load_dotenv(override=True)

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "Product Catalog API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = Field(default=False, description="Debug mode")
    ENVIRONMENT: str = Field(default="development", description="Environment: development, staging, production")

    # API Server
    API_HOST: str = Field(default="0.0.0.0", description="API server binding host")
    API_PORT: int = Field(default=8000, description="API server port")
    API_RELOAD: bool = Field(default=True, description="Auto-reload on code changes")

    # API Client (for scripts connecting to API)
    API_CLIENT_HOST: str = Field(default="localhost", description="API client connection host")

    # Product store
    CATALOG_STORE_BACKEND: str = Field(default="memory", description="Product store backend: memory or convex")

    # Convex DB
    CONVEX_URL: Optional[str] = Field(default=None, description="Convex Deployment URL (required for the convex backend)")
    CONVEX_TIMEOUT_SECONDS: float = Field(default=30.0, description="HTTP timeout for Convex function calls")

    # Catalog behaviour
    CATALOG_PAGE_SIZE: int = Field(default=12, description="Default number of products per page")
    CATALOG_MAX_PAGE_SIZE: int = Field(default=100, description="Largest page size a client may request")
    PRICE_RANGE_DEFAULT_MIN: float = Field(default=0, description="Price slider minimum when the catalog is empty")
    PRICE_RANGE_DEFAULT_MAX: float = Field(default=1000, description="Price slider maximum when the catalog is empty")
    SEED_ON_STARTUP: bool = Field(default=False, description="Seed sample products when the API starts")

    # CORS
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format"
    )

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env file


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance
    Using lru_cache ensures settings are loaded only once
    """
    return Settings()


# Export for easy access
settings = get_settings()
