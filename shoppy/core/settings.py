# ==============================================================================
# SETTINGS CONFIGURATION - Environment Management
# ==============================================================================
# Pydantic Settings for type-safe environment variable management
# Covers the database, JWT auth, and the Sensay / Shopify vendor APIs
# ==============================================================================

from __future__ import annotations

import json
from enum import Enum
from functools import lru_cache
from typing import Annotated, List, Optional

from pydantic import Field, field_validator, computed_field
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


DEFAULT_JWT_SECRET = "shoppy-sensay-jwt-secret-change-in-production"


class Environment(str, Enum):
    """Application environment types."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """
    Application Settings Configuration.

    Loads every setting from environment variables or a ``.env`` file.
    Variable names match the ones the deployed service already uses
    (``DATABASE_URL``, ``JWT_SECRET``, ``SENSAY_API_KEY``, ...).

    Example:
        >>> from shoppy.core.settings import settings
        >>> settings.shopify_storefront_url
        'https://shoppysensay.myshopify.com/api/2024-07/graphql.json'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # --------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # --------------------------------------------------------------------------
    APP_NAME: str = Field(
        default="Shoppy Sensay API",
        description="Application display name"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application semantic version"
    )
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (docs, stack traces in errors)"
    )
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Current deployment environment"
    )
    API_PREFIX: str = Field(
        default="/api",
        description="Route prefix for every JSON endpoint"
    )
    API_DESCRIPTION: str = Field(
        default="AI shopping assistant backed by Sensay replicas and Shopify",
        description="OpenAPI documentation description"
    )
    PORT: int = Field(
        default=3001,
        ge=1,
        le=65535,
        description="Port used by the development runner"
    )

    # --------------------------------------------------------------------------
    # DATABASE CONFIGURATION
    # --------------------------------------------------------------------------
    DATABASE_URL: str = Field(
        default="sqlite:///./shoppy.db",
        description="SQLAlchemy database URL (sqlite or postgresql)"
    )
    DB_POOL_SIZE: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Connection pool size (ignored for SQLite)"
    )
    DB_MAX_OVERFLOW: int = Field(
        default=20,
        ge=0,
        le=100,
        description="Maximum overflow connections beyond pool size"
    )
    DB_POOL_RECYCLE: int = Field(
        default=3600,
        ge=60,
        description="Connection recycle time in seconds"
    )

    # --------------------------------------------------------------------------
    # SECURITY SETTINGS
    # --------------------------------------------------------------------------
    JWT_SECRET: str = Field(
        default=DEFAULT_JWT_SECRET,
        min_length=32,
        description="JWT signing secret key (min 32 chars)"
    )
    JWT_ALGORITHM: str = Field(
        default="HS256",
        description="JWT signing algorithm"
    )
    ACCESS_TOKEN_EXPIRE_DAYS: int = Field(
        default=7,
        ge=1,
        le=90,
        description="Access token lifetime in days"
    )
    BCRYPT_ROUNDS: int = Field(
        default=10,
        ge=4,
        le=15,
        description="bcrypt work factor for password hashes"
    )

    # --------------------------------------------------------------------------
    # SENSAY (REPLICA CHAT) CONFIGURATION
    # --------------------------------------------------------------------------
    SENSAY_BASE_URL: str = Field(
        default="https://api.sensay.io/v1",
        description="Sensay REST API base URL"
    )
    SENSAY_API_KEY: str = Field(
        default="",
        description="Organization secret sent as X-ORGANIZATION-SECRET"
    )
    SENSAY_ORG_ID: Optional[str] = Field(
        default=None,
        description="Sensay organization identifier"
    )
    SENSAY_API_VERSION: str = Field(
        default="2025-03-25",
        description="Value of the X-API-Version header"
    )
    SENSAY_REPLICA_UUID: str = Field(
        default="50039859-1408-4152-b6ec-1c0fde91cd87",
        description="Replica that answers customer chats"
    )
    SENSAY_TIMEOUT: float = Field(
        default=30.0,
        gt=0,
        description="Chat completion timeout in seconds"
    )
    SENSAY_MAX_RETRIES: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Retries for timed-out or unreachable chat completions"
    )

    # --------------------------------------------------------------------------
    # SHOPIFY (STOREFRONT) CONFIGURATION
    # --------------------------------------------------------------------------
    SHOPIFY_STORE_NAME: str = Field(
        default="shoppysensay",
        description="Store subdomain on myshopify.com"
    )
    SHOPIFY_API_VERSION: str = Field(
        default="2024-07",
        description="Shopify GraphQL API version"
    )
    SHOPIFY_STOREFRONT_TOKEN: str = Field(
        default="",
        description="Storefront API access token"
    )
    SHOPIFY_ADMIN_TOKEN: str = Field(
        default="",
        description="Admin API access token"
    )
    SHOPIFY_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        description="Storefront/Admin request timeout in seconds"
    )

    # --------------------------------------------------------------------------
    # CORS SETTINGS
    # --------------------------------------------------------------------------
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(
        default=True,
        description="Allow credentials in CORS requests"
    )

    # --------------------------------------------------------------------------
    # LOGGING CONFIGURATION
    # --------------------------------------------------------------------------
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    # --------------------------------------------------------------------------
    # COMPUTED PROPERTIES
    # --------------------------------------------------------------------------
    @computed_field
    @property
    def async_database_url(self) -> str:
        """
        Rewrite DATABASE_URL to use an async driver.

        Returns:
            URL with ``sqlite+aiosqlite`` or ``postgresql+asyncpg`` scheme
        """
        url = self.DATABASE_URL
        if url.startswith("sqlite://"):
            return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        return url

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        """Check if the configured database is SQLite."""
        return self.async_database_url.startswith("sqlite")

    @computed_field
    @property
    def shopify_storefront_url(self) -> str:
        """Storefront GraphQL endpoint."""
        return (
            f"https://{self.SHOPIFY_STORE_NAME}.myshopify.com"
            f"/api/{self.SHOPIFY_API_VERSION}/graphql.json"
        )

    @computed_field
    @property
    def shopify_admin_url(self) -> str:
        """Admin GraphQL endpoint."""
        return (
            f"https://{self.SHOPIFY_STORE_NAME}.myshopify.com"
            f"/admin/api/{self.SHOPIFY_API_VERSION}/graphql.json"
        )

    @computed_field
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == Environment.PRODUCTION

    # --------------------------------------------------------------------------
    # VALIDATORS
    # --------------------------------------------------------------------------
    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """Warn when the bundled JWT secret is still in use."""
        if v == DEFAULT_JWT_SECRET:
            import warnings
            warnings.warn(
                "Using default JWT_SECRET. Generate a secure key for production!",
                UserWarning
            )
        return v

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            if v == "*":
                return ["*"]
            if v.lstrip().startswith("["):
                return json.loads(v)
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Returns:
        Settings: Cached settings instance
    """
    return Settings()


# Module-level settings instance for convenient imports
settings = get_settings()
