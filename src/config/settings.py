"""
Centralized settings management using pydantic-settings.

All environment variables and configuration values are defined here.
Use get_settings() to access the singleton settings instance.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every field has a default so the assistant boots without a .env file.

    Commonly overridden environment variables:
        - REDIS_URL / REDIS_ENABLED: Durable preference storage
        - CATALOG_PATH: Alternative products.json
        - RAZORPAY_KEY_ID / RAZORPAY_KEY_SECRET: Payment provider credentials
        - ENVIRONMENT: Environment name (development, staging, production)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    # ==========================================================================
    # Server Configuration
    # ==========================================================================
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3001, description="Server port")

    cors_origins: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        description="Allowed CORS origins"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    # ==========================================================================
    # Preference Storage (Redis)
    # ==========================================================================
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL"
    )
    redis_enabled: bool = Field(
        default=True,
        description="Try Redis for user preferences (falls back to memory if unreachable)"
    )
    redis_socket_timeout_seconds: float = Field(
        default=2.0,
        description="Socket timeout for Redis commands"
    )

    # ==========================================================================
    # Catalog & Search
    # ==========================================================================
    catalog_path: Optional[Path] = Field(
        default=None,
        description="Path to a products JSON file (defaults to the bundled catalog)"
    )

    @field_validator("catalog_path", mode="before")
    @classmethod
    def parse_catalog_path(cls, v):
        if isinstance(v, str):
            return Path(v) if v.strip() else None
        return v

    default_user_id: str = Field(
        default="guest",
        description="User id applied when a request omits userId"
    )
    max_results: int = Field(
        default=5,
        ge=1,
        description="Maximum number of products returned per search"
    )

    # ==========================================================================
    # Payments (Razorpay)
    # ==========================================================================
    razorpay_key_id: str = Field(default="rzp_test_dummy", description="Razorpay key id")
    razorpay_key_secret: str = Field(default="dummy_secret", description="Razorpay key secret")
    razorpay_api_base_url: str = Field(
        default="https://api.razorpay.com/v1",
        description="Razorpay REST API base URL"
    )
    payment_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for order creation requests (seconds)"
    )
    default_currency: str = Field(default="INR", description="Currency used when a request omits it")
    payment_verify_signatures: bool = Field(
        default=False,
        description="Check Razorpay payment signatures (accept everything when disabled)"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses lru_cache to ensure only one instance is created.
    Settings are loaded from environment variables and .env file.

    Returns:
        Settings: The application settings instance
    """
    # Try to find .env file in project root
    env_file = Path(__file__).parent.parent.parent / ".env"
    if env_file.exists():
        os.environ.setdefault("ENV_FILE", str(env_file))

    return Settings(_env_file=env_file if env_file.exists() else None)


def get_settings_for_testing(**overrides) -> Settings:
    """
    Create a settings instance for testing with optional overrides.

    This bypasses the cache to allow different settings in tests.
    Redis is disabled unless explicitly overridden.

    Args:
        **overrides: Setting values to override

    Returns:
        Settings: A new settings instance with overrides applied
    """
    test_defaults = {
        "environment": "testing",
        "debug": True,
        "redis_enabled": False,
    }
    test_defaults.update(overrides)

    return Settings(_env_file=None, **test_defaults)
