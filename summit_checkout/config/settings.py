"""Application settings using Pydantic for environment-based configuration."""
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_URL = (
    "https://raw.githubusercontent.com/BeeBotix/researchsummits_Webpage/"
    "refs/heads/main/stripe-config.json"
)
EVENTS_URL = (
    "https://raw.githubusercontent.com/BeeBotix/researchsummits_Webpage/"
    "refs/heads/main/events.json"
)
REDIRECT_URL = "http://researchsummits.com/index.html"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    app_name: str = Field(default="summit-checkout", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/production)")
    app_version: str = Field(default="1.0.0", description="Service version reported by health")
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Debug mode")

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=3000, description="API port")
    allowed_origins: str = Field(
        default="*",
        description="CORS allowed origins (comma-separated)"
    )

    # Remote sources
    config_url: str = Field(default=CONFIG_URL, description="Well-known remote config URL")
    default_events_url: str = Field(
        default=EVENTS_URL, description="Catalog URL used when remote config has none"
    )
    default_redirect_url: str = Field(
        default=REDIRECT_URL, description="Landing page used when remote config has none"
    )
    remote_fetch_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Timeout for remote JSON fetches (seconds)"
    )

    # Stripe Configuration (fallbacks for values missing from the remote config)
    stripe_publishable_key: Optional[str] = Field(
        default=None, description="Stripe publishable key (pk_test_...)"
    )
    stripe_secret_key: Optional[str] = Field(
        default=None, description="Stripe secret API key (sk_test_...)"
    )
    stripe_api_version: Optional[str] = Field(
        default=None, description="Pinned Stripe API version (account default if unset)"
    )

    # Charge Configuration
    currency: str = Field(default="usd", min_length=3, max_length=3, description="Charge currency")
    statement_descriptor: str = Field(
        default="RESEARCH SUMMITS", max_length=22, description="Card statement descriptor"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v.upper()

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        """Stripe expects lowercase ISO currency codes."""
        return v.lower()

    def get_allowed_origins_list(self) -> List[str]:
        """Parse allowed origins from comma-separated string."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env.lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
