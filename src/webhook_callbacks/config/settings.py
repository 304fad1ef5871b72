"""Application settings using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from webhook_callbacks.domain.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WEBHOOK_CALLBACKS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # General
    environment: str = "development"
    log_level: str = "INFO"
    log_json: bool = False

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Boot
    registrants: list[str] = Field(default_factory=list)
    freeze_after_boot: bool = True

    # Test harness
    test_mode: bool = False
    raise_strict_errors: bool = False

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        if self.test_mode and self.is_production:
            raise ConfigurationError(
                "test_mode cannot be enabled in production",
                details={"environment": self.environment},
            )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
