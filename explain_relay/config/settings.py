"""
Application configuration and settings.
Centralized configuration management using Pydantic Settings.
"""
from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.studio.nebius.com/v1/"
DEFAULT_MODEL = "meta-llama/Meta-Llama-3-8B-Instruct"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        env_ignore_empty=True,  # VAR= falls back to the default
        env_file=[".env", ".env.local"],  # .env.local overrides .env
    )

    # Application settings
    app_name: str = "Explain Code Relay"
    host: str = "0.0.0.0"
    port: int = 3002

    # Upstream provider
    api_key: str = Field(
        default="",
        validation_alias=AliasChoices("NEBIUS_API_KEY", "LLM_API_KEY", "API_KEY", "api_key"),
    )
    llm_base_url: str = DEFAULT_BASE_URL
    llm_model: str = DEFAULT_MODEL
    llm_temperature: float = 0.3
    # 0 disables the output cap
    llm_max_tokens: Optional[int] = 800
    llm_timeout_seconds: float = 600.0

    # CORS settings
    frontend_url: str = "http://localhost:3000"

    # Request limits
    rate_limit_max_requests: int = 100
    rate_limit_window_seconds: float = 15 * 60
    trust_proxy_headers: bool = False
    max_body_bytes: int = 10 * 1024 * 1024

    # Logging settings
    log_level: str = "INFO"
    enable_request_logging: bool = True

    @property
    def has_api_key(self) -> bool:
        """Check whether an upstream credential was provided."""
        return bool(self.api_key)


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
