from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Global Focus Grid settings.
    Values are read from the environment and from the .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Project
    project_name: str = "Focus Grid API"
    api_prefix: str = "/api"
    debug: bool = False

    # Database
    database_url: str = "sqlite:///./focusgrid.db"

    # Default tenant when the request carries no clientId
    client_id: Optional[str] = None

    # CORS
    allowed_origins: List[str] = [
        "https://swellfocusgrid.com",
        "https://admin.swellfocusgrid.com",
        "https://bluelabelpackaging.swellfocusgrid.com",
        "https://erc.swellfocusgrid.com",
        "http://localhost:5173",
        "http://localhost:5174",
        "http://localhost:3000",
    ]

    # Branding
    default_branding_color: str = "#346.8 77.2% 49.8%"
    tenant_domain: str = "swellfocusgrid.com"

    # Config consumer (remote /api/config)
    config_api_url: str = "http://localhost:8080"
    config_timeout_seconds: float = 10.0
    config_retries: int = 1
    config_retry_delay_seconds: float = 1.0

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def resolved_client_id(self) -> str | None:
        """Default tenant id, with blank values treated as unset."""
        value = (self.client_id or "").strip()
        return value or None


@lru_cache
def get_settings() -> Settings:
    """Return the cached global settings instance."""
    return Settings()


settings = get_settings()
