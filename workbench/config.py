"""
Agent Workbench - Configuration Management
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Client settings"""

    # Remote API
    api_base: str = "http://localhost:8000"
    request_timeout: Optional[float] = None  # None = wait indefinitely

    # Authentication
    access_token: str = ""  # Static bearer token for EnvTokenProvider

    # Ticket cache
    default_page_size: int = 20

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )

    @property
    def API_BASE_URL(self) -> str:
        """API base URL without trailing slash"""
        return self.api_base.rstrip("/")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
