"""
Core configuration settings for the application.
"""
from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings."""
    # API Settings
    PROJECT_NAME: str = "Prompt Playground Proxy"
    ENVIRONMENT: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # Upstream credentials
    OPENAI_API_KEY: SecretStr
    OPENAI_BASE_URL: Optional[str] = None
    UPSTREAM_TIMEOUT_SECONDS: float = 30.0

    # CORS, comma separated, only enforced in production
    ALLOWED_ORIGINS: str = "http://localhost:5173,http://localhost:3000"

    # Rate limiting
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    RATE_LIMIT_MAX_REQUESTS: int = 100
    RATE_LIMIT_MAX_REQUESTS_DEV: int = 1000

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = "logs/app.log"
    LOG_JSON: bool = True

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra="ignore")

    @field_validator("OPENAI_API_KEY")
    @classmethod
    def require_api_key(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("OPENAI_API_KEY must not be empty")
        return value

    @field_validator("ENVIRONMENT")
    @classmethod
    def normalize_environment(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def cors_origins(self) -> List[str]:
        """Origins handed to the CORS middleware; development accepts any."""
        if self.is_production:
            return self.allowed_origins
        return ["*"]

    @property
    def rate_limit_max_requests(self) -> int:
        if self.is_production:
            return self.RATE_LIMIT_MAX_REQUESTS
        return self.RATE_LIMIT_MAX_REQUESTS_DEV


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
