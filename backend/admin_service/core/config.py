from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


DEFAULT_CORS_ORIGINS = ["http://localhost:3000"]
CORS_ALLOWED_HEADERS = ["Content-Type", "Authorization", "X-Service-Name"]
CORS_ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_MAX_AGE = 86400


class Settings(BaseSettings):
    """Application configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    # Application Configuration
    service_name: str = Field(default="admin-service")
    app_version: str = Field(default="1.0.0")
    node_env: str = Field(default="production")

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3002)
    shutdown_timeout: int = Field(default=10)  # seconds

    # CORS Configuration
    cors_allowed_origins: str = Field(default="")  # Comma-separated list

    # Redis Configuration
    redis_url: str = Field(default="redis://localhost:6379/0")
    redis_password: Optional[str] = Field(default=None)
    redis_max_connections: int = Field(default=20)

    # Monitoring & Logging
    log_level: str = Field(default="INFO")

    @property
    def is_development(self) -> bool:
        return self.node_env == "development"

    @property
    def cors_origins(self) -> List[str]:
        """Parse allowed CORS origins from comma-separated string."""
        origins = [
            origin.strip()
            for origin in self.cors_allowed_origins.split(",")
            if origin.strip()
        ]
        return origins or list(DEFAULT_CORS_ORIGINS)


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
