"""Application settings using Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./employee_management.db"
    database_echo: bool = False

    # Timezone used for task timestamps
    timezone: str = "UTC"

    # JWT authentication
    jwt_secret: str = "change-this-secret-key-before-deploying"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Logging
    log_level: str = "INFO"


settings = Settings()
