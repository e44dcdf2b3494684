"""Application settings and configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from banking.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Banking API"
    app_host: str = "127.0.0.1"
    app_port: int = 8000

    # Database
    database_url: str = "sqlite:///./banking.db"
    db_echo: bool = False

    # Authentication
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 15
    bcrypt_rounds: int = 12

    # Request handling
    request_timeout_seconds: float = 5.0
    default_page_size: int = 15
    max_page_size: int = 100

    log_level: str = "INFO"

    def validate_required(self) -> None:
        """Fail fast when a value the server cannot run without is unusable."""
        invalid = []
        if not self.jwt_secret:
            invalid.append("JWT_SECRET")
        if not self.database_url:
            invalid.append("DATABASE_URL")
        if self.request_timeout_seconds <= 0:
            invalid.append("REQUEST_TIMEOUT_SECONDS")
        if self.default_page_size < 1 or self.default_page_size > self.max_page_size:
            invalid.append("DEFAULT_PAGE_SIZE")
        if invalid:
            raise ConfigurationError("missing or invalid env variables", ", ".join(invalid))


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Replace the global settings instance (used by tests and scripts)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
