"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Database
    database_url: str = "sqlite:///./data/portfolio.db"

    # Authentication
    jwt_secret_key: str = "change-me-in-production"  # Generate with: openssl rand -hex 32
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Bootstrap admin account (created or repaired on startup)
    admin_username: str = "admin"
    admin_password: str = "password"

    # Application
    log_level: str = "INFO"
    debug: bool = True

    # CORS
    allowed_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Price refresh policy
    price_refresh_cooldown_seconds: int = 300
    price_source_timeout_seconds: float = 10.0
    price_source_max_attempts: int = 2

    # Price providers
    alanchand_base_url: str = "https://alanchand.com"
    telegram_base_url: str = "https://t.me/s"
    telegram_price_channel: str = ""
    navasan_base_url: str = "https://api.navasan.tech"
    navasan_api_key: str = ""
    tgju_base_url: str = "https://www.tgju.org"
    coingecko_api_key: str = ""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )


settings = Settings()
