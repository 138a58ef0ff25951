"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict

# Served until the first successful catalog refresh
DEFAULT_SEED_EXERCISES = [
    "Bench",
    "Squat",
    "Deadlift",
    "Overhead Press",
    "Barbell Row",
    "Pull Up",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Lift Logger"
    environment: str = "development"
    log_level: str = "info"
    debug: bool = True

    # Workout backend (Apps Script web app /exec URL + shared secret)
    app_url: str = ""
    app_secret: str = ""
    backend_timeout_seconds: float = 15.0

    # Exercise catalog
    catalog_refresh_timeout_seconds: float = 1.5
    catalog_refresh_interval_seconds: int = 300
    seed_exercises: list[str] = DEFAULT_SEED_EXERCISES

    # Telegram
    telegram_bot_token: str = ""
    telegram_allowed_users: list[str] = []

    # CORS
    frontend_url: str = "http://localhost:3000"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def backend_configured(self) -> bool:
        return bool(self.app_url)


settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency for injecting settings."""
    return settings
