from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Pump Inventory API"
    debug: bool = False
    environment: str = "production"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./inventory.db"

    # Security
    secret_key: str = "change-this-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Dashboard
    overdue_maintenance_years: int = 2

    @property
    def expose_error_details(self) -> bool:
        return self.debug or self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
