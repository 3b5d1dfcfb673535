# backend/studiobook/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # repository root


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/studiobook.db"
    redis_url: str = "redis://localhost:6379/0"

    api_prefix: str = "/api"
    log_level: str = "INFO"

    # Create missing tables on startup (dev / single-node deployments)
    create_tables: bool = True

    # Booking reminders (tomorrow's confirmed bookings)
    reminders_enabled: bool = True
    reminder_check_interval: int = 3600  # seconds

    # Reject slots whose interval runs past midnight
    reject_overnight: bool = True

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_prefix="STUDIOBOOK_",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # Relative SQLite path -> absolute, anchored at the repository root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            return f"sqlite:///{absolute_path}"
        return url


settings = Settings()
