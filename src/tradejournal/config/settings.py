"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory based on platform."""
    return Path.home() / ".trade-journal"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Trade Journal"
    app_version: str = "0.1.0"

    # Data directory (all app data lives here)
    data_dir: Optional[Path] = None

    # Database URL (derived from data_dir if not set explicitly)
    database_url: Optional[str] = None

    log_level: str = "INFO"

    # Market data settings
    dexscreener_base_url: str = "https://api.dexscreener.com/latest/dex"
    market_data_timeout_seconds: float = 10.0
    # The token endpoint accepts at most 30 comma-joined addresses
    market_data_chunk_size: int = Field(default=30, ge=1, le=30)
    quote_cache_ttl_seconds: float = 15.0
    autofill_cache_ttl_seconds: float = 30.0

    # Price sync scheduler
    price_sync_interval_seconds: float = Field(default=30.0, gt=0)
    price_sync_enabled: bool = True

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "trades.db"
        return f"sqlite:///{db_path}"


# Global settings instance (cleared by reset_settings)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
