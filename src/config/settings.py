"""
Application settings with Pydantic v2 validation.

Loads configuration from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """Remote inventory store configuration."""

    model_config = SettingsConfigDict(env_prefix="STORE_")

    backend: Literal["memory", "sqlite", "http"] = "memory"
    endpoint_url: str = ""  # Used by the http backend when nothing is saved
    timeout: float = 15.0

    # Category given to items onboarded by a Receive without one
    default_category: Literal["Housekeeping", "Pantry"] = "Housekeeping"


class StorageSettings(BaseSettings):
    """Local storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "stockroom.db"
    config_file: str = "store_config.json"

    # SQLite settings
    pool_size: int = 5
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name

    @property
    def config_path(self) -> Path:
        return self.data_dir / self.config_file


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class ReportSettings(BaseSettings):
    """Export and print report configuration."""

    model_config = SettingsConfigDict(env_prefix="REPORT_")

    transactions_prefix: str = "stock_report"
    inventory_prefix: str = "stock_inventory"
    title: str = "Inventory Report"
    footer_text: str = "Stockroom Inventory"
    font_size: int = 9


class AuthUser(BaseModel):
    """A single login entry."""

    username: str
    password: str
    role: str = "Staff"


class AuthSettings(BaseSettings):
    """Static credential list for the built-in authenticator."""

    model_config = SettingsConfigDict(env_prefix="AUTH_")

    users: list[AuthUser] = []


class InventorySettings(BaseSettings):
    """Inventory behaviour switches."""

    model_config = SettingsConfigDict(env_prefix="INVENTORY_")

    # Write overrides to the ledger as Adjustment entries
    record_adjustments: bool = True
    # Re-fetch catalog and ledger after every successful mutation
    refresh_after_submit: bool = True

    recent_issue_limit: int = 5
    low_stock_alert_limit: int = 6


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Stockroom Inventory"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sub-settings
    store: StoreSettings = Field(default_factory=StoreSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    api: APISettings = Field(default_factory=APISettings)
    report: ReportSettings = Field(default_factory=ReportSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    inventory: InventorySettings = Field(default_factory=InventorySettings)

    @field_validator("storage", mode="before")
    @classmethod
    def ensure_data_dir(cls, v: Any) -> StorageSettings:
        if isinstance(v, dict):
            settings = StorageSettings(**v)
        else:
            settings = v or StorageSettings()
        settings.data_dir.mkdir(parents=True, exist_ok=True)
        return settings


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
