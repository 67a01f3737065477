"""Runtime settings, read from ``FULFILLMENT_*`` environment variables or ``.env``."""

from __future__ import annotations

from datetime import time
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Storage
    data_dir: Path = Path("data")

    # Logistics policy
    shipment_cutoff: time = time(17, 0)
    reservation_ttl_hours: int = Field(default=24, gt=0)
    low_stock_threshold: int = Field(default=10, ge=0)

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="FULFILLMENT_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def state_file(self) -> Path:
        return self.data_dir / "state.json"


def get_settings() -> Settings:
    return Settings()
