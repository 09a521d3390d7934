"""Runtime configuration.

Values come from ``ATELIER_*`` environment variables or a ``.env`` file in
the working directory; command-line flags override both.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from atelier.domain.service.fabric_ledger import StockPolicy


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ATELIER_",
        env_file=".env",
        extra="ignore",
    )

    # Where the JSON record files live
    data_dir: Path = Path("data")
    # STRICT refuses cutting when any color is short, CLAMP floors stock at zero
    stock_policy: StockPolicy = StockPolicy.STRICT
    log_level: str = "WARNING"
