# auction_search/config.py
"""Environment-driven settings for the search service."""
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _optional_float(name):
    raw = os.getenv(name)
    return float(raw) if raw else None


@dataclass
class Settings:
    database_url: str | None = None
    db_pool_size: int = 5
    db_max_overflow: int = 10
    upstream_base_url: str = "http://localhost:7001"
    upstream_items_path: str = "/items"
    upstream_retry_delay: float = 3.0
    upstream_timeout: float | None = None
    sync_interval_minutes: int = 0


def get_settings() -> Settings:
    return Settings(
        database_url=os.getenv("POSTGRES_URL"),
        db_pool_size=int(os.getenv("DB_POOL_SIZE", 5)),
        db_max_overflow=int(os.getenv("DB_MAX_OVERFLOW", 10)),
        upstream_base_url=os.getenv("UPSTREAM_BASE_URL", "http://localhost:7001"),
        upstream_items_path=os.getenv("UPSTREAM_ITEMS_PATH", "/items"),
        upstream_retry_delay=float(os.getenv("UPSTREAM_RETRY_DELAY", 3)),
        upstream_timeout=_optional_float("UPSTREAM_TIMEOUT"),
        sync_interval_minutes=int(os.getenv("SYNC_INTERVAL_MINUTES", 0)),
    )
