"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads the feed location, HTTP options and log destination from the
environment (including a check that the HTTP timeout is a positive number).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_CSV_BASE_URL = "https://bfcm-2025-data-viz.shiphero.com/sh_metrics/metrics"
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; WarehouseHeartbeat/1.0; +https://example.com)"

# feed label -> file name under the base URL
FEED_FILES = {
    "orders": "orders.csv",
    "shipping_labels": "shipping_labels.csv",
    "shippings_by_country": "shippings_by_country.csv",
    "total_packers": "total_packers.csv",
    "total_pickers": "total_pickers.csv",
}

@dataclass(frozen=True)
class Settings:
    """Container for application configuration read from the environment.

    Attributes:
        csv_base_url: Base URL the five metrics CSV files are served from.
        user_agent: User-Agent header sent with every feed request.
        http_timeout: Per-request timeout in seconds.
        log_path: Optional file that logs are mirrored to.
    """
    csv_base_url: str
    user_agent: str
    http_timeout: float
    log_path: Path | None

    def feed_url(self, label: str) -> str:
        """Return the full URL of the feed registered under `label`."""
        return f"{self.csv_base_url.rstrip('/')}/{FEED_FILES[label]}"

    def feed_urls(self) -> dict[str, str]:
        return {label: self.feed_url(label) for label in FEED_FILES}



def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `HEARTBEAT_HTTP_TIMEOUT` is not a positive number.
    """
    csv_base_url = os.getenv("HEARTBEAT_CSV_BASE_URL", "").strip() or DEFAULT_CSV_BASE_URL
    user_agent = os.getenv("HEARTBEAT_USER_AGENT", "").strip() or DEFAULT_USER_AGENT
    raw_timeout = os.getenv("HEARTBEAT_HTTP_TIMEOUT", "30").strip()
    raw_log_path = os.getenv("HEARTBEAT_LOG_PATH", "").strip()

    try:
        http_timeout = float(raw_timeout)
    except ValueError:
        http_timeout = 0.0

    if not http_timeout > 0:
        raise RuntimeError(
            "HEARTBEAT_HTTP_TIMEOUT must be a positive number of seconds "
            f"(got {raw_timeout!r})."
        )

    return Settings(
        csv_base_url=csv_base_url,
        user_agent=user_agent,
        http_timeout=http_timeout,
        log_path=Path(raw_log_path) if raw_log_path else None,
    )
