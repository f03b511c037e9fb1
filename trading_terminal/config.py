from __future__ import annotations

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def _get_first_set(*env_names: str) -> str:
    for env_name in env_names:
        value = os.getenv(env_name, "").strip()
        if value:
            return value
    return ""


def _build_binance_api_url() -> str:
    raw = _get_first_set("BINANCE_API_URL", "MARKET_DATA_BASE_URL") or "https://api.binance.com/api/v3"
    return raw.rstrip("/")


@dataclass(frozen=True)
class Settings:
    app_name: str = os.getenv("APP_NAME", "trading_terminal")
    app_debug: bool = _env_flag("APP_DEBUG", "false")

    live_data_enabled: bool = _env_flag("LIVE_DATA_ENABLED", "true")
    binance_api_url: str = _build_binance_api_url()
    market_data_timeout_seconds: float = float(os.getenv("MARKET_DATA_TIMEOUT_SECONDS", "10"))
    market_data_max_retries: int = int(os.getenv("MARKET_DATA_MAX_RETRIES", "1"))
    market_data_backoff_seconds: float = float(os.getenv("MARKET_DATA_BACKOFF_SECONDS", "0.5"))

    mock_candle_interval_seconds: int = int(os.getenv("MOCK_CANDLE_INTERVAL_SECONDS", "60"))
    default_candle_limit: int = int(os.getenv("DEFAULT_CANDLE_LIMIT", "150"))
    prediction_horizon_seconds: int = int(os.getenv("PREDICTION_HORIZON_SECONDS", "300"))


settings = Settings()


def get_settings() -> Settings:
    return settings
