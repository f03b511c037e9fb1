from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI

from trading_terminal.api.routes import router
from trading_terminal.config import get_settings, settings
from trading_terminal.integrations.market_data.binance_client import BinanceClient
from trading_terminal.integrations.market_data_client import MockMarketDataClient
from trading_terminal.services.market_service import MarketService
from trading_terminal.services.prediction_service import PredictionService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = FastAPI(
    title=settings.app_name,
    description="Crypto trading terminal backend with mock market data and indicator-based predictions",
    version="0.1.0",
    debug=settings.app_debug,
)


@app.on_event("startup")
def startup_event() -> None:
    settings = get_settings()
    http_client = httpx.Client(timeout=settings.market_data_timeout_seconds)
    live_client = BinanceClient(
        http_client=http_client,
        base_url=settings.binance_api_url,
        max_retries=settings.market_data_max_retries,
        backoff_seconds=settings.market_data_backoff_seconds,
    )
    market_service = MarketService(
        live_client=live_client,
        mock_client=MockMarketDataClient(interval_seconds=settings.mock_candle_interval_seconds),
        live_enabled=settings.live_data_enabled,
    )

    app.state.http_client = http_client
    app.state.market_service = market_service
    app.state.prediction_service = PredictionService(
        market_service=market_service,
        horizon_seconds=settings.prediction_horizon_seconds,
        candle_limit=settings.default_candle_limit,
        default_interval_seconds=settings.mock_candle_interval_seconds,
    )
    logging.info(
        "Market data clients initialized",
        extra={"live_data_enabled": settings.live_data_enabled, "base_url": settings.binance_api_url},
    )


@app.on_event("shutdown")
def shutdown_event() -> None:
    http_client = getattr(app.state, "http_client", None)
    if http_client is not None:
        http_client.close()


app.include_router(router)
