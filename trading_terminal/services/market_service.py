from __future__ import annotations

import logging

from trading_terminal.integrations.market_data.binance_client import BinanceClient, MarketDataError
from trading_terminal.integrations.market_data_client import MockMarketDataClient
from trading_terminal.models.candle import Candle
from trading_terminal.models.schemas import PriceSnapshot
from trading_terminal.utils.validation import validate_symbol

logger = logging.getLogger(__name__)

DEFAULT_MARKETS = ("BTC", "ETH", "BNB", "SOL", "XRP", "ADA")

# Binance kline interval codes.
INTERVAL_SECONDS: dict[str, int] = {
    "1m": 60,
    "3m": 180,
    "5m": 300,
    "15m": 900,
    "30m": 1800,
    "1h": 3600,
    "2h": 7200,
    "4h": 14400,
    "6h": 21600,
    "8h": 28800,
    "12h": 43200,
    "1d": 86400,
    "3d": 259200,
    "1w": 604800,
    "1M": 2592000,
}


class MarketService:
    """Live prices when the feed answers, mock data when it does not."""

    def __init__(
        self,
        live_client: BinanceClient | None = None,
        mock_client: MockMarketDataClient | None = None,
        live_enabled: bool = True,
    ) -> None:
        self.live_client = live_client
        self.mock_client = mock_client or MockMarketDataClient()
        self.live_enabled = live_enabled and live_client is not None

    def get_price(self, symbol: str) -> PriceSnapshot:
        clean = validate_symbol(symbol)
        if self.live_enabled:
            try:
                return self.live_client.fetch_price(clean)
            except MarketDataError as exc:
                logger.warning("Live price unavailable, using mock data", extra={"symbol": clean, "error": str(exc)})
        return self.mock_client.price_snapshot(clean)

    def get_candles(self, symbol: str, interval: str = "1m", limit: int = 150) -> list[Candle]:
        clean = validate_symbol(symbol)
        if self.live_enabled:
            try:
                return self.live_client.fetch_candles(clean, interval=interval, limit=limit)
            except MarketDataError as exc:
                logger.warning(
                    "Live candles unavailable, using mock data",
                    extra={"symbol": clean, "interval": interval, "error": str(exc)},
                )
        return self.mock_client.generate_candles(clean, limit, interval_seconds=INTERVAL_SECONDS.get(interval))

    def get_mock_prices(self) -> dict[str, PriceSnapshot]:
        return {symbol: self.mock_client.price_snapshot(symbol) for symbol in DEFAULT_MARKETS}
