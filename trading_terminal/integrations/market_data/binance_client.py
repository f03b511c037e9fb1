from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from trading_terminal.models.candle import Candle
from trading_terminal.models.schemas import PriceSnapshot

logger = logging.getLogger(__name__)


class MarketDataError(RuntimeError):
    def __init__(self, symbol: str, message: str) -> None:
        super().__init__(message)
        self.symbol = symbol


def to_api_symbol(symbol: str) -> str:
    clean = symbol.strip().upper()
    if clean in {"XAU", "XAUUSD"}:
        return "XAUUSDT"
    if clean.endswith("USDT"):
        return clean
    if "USD" in clean:
        return clean.replace("USD", "USDT", 1)
    return f"{clean}USDT"


class BinanceClient:
    def __init__(
        self,
        http_client: httpx.Client,
        base_url: str = "https://api.binance.com/api/v3",
        max_retries: int = 1,
        backoff_seconds: float = 0.5,
    ) -> None:
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")
        self.max_retries = max(0, max_retries)
        self.backoff_seconds = max(0.0, backoff_seconds)

    def _get_json(self, symbol: str, path: str, params: dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        last_error: Exception | None = None

        for attempt in range(self.max_retries + 1):
            try:
                response = self.http_client.get(url, params=params)
                response.raise_for_status()
                return response.json()
            except (httpx.HTTPError, ValueError) as exc:
                last_error = exc
                if attempt >= self.max_retries:
                    break

                sleep_for = self.backoff_seconds * (2**attempt)
                logger.warning(
                    "Binance request failed, retrying",
                    extra={"symbol": symbol, "path": path, "attempt": attempt + 1, "error": str(exc)},
                )
                time.sleep(sleep_for)

        raise MarketDataError(symbol=symbol, message=f"Binance request {path} failed for {symbol}: {last_error}")

    def fetch_price(self, symbol: str) -> PriceSnapshot:
        api_symbol = to_api_symbol(symbol)
        data = self._get_json(symbol, "/ticker/24hr", {"symbol": api_symbol})
        try:
            return PriceSnapshot(
                symbol=symbol,
                price=float(data["lastPrice"]),
                change_24h=float(data["priceChange"]),
                change_percent_24h=float(data["priceChangePercent"]),
                volume_24h=float(data["volume"]),
                high_24h=float(data["highPrice"]),
                low_24h=float(data["lowPrice"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise MarketDataError(symbol=symbol, message=f"Malformed ticker payload for {api_symbol}: {exc}") from exc

    def fetch_candles(self, symbol: str, interval: str = "1m", limit: int = 100) -> list[Candle]:
        api_symbol = to_api_symbol(symbol)
        logger.info("Fetching Binance klines", extra={"symbol": api_symbol, "interval": interval, "limit": limit})
        rows = self._get_json(symbol, "/klines", {"symbol": api_symbol, "interval": interval, "limit": limit})
        try:
            candles = [
                Candle(
                    time=int(row[0]) // 1000,
                    open=float(row[1]),
                    high=float(row[2]),
                    low=float(row[3]),
                    close=float(row[4]),
                    volume=float(row[5]),
                )
                for row in rows
            ]
        except (IndexError, TypeError, ValueError) as exc:
            raise MarketDataError(symbol=symbol, message=f"Malformed kline payload for {api_symbol}: {exc}") from exc

        if not candles:
            raise MarketDataError(symbol=symbol, message=f"No klines returned for {api_symbol}")
        return candles
