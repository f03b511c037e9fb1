from __future__ import annotations

from datetime import datetime

import numpy as np

from trading_terminal.models.candle import Candle
from trading_terminal.models.schemas import PriceSnapshot
from trading_terminal.utils.time import epoch_seconds

DEFAULT_BASE_PRICE = 100.0

# Full instrument names, checked before the quote suffix is stripped.
SYMBOL_BASE_PRICES: dict[str, float] = {
    "EURUSD": 1.0895,
    "USDJPY": 148.75,
    "US100": 19850.25,
    "TSLA": 245.80,
    "XAUUSD": 2045.50,
}

ASSET_BASE_PRICES: dict[str, float] = {
    "BTC": 42000.0,
    "ETH": 2200.0,
    "BNB": 300.0,
    "SOL": 95.0,
    "XRP": 0.55,
    "ADA": 0.40,
    "XAU": 2045.50,
}

QUOTE_SUFFIXES = ("USDT", "USD")

WALK_VOLATILITY = 0.002
WICK_FRACTION = 0.001


def base_asset(symbol: str) -> str:
    clean = symbol.strip().upper()
    for suffix in QUOTE_SUFFIXES:
        if clean.endswith(suffix) and len(clean) > len(suffix):
            return clean[: -len(suffix)]
    return clean


def base_price(symbol: str) -> float:
    clean = symbol.strip().upper()
    if clean in SYMBOL_BASE_PRICES:
        return SYMBOL_BASE_PRICES[clean]
    return ASSET_BASE_PRICES.get(base_asset(clean), DEFAULT_BASE_PRICE)


class MockMarketDataClient:
    """Synthetic prices for when the live feed is unavailable.

    Only the shape of the output is stable: candle count, spacing and the
    OHLC ordering. Values come from a random walk around the symbol's base
    price. Pass a seeded ``numpy.random.Generator`` for repeatable output.
    """

    def __init__(self, rng: np.random.Generator | None = None, interval_seconds: int = 60) -> None:
        self.rng = rng or np.random.default_rng()
        self.interval_seconds = interval_seconds

    def generate_candles(
        self,
        symbol: str,
        count: int,
        now: datetime | None = None,
        interval_seconds: int | None = None,
    ) -> list[Candle]:
        interval = interval_seconds or self.interval_seconds
        start = epoch_seconds(now) - count * interval
        price = base_price(symbol)

        candles: list[Candle] = []
        for i in range(count):
            vol = self.rng.random() * 0.5 + 0.5
            change = (self.rng.random() - 0.5) * price * WALK_VOLATILITY * vol
            close = price + change
            high = max(price, close) + self.rng.random() * price * WICK_FRACTION
            low = min(price, close) - self.rng.random() * price * WICK_FRACTION

            candles.append(
                Candle(
                    time=start + i * interval,
                    open=price,
                    high=high,
                    low=low,
                    close=close,
                    volume=self.rng.random() * 1000,
                )
            )
            price = close
        return candles

    def price_snapshot(self, symbol: str) -> PriceSnapshot:
        base = base_price(symbol)
        change_pct = (self.rng.random() - 0.5) * 4
        price = base * (1 + change_pct / 100)
        return PriceSnapshot(
            symbol=symbol,
            price=price,
            change_24h=price - base,
            change_percent_24h=change_pct,
            volume_24h=self.rng.random() * 1_000_000,
            high_24h=price * 1.02,
            low_24h=price * 0.98,
        )


def generate_mock_candles(symbol: str, count: int, now: datetime | None = None) -> list[Candle]:
    return MockMarketDataClient().generate_candles(symbol, count, now=now)


def mock_price_snapshot(symbol: str) -> PriceSnapshot:
    return MockMarketDataClient().price_snapshot(symbol)
