from __future__ import annotations

from collections.abc import Generator

import numpy as np
import pytest
from fastapi.testclient import TestClient

from trading_terminal.integrations.market_data_client import MockMarketDataClient
from trading_terminal.models.candle import Candle
from trading_terminal.services.market_service import MarketService
from trading_terminal.services.prediction_service import PredictionService


def _make_candles(closes: list[float], start: int = 1_700_000_000, step: int = 60) -> list[Candle]:
    return [
        Candle(time=start + i * step, open=close, high=close + 1, low=close - 1, close=close, volume=10.0)
        for i, close in enumerate(closes)
    ]


@pytest.fixture
def make_candles():
    return _make_candles


@pytest.fixture
def mock_client() -> MockMarketDataClient:
    return MockMarketDataClient(rng=np.random.default_rng(seed=42))


@pytest.fixture
def test_ctx(mock_client) -> Generator[dict, None, None]:
    from trading_terminal.api.routes import get_market_service, get_prediction_service
    from trading_terminal.app import app

    market_service = MarketService(mock_client=mock_client, live_enabled=False)
    prediction_service = PredictionService(market_service=market_service, rng=np.random.default_rng(seed=7))

    app.dependency_overrides[get_market_service] = lambda: market_service
    app.dependency_overrides[get_prediction_service] = lambda: prediction_service

    with TestClient(app) as client:
        yield {
            "client": client,
            "market_service": market_service,
            "prediction_service": prediction_service,
        }

    app.dependency_overrides.clear()
