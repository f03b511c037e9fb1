from __future__ import annotations

import logging
import math
from datetime import datetime

import numpy as np

from trading_terminal.models.candle import Candle
from trading_terminal.models.schemas import Direction, PathPoint, Prediction
from trading_terminal.services.market_service import MarketService
from trading_terminal.utils.indicators import compute_indicators, estimate_direction
from trading_terminal.utils.time import epoch_millis

logger = logging.getLogger(__name__)

PATH_MOVE = 0.008


def prediction_path(
    last_time: int,
    last_price: float,
    direction: Direction,
    steps: int = 15,
    interval: int = 60,
) -> list[PathPoint]:
    """Forecast line drawn after the last candle, easing out towards a 0.8% move."""
    move = last_price * (PATH_MOVE if direction == "UP" else -PATH_MOVE)
    points: list[PathPoint] = []
    point_time = last_time
    for i in range(1, steps + 1):
        point_time += interval
        progress = i / steps
        points.append(PathPoint(time=point_time, value=last_price + move * math.sin(progress * math.pi / 2)))
    return points


def _candle_step(candles: list[Candle], default: int) -> int:
    if len(candles) < 2:
        return default
    step = candles[-1].time - candles[-2].time
    return step if step > 0 else default


class PredictionService:
    def __init__(
        self,
        market_service: MarketService,
        rng: np.random.Generator | None = None,
        horizon_seconds: int = 300,
        candle_limit: int = 150,
        default_interval_seconds: int = 60,
    ) -> None:
        self.market_service = market_service
        self.rng = rng or np.random.default_rng()
        self.horizon_seconds = horizon_seconds
        self.candle_limit = candle_limit
        self.default_interval_seconds = default_interval_seconds

    def predict(self, symbol: str, interval: str = "1m", now: datetime | None = None) -> Prediction:
        candles = self.market_service.get_candles(symbol, interval=interval, limit=self.candle_limit)
        if not candles:
            raise ValueError(f"No candles available to predict {symbol}")

        indicators = compute_indicators(candles)
        direction = estimate_direction(indicators)
        last = candles[-1]
        entry_price = float(last.close)

        # Confidence and target move are randomized, independent of the indicators.
        confidence = 75 + self.rng.random() * 20
        move_pct = 0.5 + self.rng.random() * 2
        if direction == "UP":
            target_price = entry_price * (1 + move_pct / 100)
        else:
            target_price = entry_price * (1 - move_pct / 100)

        prediction_time = epoch_millis(now)
        prediction = Prediction(
            symbol=symbol,
            interval=interval,
            direction=direction,
            confidence=confidence,
            entry_price=entry_price,
            target_price=target_price,
            prediction_time=prediction_time,
            target_time=prediction_time + self.horizon_seconds * 1000,
            technicals=indicators,
            path=prediction_path(
                last_time=last.time,
                last_price=entry_price,
                direction=direction,
                interval=_candle_step(candles, self.default_interval_seconds),
            ),
        )
        logger.info(
            "Prediction generated",
            extra={"symbol": symbol, "interval": interval, "direction": direction, "rsi": indicators.rsi},
        )
        return prediction
