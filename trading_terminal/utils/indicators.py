from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from trading_terminal.models.candle import Candle
from trading_terminal.models.schemas import Direction, IndicatorSet

RSI_PERIOD = 14
MACD_FAST = 12
MACD_SLOW = 26
TREND_LOOKBACK = 10
NEUTRAL_RSI = 50.0


def closes_of(candles: Sequence[Candle]) -> pd.Series:
    return pd.Series([float(c.close) for c in candles], dtype="float64")


def ema(series: pd.Series, period: int) -> pd.Series:
    # adjust=False seeds with the first value: ema_t = (p_t - ema_{t-1}) * k + ema_{t-1}
    return series.ewm(span=period, adjust=False).mean()


def rsi(series: pd.Series, period: int = RSI_PERIOD) -> float:
    """Simple-average RSI over the last ``period`` close-to-close deltas.

    Returns the neutral 50 when fewer than ``period`` closes are given and
    100 when the window holds no losses.
    """
    if len(series) < period:
        return NEUTRAL_RSI

    delta = series.diff().tail(period)
    gains = float(delta[delta > 0].sum())
    losses = float(-delta[delta < 0].sum())

    avg_gain = gains / period
    avg_loss = losses / period
    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return float(100 - (100 / (1 + rs)))


def macd(series: pd.Series) -> float:
    if len(series) < MACD_SLOW:
        return 0.0
    fast = ema(series, MACD_FAST).iloc[-1]
    slow = ema(series, MACD_SLOW).iloc[-1]
    return float(fast - slow)


def trend(series: pd.Series, lookback: int = TREND_LOOKBACK) -> float:
    if len(series) < lookback:
        return 0.0
    recent = series.tail(lookback)
    first = float(recent.iloc[0])
    last = float(recent.iloc[-1])
    if first == 0:
        return 0.0
    return (last - first) / first


def compute_indicators(candles: Sequence[Candle]) -> IndicatorSet:
    closes = closes_of(candles)
    return IndicatorSet(rsi=rsi(closes), macd=macd(closes), trend=trend(closes))


def directional_score(indicators: IndicatorSet) -> float:
    score = 0.0
    if 30 <= indicators.rsi <= 70:
        score += 0.3
    if indicators.macd > 0:
        score += 0.3
    if indicators.trend > 0:
        score += 0.4
    return score


def estimate_direction(indicators: IndicatorSet) -> Direction:
    return "UP" if directional_score(indicators) > 0.5 else "DOWN"
