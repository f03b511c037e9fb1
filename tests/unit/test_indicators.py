from __future__ import annotations

import math

import pytest

from trading_terminal.models.schemas import IndicatorSet
from trading_terminal.utils.indicators import (
    closes_of,
    compute_indicators,
    directional_score,
    estimate_direction,
    macd,
    rsi,
    trend,
)


def _manual_ema(values: list[float], period: int) -> float:
    k = 2 / (period + 1)
    out = values[0]
    for value in values[1:]:
        out = (value - out) * k + out
    return out


def test_short_series_return_neutral_values(make_candles) -> None:
    candles = make_candles([100 + i for i in range(9)])
    closes = closes_of(candles)

    assert rsi(closes_of(candles[:13])) == 50.0
    assert macd(closes) == 0.0
    assert trend(closes) == 0.0


def test_empty_input_yields_neutral_indicator_set() -> None:
    indicators = compute_indicators([])

    assert indicators.rsi == 50.0
    assert indicators.macd == 0.0
    assert indicators.trend == 0.0


def test_rsi_balanced_gains_and_losses(make_candles) -> None:
    closes = closes_of(make_candles([10.0, 11.0] * 7 + [10.0]))

    assert rsi(closes) == pytest.approx(50.0)


def test_rsi_flat_series_does_not_produce_nan(make_candles) -> None:
    closes = closes_of(make_candles([250.0] * 20))

    value = rsi(closes)

    assert not math.isnan(value)
    assert value == 100.0


def test_rsi_exact_period_uses_available_deltas(make_candles) -> None:
    closes = closes_of(make_candles([100 + i for i in range(14)]))

    assert rsi(closes) == 100.0


def test_rsi_only_losses_is_zero(make_candles) -> None:
    closes = closes_of(make_candles([200 - i for i in range(20)]))

    assert rsi(closes) == 0.0


def test_rsi_stays_within_bounds_on_random_walks(mock_client) -> None:
    for count in range(0, 60, 3):
        closes = closes_of(mock_client.generate_candles("BTCUSD", count))
        assert 0.0 <= rsi(closes) <= 100.0


def test_macd_matches_ema_recurrence_and_is_deterministic(mock_client) -> None:
    candles = mock_client.generate_candles("ETHUSD", 40)
    values = [c.close for c in candles]
    closes = closes_of(candles)

    expected = _manual_ema(values, 12) - _manual_ema(values, 26)

    assert macd(closes) == pytest.approx(expected, rel=1e-9)
    assert macd(closes) == macd(closes_of(candles))


def test_trend_uses_last_ten_closes(make_candles) -> None:
    closes = closes_of(make_candles([500.0] * 5 + [100.0 + i for i in range(10)]))

    assert trend(closes) == pytest.approx((109.0 - 100.0) / 100.0)


def test_rising_closes_point_up(make_candles) -> None:
    candles = make_candles([100.0 + i for i in range(30)])

    indicators = compute_indicators(candles)

    assert indicators.trend > 0
    assert indicators.macd > 0
    assert directional_score(indicators) == pytest.approx(0.7)
    assert estimate_direction(indicators) == "UP"


def test_falling_closes_point_down(make_candles) -> None:
    candles = make_candles([200.0 - i for i in range(30)])

    indicators = compute_indicators(candles)

    assert indicators.trend < 0
    assert indicators.macd < 0
    assert estimate_direction(indicators) == "DOWN"


@pytest.mark.parametrize(
    ("indicators", "score", "direction"),
    [
        (IndicatorSet(rsi=50.0, macd=-1.0, trend=0.01), 0.7, "UP"),
        (IndicatorSet(rsi=50.0, macd=2.0, trend=-0.01), 0.6, "UP"),
        (IndicatorSet(rsi=80.0, macd=2.0, trend=-0.01), 0.3, "DOWN"),
        (IndicatorSet(rsi=20.0, macd=-2.0, trend=0.02), 0.4, "DOWN"),
        (IndicatorSet(rsi=30.0, macd=0.0, trend=0.0), 0.3, "DOWN"),
    ],
)
def test_directional_score_weights(indicators, score, direction) -> None:
    assert directional_score(indicators) == pytest.approx(score)
    assert estimate_direction(indicators) == direction


def test_trend_with_zero_first_close_is_flat(make_candles) -> None:
    closes = closes_of(make_candles([0.0] + [1.0] * 9))

    assert trend(closes) == 0.0
