from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


Direction = Literal["UP", "DOWN"]


class PriceSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    price: float
    change_24h: float = Field(alias="change24h")
    change_percent_24h: float = Field(alias="changePercent24h")
    volume_24h: float = Field(alias="volume24h")
    high_24h: float = Field(alias="high24h")
    low_24h: float = Field(alias="low24h")


class IndicatorSet(BaseModel):
    rsi: float = Field(ge=0.0, le=100.0)
    macd: float
    trend: float


class PathPoint(BaseModel):
    time: int
    value: float


class Prediction(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    interval: str
    direction: Direction
    confidence: float
    entry_price: float = Field(alias="entryPrice")
    target_price: float = Field(alias="targetPrice")
    prediction_time: int = Field(alias="predictionTime")
    target_time: int = Field(alias="targetTime")
    technicals: IndicatorSet
    path: list[PathPoint] = Field(default_factory=list)


class PredictRequest(BaseModel):
    symbol: str = Field(min_length=1)
    interval: str = "1m"


class HealthResponse(BaseModel):
    status: str
    timestamp: str
