from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from trading_terminal.config import settings
from trading_terminal.models.candle import Candle
from trading_terminal.models.schemas import HealthResponse, PredictRequest, Prediction
from trading_terminal.services.market_service import DEFAULT_MARKETS, MarketService
from trading_terminal.services.prediction_service import PredictionService
from trading_terminal.utils.time import utc_now
from trading_terminal.utils.validation import validate_symbol

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["trading-terminal"])


def get_market_service(request: Request) -> MarketService:
    return request.app.state.market_service


def get_prediction_service(request: Request) -> PredictionService:
    return request.app.state.prediction_service


@router.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="OK", timestamp=utc_now().isoformat())


@router.get("/crypto/prices")
def get_prices(
    symbol: str | None = Query(default=None, description="Asset code, e.g. BTC"),
    market_service: MarketService = Depends(get_market_service),
) -> dict:
    clean = symbol.strip().upper() if symbol else ""
    if clean in DEFAULT_MARKETS:
        try:
            snapshot = market_service.get_price(clean)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return snapshot.model_dump(by_alias=True)

    prices = market_service.get_mock_prices()
    return {key: snapshot.model_dump(by_alias=True) for key, snapshot in prices.items()}


@router.get("/crypto/candles/{symbol}", response_model=list[Candle])
def get_candles(
    symbol: str,
    interval: str = Query("1m"),
    limit: int = Query(settings.default_candle_limit, ge=1, le=1000),
    market_service: MarketService = Depends(get_market_service),
):
    try:
        return market_service.get_candles(symbol, interval=interval, limit=limit)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/ai/predict", response_model=Prediction)
def predict(
    payload: PredictRequest,
    prediction_service: PredictionService = Depends(get_prediction_service),
):
    try:
        symbol = validate_symbol(payload.symbol)
        return prediction_service.predict(symbol, interval=payload.interval)
    except ValueError as exc:
        logger.warning("Prediction request rejected", extra={"symbol": payload.symbol, "error": str(exc)})
        raise HTTPException(status_code=400, detail=str(exc)) from exc
