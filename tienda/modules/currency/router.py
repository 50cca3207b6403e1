# tienda/modules/currency/router.py
from fastapi import APIRouter, Query
from fastapi.concurrency import run_in_threadpool

from . import service
from .schemas import ExchangeRateResponse, ConversionResponse

router = APIRouter(prefix="/exchange-rate", tags=["Tasa de cambio"])

@router.get("", response_model=ExchangeRateResponse)
async def get_exchange_rate():
    """
    Tasa oficial BCV (cacheada una hora; valor de respaldo si la API falla)
    """
    rate = await run_in_threadpool(service.get_exchange_rate)
    return ExchangeRateResponse(**rate)

@router.get("/convert", response_model=ConversionResponse)
async def convert(usd: float = Query(..., ge=0, description="Monto en USD")):
    breakdown = await run_in_threadpool(service.price_breakdown, usd)
    return ConversionResponse(**breakdown)
