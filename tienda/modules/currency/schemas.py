from pydantic import BaseModel

class ExchangeRateResponse(BaseModel):
    success: bool = True
    compra: float
    venta: float
    promedio: float
    fecha_actualizacion: str
    is_fallback: bool = False

class ConversionResponse(BaseModel):
    success: bool = True
    usd: float
    ves: float
    rate: float
    usd_formatted: str
    ves_formatted: str
