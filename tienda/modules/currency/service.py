# tienda/modules/currency/service.py
"""
Tasa de cambio oficial (BCV) obtenida desde DolarApi.

El servicio nunca propaga errores: si la API falla devuelve la tasa de
respaldo configurada para que la tienda siga mostrando precios.
"""
import logging
import time
from datetime import datetime
from typing import Any, Dict, Optional

import requests

from tienda.config.settings import settings

logger = logging.getLogger(__name__)

# Cache en proceso: {"data": {...}, "fetched_at": <monotonic>}
_rate_cache: Dict[str, Any] = {"data": None, "fetched_at": 0.0}


def reset_cache():
    """Invalidar la tasa cacheada"""
    _rate_cache["data"] = None
    _rate_cache["fetched_at"] = 0.0


def _fallback_rate() -> Dict[str, Any]:
    rate = settings.fallback_exchange_rate
    return {
        "compra": rate,
        "venta": rate,
        "promedio": rate,
        "fecha_actualizacion": datetime.now().isoformat(),
        "is_fallback": True
    }


def _parse_rate_payload(data: Any) -> Dict[str, Any]:
    """
    Normalizar la respuesta de la API; los campos faltantes toman valores por defecto.
    Lanza ValueError si el cuerpo no es un objeto o trae valores no numéricos.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Respuesta inesperada de la API: {type(data).__name__}")

    try:
        compra = float(data.get("compra") or 0)
        venta = float(data.get("venta") or 0)
        promedio = float(data.get("promedio") or venta or 0)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Tasa no numérica en la respuesta: {str(e)}")

    return {
        "compra": compra,
        "venta": venta,
        "promedio": promedio,
        "fecha_actualizacion": data.get("fechaActualizacion") or datetime.now().isoformat(),
        "is_fallback": False
    }


def get_exchange_rate() -> Dict[str, Any]:
    """
    Obtener la tasa USD/VES; cacheada durante `exchange_rate_ttl_seconds`
    """
    now = time.monotonic()
    cached = _rate_cache["data"]
    if cached is not None and now - _rate_cache["fetched_at"] < settings.exchange_rate_ttl_seconds:
        return cached

    try:
        response = requests.get(
            settings.exchange_rate_url,
            timeout=settings.exchange_rate_timeout_seconds
        )
        response.raise_for_status()
        rate = _parse_rate_payload(response.json())
    except (requests.RequestException, ValueError) as e:
        logger.warning(f"Error obteniendo tasa de cambio, usando respaldo: {str(e)}")
        return _fallback_rate()

    _rate_cache["data"] = rate
    _rate_cache["fetched_at"] = now
    return rate


def get_current_rate() -> float:
    """
    Dependency: tasa promedio vigente, para pasarla explícitamente a los servicios
    """
    return float(get_exchange_rate()["promedio"])


def convert_usd_to_ves(usd: float, rate: float) -> float:
    return usd * rate


def format_ves(amount: float) -> str:
    """Formato es-VE: 1.234,56"""
    formatted = f"{amount:,.2f}"
    return formatted.replace(",", "_").replace(".", ",").replace("_", ".")


def format_usd(amount: float) -> str:
    """Formato en-US con símbolo: $1,234.56"""
    if amount < 0:
        return f"-${abs(amount):,.2f}"
    return f"${amount:,.2f}"


def price_breakdown(usd: float, rate: Optional[float] = None) -> Dict[str, Any]:
    """
    Precio en ambas monedas, listo para mostrar
    """
    if rate is None:
        rate = get_current_rate()
    ves = convert_usd_to_ves(usd, rate)
    return {
        "usd": usd,
        "ves": round(ves, 2),
        "rate": rate,
        "usd_formatted": format_usd(usd),
        "ves_formatted": format_ves(ves)
    }
