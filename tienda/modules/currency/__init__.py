# tienda/modules/currency/__init__.py
"""
Módulo de Tasa de Cambio - USD/VES (BCV)
"""

from .router import router as currency_router
from .service import get_exchange_rate, get_current_rate, convert_usd_to_ves, format_ves, format_usd

__all__ = [
    "currency_router",
    "get_exchange_rate",
    "get_current_rate",
    "convert_usd_to_ves",
    "format_ves",
    "format_usd"
]
