# tienda/modules/storefront/__init__.py
"""
Módulo Tienda - Vista pública y pedido por WhatsApp
"""

from .router import router as storefront_router
from .service import StorefrontService

__all__ = [
    "storefront_router",
    "StorefrontService"
]
