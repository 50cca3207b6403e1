# tienda/modules/sales/__init__.py
"""
Módulo de Ventas - Libro de ventas de la tienda

- Registro de ventas con descuento atómico de stock
- Eliminación de ventas con restauración de stock
- Estadísticas (totales USD/VES, ventas del día)
- Registro de intenciones de compra desde la tienda (WhatsApp)

Arquitectura:
- router.py: Endpoints FastAPI
- service.py: Lógica de negocio
- repository.py: Acceso a datos
- schemas.py: Modelos Pydantic de request/response
"""

from .router import router as sales_router
from .service import SalesService
from .repository import SalesRepository

__all__ = [
    "sales_router",
    "SalesService",
    "SalesRepository"
]
