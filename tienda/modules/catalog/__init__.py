# tienda/modules/catalog/__init__.py
"""
Módulo de Catálogo - Categorías y Productos

- Categorías: listar, crear, renombrar, eliminar (bloqueado si tiene productos)
- Productos: listar, consultar, relacionados, crear, editar, eliminar

Arquitectura:
- router.py: Endpoints FastAPI
- service.py: Lógica de negocio
- repository.py: Acceso a datos
- schemas.py: Modelos Pydantic de request/response
"""

from .router import router as catalog_router
from .service import CatalogService
from .repository import CatalogRepository

__all__ = [
    "catalog_router",
    "CatalogService",
    "CatalogRepository"
]
