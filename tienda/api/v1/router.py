# tienda/api/v1/router.py
from fastapi import APIRouter

from tienda.config.settings import settings
from tienda.modules.catalog import catalog_router
from tienda.modules.currency import currency_router
from tienda.modules.media import media_router
from tienda.modules.sales import sales_router
from tienda.modules.scraper import scraper_router
from tienda.modules.slides import slides_router
from tienda.modules.storefront import storefront_router

# Crear router principal de la API v1
api_router = APIRouter(prefix="/api/v1")

# ==================== TIENDA (PÚBLICO) ====================

api_router.include_router(storefront_router)
api_router.include_router(currency_router)

# ==================== ADMINISTRACIÓN ====================

api_router.include_router(catalog_router, prefix="/admin")
api_router.include_router(sales_router, prefix="/admin")
api_router.include_router(slides_router, prefix="/admin")
api_router.include_router(media_router, prefix="/admin")
api_router.include_router(scraper_router, prefix="/admin")

# ==================== ENDPOINTS RAÍZ ====================

@api_router.get("/")
async def api_root():
    """Root endpoint de la API"""
    return {
        "message": f"{settings.app_name} v1",
        "version": settings.version,
        "status": "active",
        "available_endpoints": {
            "store": "/api/v1/store",
            "exchange_rate": "/api/v1/exchange-rate",
            "catalog": "/api/v1/admin/catalog",
            "sales": "/api/v1/admin/sales",
            "slides": "/api/v1/admin/slides",
            "uploads": "/api/v1/admin/uploads",
            "importer": "/api/v1/admin/importer"
        }
    }

@api_router.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.version,
        "upload_backend": settings.upload_backend
    }
