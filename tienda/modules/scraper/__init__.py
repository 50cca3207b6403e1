# tienda/modules/scraper/__init__.py
"""
Módulo Importador - Extracción de productos desde marketplaces

- Descarga de la página con cabeceras de navegador
- Extractores por campo (título, descripción, precio, imágenes)
- Importación al catálogo tras revisión del operador
"""

from .router import router as scraper_router
from .service import ScraperService

__all__ = [
    "scraper_router",
    "ScraperService"
]
