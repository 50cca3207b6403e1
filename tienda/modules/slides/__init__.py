# tienda/modules/slides/__init__.py
"""
Módulo de Slides - Carrusel promocional de la página principal
"""

from .router import router as slides_router
from .service import SlidesService
from .repository import SlidesRepository

__all__ = [
    "slides_router",
    "SlidesService",
    "SlidesRepository"
]
