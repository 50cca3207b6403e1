# tienda/modules/media/__init__.py
"""
Módulo de Archivos - Subida de imágenes y videos (disco local o Cloudinary)
"""

from .router import router as media_router
from .service import MediaService, LocalStorageBackend, CloudinaryBackend

__all__ = [
    "media_router",
    "MediaService",
    "LocalStorageBackend",
    "CloudinaryBackend"
]
