# tienda/modules/media/service.py
import io
import logging
import secrets
import time
from pathlib import Path
from typing import Dict, Optional, Set

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool

from tienda.config.settings import settings
from tienda.core.exceptions import ValidationError, InvalidType, TooLarge, UploadFailed

logger = logging.getLogger(__name__)

IMAGE_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}
VIDEO_TYPES = {
    "video/mp4": "mp4",
    "video/webm": "webm",
}

MB = 1024 * 1024


class LocalStorageBackend:
    """Guarda imágenes en el directorio público servido por la propia app"""

    name = "local"
    allowed_types: Set[str] = set(IMAGE_TYPES)

    def __init__(self, upload_dir: str, url_prefix: str, max_size: int):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_size = max_size

    def max_size_for(self, content_type: str) -> int:
        return self.max_size

    def generate_filename(self, content_type: str) -> str:
        timestamp = int(time.time() * 1000)
        return f"{timestamp}-{secrets.token_hex(4)}.{IMAGE_TYPES[content_type]}"

    def save(self, content: bytes, content_type: str) -> str:
        filename = self.generate_filename(content_type)
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            (self.upload_dir / filename).write_bytes(content)
        except OSError as e:
            logger.error(f"Error guardando archivo {filename}: {str(e)}")
            raise UploadFailed("Error al guardar el archivo")
        return f"{self.url_prefix}/{filename}"


class CloudinaryBackend:
    """Sube imágenes y videos a Cloudinary"""

    name = "cloudinary"
    allowed_types: Set[str] = set(IMAGE_TYPES) | set(VIDEO_TYPES)

    def __init__(self, folder: str, max_image_size: int, max_video_size: int):
        self.folder = folder
        self.max_image_size = max_image_size
        self.max_video_size = max_video_size

    def max_size_for(self, content_type: str) -> int:
        if content_type in VIDEO_TYPES:
            return self.max_video_size
        return self.max_image_size

    def save(self, content: bytes, content_type: str) -> str:
        if not settings.cloudinary_cloud_name:
            raise UploadFailed("Cloudinary no está configurado")

        cloudinary.config(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            secure=True
        )
        try:
            result = cloudinary.uploader.upload(
                io.BytesIO(content),
                folder=self.folder,
                resource_type="video" if content_type in VIDEO_TYPES else "image"
            )
        except CloudinaryError as e:
            logger.error(f"Error subiendo archivo a Cloudinary: {str(e)}")
            raise UploadFailed("Error al subir el archivo a la nube")

        return result["secure_url"]


def get_storage_backend(backend_name: Optional[str] = None):
    backend_name = backend_name or settings.upload_backend
    if backend_name == "cloudinary":
        return CloudinaryBackend(
            folder=settings.cloudinary_folder,
            max_image_size=settings.max_image_size,
            max_video_size=settings.max_video_size
        )
    return LocalStorageBackend(
        upload_dir=settings.upload_dir,
        url_prefix=settings.upload_url_prefix,
        max_size=settings.max_local_image_size
    )


class MediaService:
    """
    Validación y subida de archivos (imágenes; videos solo en Cloudinary)
    """

    def __init__(self, backend=None):
        self.backend = backend or get_storage_backend()

    def validate(self, content_type: Optional[str], size: int):
        """
        Tipo y tamaño se verifican antes de cualquier escritura
        """
        if content_type not in self.backend.allowed_types:
            allowed = ", ".join(sorted(self.backend.allowed_types))
            raise InvalidType(
                f"Tipo de archivo no válido. Permitidos: {allowed}",
                content_type=content_type
            )

        max_size = self.backend.max_size_for(content_type)
        if size > max_size:
            raise TooLarge(
                f"El archivo es muy grande. Máximo {max_size // MB}MB",
                size=size,
                max_size=max_size
            )

    async def upload(self, file: Optional[UploadFile]) -> Dict[str, str]:
        if file is None or not file.filename:
            raise ValidationError("No se recibió ningún archivo")

        if file.size is not None:
            self.validate(file.content_type, file.size)

        content = await file.read()
        self.validate(file.content_type, len(content))

        url = await run_in_threadpool(self.backend.save, content, file.content_type)
        logger.info(f"Archivo subido ({self.backend.name}): {url}")
        return {"url": url}
