# tienda/modules/media/router.py
from fastapi import APIRouter, File, UploadFile
from pydantic import BaseModel

from .service import MediaService

router = APIRouter(prefix="/uploads", tags=["Admin - Archivos"])

class UploadResponse(BaseModel):
    success: bool = True
    url: str

@router.post("", response_model=UploadResponse, status_code=201)
async def upload_file(file: UploadFile = File(..., description="Imagen (o video en Cloudinary)")):
    """
    Subir imagen/video y obtener su URL pública

    - Local: JPG, PNG, WebP, GIF hasta 5MB
    - Cloudinary: además MP4/WebM; 10MB imágenes, 60MB videos
    """
    service = MediaService()
    result = await service.upload(file)
    return UploadResponse(url=result["url"])
