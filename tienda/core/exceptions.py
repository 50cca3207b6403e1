# tienda/core/exceptions.py
"""
Errores de dominio de la tienda.

Los servicios lanzan estas excepciones; el handler registrado en la app las
convierte en la respuesta de fallo estándar:

    {"success": false, "error": "<mensaje>", "code": "<código>", ...detalles}
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Error base de la tienda"""
    status_code = 500
    code = "store_error"

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error": self.message,
            "code": self.code,
            **self.details
        }

# ==================== CATEGORÍAS BASE ====================

class ValidationError(StoreError):
    status_code = 400
    code = "validation_error"

class NotFoundError(StoreError):
    status_code = 404
    code = "not_found"

class ConflictError(StoreError):
    status_code = 409
    code = "conflict"

class UpstreamError(StoreError):
    status_code = 502
    code = "upstream_error"

# ==================== NO ENCONTRADOS ====================

class ProductNotFound(NotFoundError):
    code = "product_not_found"

    def __init__(self, product_id: int):
        super().__init__("Producto no encontrado", product_id=product_id)

class SaleNotFound(NotFoundError):
    code = "sale_not_found"

    def __init__(self, sale_id: int):
        super().__init__("Venta no encontrada", sale_id=sale_id)

class CategoryNotFound(NotFoundError):
    code = "category_not_found"

    def __init__(self, category_id: int):
        super().__init__("Categoría no encontrada", category_id=category_id)

class SlideNotFound(NotFoundError):
    code = "slide_not_found"

    def __init__(self, slide_id: int):
        super().__init__("Slide no encontrado", slide_id=slide_id)

# ==================== CONFLICTOS ====================

class InsufficientStock(ConflictError):
    code = "insufficient_stock"

    def __init__(self, available: int):
        super().__init__(f"Stock insuficiente. Disponible: {available}", available=available)
        self.available = available

class CategoryInUse(ConflictError):
    code = "category_in_use"

    def __init__(self, category_id: int, product_count: int):
        super().__init__(
            f"La categoría tiene {product_count} producto(s) asociados",
            category_id=category_id,
            product_count=product_count
        )

class CategoryExists(ConflictError):
    code = "category_exists"

    def __init__(self, name: str):
        super().__init__(f"Ya existe una categoría llamada '{name}'", name=name)

# ==================== VALIDACIÓN ====================

class InvalidType(ValidationError):
    code = "invalid_type"

class TooLarge(ValidationError):
    code = "too_large"

class UnsupportedSource(ValidationError):
    code = "unsupported_source"

    def __init__(self, url: str):
        super().__init__("URL no soportada. Usa AliExpress o Alibaba.", url=url)

# ==================== SERVICIOS EXTERNOS ====================

class FetchFailed(UpstreamError):
    code = "fetch_failed"

    def __init__(self, status_code: Optional[int] = None, reason: Optional[str] = None):
        if status_code is not None:
            message = f"Error al acceder: {status_code}"
        else:
            message = f"Error al acceder: {reason or 'sin respuesta'}"
        super().__init__(message, upstream_status=status_code)
        self.upstream_status = status_code

class ExtractionFailed(UpstreamError):
    code = "extraction_failed"

    def __init__(self):
        super().__init__(
            "No se pudo extraer información del producto. La página puede estar "
            "bloqueando solicitudes automáticas o requiere verificación humana."
        )

class UploadFailed(UpstreamError):
    code = "upload_failed"

    def __init__(self, message: str = "Error al subir el archivo"):
        super().__init__(message)

# ==================== HANDLER ====================

def setup_exception_handlers(app: FastAPI):
    """Registrar la conversión de errores de dominio a respuestas JSON"""

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} - {exc.code}: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} - {exc.code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
