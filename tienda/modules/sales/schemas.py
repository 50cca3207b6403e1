from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Optional
from datetime import datetime

# ==================== CLASE BASE PARA RESPUESTAS (Pydantic v2) ====================

class SalesBaseModel(BaseModel):
    """
    Clase base para todos los esquemas de respuesta,
    con configuración de Pydantic v2.
    """
    model_config = ConfigDict(from_attributes=True)

# ==================== REQUEST SCHEMAS ====================

class SaleCreateRequest(BaseModel):
    product_id: int = Field(..., description="Producto vendido")
    quantity: int = Field(..., gt=0, description="Cantidad")
    price_usd: Optional[float] = Field(
        None, gt=0, description="Precio unitario; por defecto el precio actual del producto"
    )
    exchange_rate: Optional[float] = Field(
        None, gt=0, description="Tasa USD/VES; por defecto la tasa BCV vigente"
    )
    notes: Optional[str] = Field(None, description="Notas adicionales")

    @field_validator('notes')
    @classmethod
    def normalize_notes(cls, v: Optional[str]):
        if v is None:
            return None
        return v.strip() or None

class SaleInquiryRequest(BaseModel):
    product_id: int
    product_name: str = Field(..., min_length=1)
    price_usd: float = Field(..., gt=0)
    exchange_rate: float = Field(..., gt=0)

# ==================== RESPONSE SCHEMAS ====================

class SaleProductInfo(SalesBaseModel):
    id: int
    name: str
    image: str
    stock: int

class SaleResponse(SalesBaseModel):
    id: int
    product_id: int
    quantity: int
    price_usd: float
    total_usd: float
    exchange_rate: float
    total_ves: float
    notes: Optional[str]
    created_at: datetime
    product: Optional[SaleProductInfo] = None

class SaleResult(SalesBaseModel):
    success: bool = True
    message: str
    sale: SaleResponse

class SalesListResponse(SalesBaseModel):
    success: bool = True
    sales: List[SaleResponse]
    total: int

class SalesStatsResponse(SalesBaseModel):
    success: bool = True
    total_sales: int
    total_revenue: float
    total_revenue_ves: float
    today_sales: int

class SaleLogResponse(SalesBaseModel):
    id: int
    product_name: str
    price_usd_at_moment: float
    exchange_rate: float
    price_ves_calculated: float
    created_at: datetime

class SaleLogListResponse(SalesBaseModel):
    success: bool = True
    logs: List[SaleLogResponse]

class SaleInquiryResponse(SalesBaseModel):
    success: bool = True
    whatsapp_url: str
    sale_log_id: Optional[int] = None
