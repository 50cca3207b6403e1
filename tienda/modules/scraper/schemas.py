from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional
from enum import Enum

MAX_NAME_LENGTH = 255

class ProductSource(str, Enum):
    aliexpress = "aliexpress"
    alibaba = "alibaba"

SOURCE_LABELS = {
    ProductSource.aliexpress: "AliExpress",
    ProductSource.alibaba: "Alibaba",
}

# ==================== REQUEST SCHEMAS ====================

class ScrapeRequest(BaseModel):
    url: str = Field(..., description="URL del producto en AliExpress o Alibaba")

class ScrapedProduct(BaseModel):
    """
    Registro transitorio extraído de la página; el operador lo revisa antes de importarlo
    """
    title: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    description: str = ""
    price: float = Field(0.0, ge=0)
    images: List[str] = []
    attributes: Dict[str, str] = {}
    source: ProductSource

class ImportScrapedRequest(BaseModel):
    product: ScrapedProduct
    category_id: int
    custom_price: Optional[float] = Field(None, gt=0, description="Precio que reemplaza al extraído")
    custom_name: Optional[str] = Field(
        None, max_length=MAX_NAME_LENGTH, description="Nombre que reemplaza al título extraído"
    )

    @field_validator('custom_name')
    @classmethod
    def normalize_custom_name(cls, v: Optional[str]):
        if v is None:
            return None
        return v.strip() or None

# ==================== RESPONSE SCHEMAS ====================

class ScrapeResponse(BaseModel):
    success: bool = True
    data: ScrapedProduct

class ImportScrapedResponse(BaseModel):
    success: bool = True
    product_id: int
    message: str
