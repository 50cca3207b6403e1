from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List, Optional
from datetime import datetime

# ==================== CLASE BASE ====================

class CatalogBaseModel(BaseModel):
    """
    Clase base para los esquemas de respuesta del catálogo
    """
    model_config = ConfigDict(from_attributes=True)

# ==================== CATEGORÍAS ====================

class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Nombre de la categoría")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str):
        if not v.strip():
            raise ValueError('El nombre no puede estar vacío')
        return v.strip()

class CategoryUpdate(CategoryCreate):
    pass

class CategoryResponse(CatalogBaseModel):
    id: int
    name: str

# ==================== PRODUCTOS ====================

class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field("", description="Descripción del producto")
    price_usd: float = Field(..., gt=0, description="Precio en USD")
    old_price_usd: Optional[float] = Field(None, gt=0, description="Precio anterior (tachado)")
    is_offer: bool = False
    stock: int = Field(0, ge=0)
    image: str = Field(..., min_length=1, description="URL de la imagen")
    category_id: int

class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price_usd: Optional[float] = Field(None, gt=0)
    old_price_usd: Optional[float] = Field(None, gt=0)
    is_offer: Optional[bool] = None
    stock: Optional[int] = Field(None, ge=0)
    image: Optional[str] = Field(None, min_length=1)
    category_id: Optional[int] = None

class ProductResponse(CatalogBaseModel):
    id: int
    name: str
    description: str
    price_usd: float
    old_price_usd: Optional[float]
    is_offer: bool
    stock: int
    image: str
    category_id: int
    category: Optional[CategoryResponse] = None
    created_at: datetime

class ProductListResponse(CatalogBaseModel):
    success: bool = True
    products: List[ProductResponse]
    total: int

# ==================== RESULTADOS ====================

class CategoryResult(CatalogBaseModel):
    success: bool = True
    category: CategoryResponse

class CategoryListResponse(CatalogBaseModel):
    success: bool = True
    categories: List[CategoryResponse]

class ProductResult(CatalogBaseModel):
    success: bool = True
    product: ProductResponse
