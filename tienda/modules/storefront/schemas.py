from pydantic import BaseModel
from typing import List, Optional

from tienda.modules.catalog.schemas import CategoryResponse
from tienda.modules.slides.schemas import HeroSlideResponse

class PriceInfo(BaseModel):
    usd: float
    ves: float
    rate: float
    usd_formatted: str
    ves_formatted: str

class StoreProduct(BaseModel):
    id: int
    name: str
    description: str
    image: str
    is_offer: bool
    in_stock: bool
    stock: int
    category: Optional[CategoryResponse] = None
    price: PriceInfo
    old_price: Optional[PriceInfo] = None

class StoreHomeResponse(BaseModel):
    success: bool = True
    exchange_rate: float
    slides: List[HeroSlideResponse]
    categories: List[CategoryResponse]
    products: List[StoreProduct]

class StoreProductDetailResponse(BaseModel):
    success: bool = True
    exchange_rate: float
    product: StoreProduct
    related: List[StoreProduct]
