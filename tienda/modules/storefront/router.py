# tienda/modules/storefront/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from tienda.config.database import get_db
from tienda.modules.currency.service import get_current_rate
from tienda.modules.sales.schemas import SaleInquiryResponse
from .service import StorefrontService
from .schemas import StoreHomeResponse, StoreProductDetailResponse

router = APIRouter(prefix="/store", tags=["Tienda"])

@router.get("/home", response_model=StoreHomeResponse)
async def get_home(
    category_id: Optional[int] = Query(None),
    offers_only: bool = Query(False),
    exchange_rate: float = Depends(get_current_rate),
    db: Session = Depends(get_db)
):
    """
    Página principal: slides activos, categorías y productos con precio en USD y Bs.
    """
    service = StorefrontService(db)
    home = await service.get_home(exchange_rate, category_id=category_id, offers_only=offers_only)
    return StoreHomeResponse(**home)

@router.get("/products/{product_id}", response_model=StoreProductDetailResponse)
async def get_product_detail(
    product_id: int,
    exchange_rate: float = Depends(get_current_rate),
    db: Session = Depends(get_db)
):
    service = StorefrontService(db)
    detail = await service.get_product_detail(product_id, exchange_rate)
    return StoreProductDetailResponse(**detail)

@router.post("/products/{product_id}/inquiry", response_model=SaleInquiryResponse)
async def request_product(
    product_id: int,
    exchange_rate: float = Depends(get_current_rate),
    db: Session = Depends(get_db)
):
    """
    Registrar intención de compra y obtener el enlace de WhatsApp
    """
    service = StorefrontService(db)
    return await service.request_product(product_id, exchange_rate)
