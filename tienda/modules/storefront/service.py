# tienda/modules/storefront/service.py
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from tienda.core.exceptions import InsufficientStock
from tienda.modules.catalog.schemas import CategoryResponse
from tienda.modules.catalog.service import CatalogService
from tienda.modules.currency.service import price_breakdown
from tienda.modules.sales.schemas import SaleInquiryRequest
from tienda.modules.sales.service import SalesService
from tienda.modules.slides.schemas import HeroSlideResponse
from tienda.modules.slides.service import SlidesService
from tienda.shared.database.models import Product
from .schemas import StoreProduct

class StorefrontService:
    """
    Vista pública de la tienda. La tasa de cambio se recibe como parámetro
    en cada operación.
    """

    def __init__(self, db: Session):
        self.db = db
        self.catalog = CatalogService(db)
        self.slides = SlidesService(db)
        self.sales = SalesService(db)

    def _to_store_product(self, product: Product, exchange_rate: float) -> StoreProduct:
        old_price = None
        if product.old_price_usd:
            old_price = price_breakdown(product.old_price_usd, exchange_rate)

        return StoreProduct(
            id=product.id,
            name=product.name,
            description=product.description,
            image=product.image,
            is_offer=product.is_offer,
            in_stock=product.stock > 0,
            stock=product.stock,
            category=CategoryResponse.model_validate(product.category) if product.category else None,
            price=price_breakdown(product.price_usd, exchange_rate),
            old_price=old_price
        )

    async def get_home(
        self,
        exchange_rate: float,
        category_id: Optional[int] = None,
        offers_only: bool = False
    ) -> Dict[str, Any]:
        products = await self.catalog.get_products(category_id=category_id, offers_only=offers_only)
        slides = await self.slides.get_active_slides()
        categories = await self.catalog.get_categories()

        return {
            "exchange_rate": exchange_rate,
            "slides": [HeroSlideResponse.model_validate(slide) for slide in slides],
            "categories": [CategoryResponse.model_validate(category) for category in categories],
            "products": [self._to_store_product(p, exchange_rate) for p in products]
        }

    async def get_product_detail(self, product_id: int, exchange_rate: float) -> Dict[str, Any]:
        product = await self.catalog.get_product(product_id)
        related = await self.catalog.get_related_products(product)

        return {
            "exchange_rate": exchange_rate,
            "product": self._to_store_product(product, exchange_rate),
            "related": [self._to_store_product(p, exchange_rate) for p in related]
        }

    async def request_product(self, product_id: int, exchange_rate: float) -> Dict[str, Any]:
        """
        "Pedir por WhatsApp": registra la intención y devuelve el enlace
        """
        product = await self.catalog.get_product(product_id)
        if product.stock <= 0:
            raise InsufficientStock(product.stock)

        inquiry = SaleInquiryRequest(
            product_id=product.id,
            product_name=product.name,
            price_usd=product.price_usd,
            exchange_rate=exchange_rate
        )
        return await self.sales.log_sale_inquiry(inquiry)
