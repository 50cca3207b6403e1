# tienda/modules/catalog/service.py
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tienda.core.exceptions import (
    CategoryExists, CategoryInUse, CategoryNotFound, ConflictError, ProductNotFound
)
from tienda.shared.database.models import Category, Product
from .repository import CatalogRepository
from .schemas import CategoryCreate, CategoryUpdate, ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

# Campos que pueden quedar en NULL al editar un producto
NULLABLE_PRODUCT_FIELDS = {"old_price_usd"}

class CatalogService:
    """
    Servicio del catálogo: categorías y productos
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = CatalogRepository(db)

    # ==================== CATEGORÍAS ====================

    async def get_categories(self) -> List[Category]:
        return self.repository.get_categories()

    async def get_category(self, category_id: int) -> Category:
        category = self.repository.get_category_by_id(category_id)
        if not category:
            raise CategoryNotFound(category_id)
        return category

    async def create_category(self, category_data: CategoryCreate) -> Category:
        if self.repository.get_category_by_name(category_data.name):
            raise CategoryExists(category_data.name)

        try:
            return self.repository.create_category(category_data.name)
        except IntegrityError:
            self.db.rollback()
            raise CategoryExists(category_data.name)

    async def update_category(self, category_id: int, category_data: CategoryUpdate) -> Category:
        category = await self.get_category(category_id)

        existing = self.repository.get_category_by_name(category_data.name)
        if existing and existing.id != category.id:
            raise CategoryExists(category_data.name)

        try:
            return self.repository.update_category(category, category_data.name)
        except IntegrityError:
            self.db.rollback()
            raise CategoryExists(category_data.name)

    async def delete_category(self, category_id: int) -> None:
        """
        Eliminar categoría solo si ningún producto la referencia.

        La verificación es un conteo previo al borrado, no una restricción
        de la base de datos.
        """
        category = await self.get_category(category_id)

        product_count = self.repository.count_products_in_category(category_id)
        if product_count > 0:
            raise CategoryInUse(category_id, product_count)

        self.repository.delete_category(category)
        logger.info(f"Categoría eliminada: {category_id}")

    # ==================== PRODUCTOS ====================

    async def get_products(
        self,
        category_id: Optional[int] = None,
        offers_only: bool = False
    ) -> List[Product]:
        return self.repository.get_products(category_id=category_id, offers_only=offers_only)

    async def get_product(self, product_id: int) -> Product:
        product = self.repository.get_product_by_id(product_id)
        if not product:
            raise ProductNotFound(product_id)
        return product

    async def get_related_products(self, product: Product, limit: int = 4) -> List[Product]:
        return self.repository.get_related_products(
            category_id=product.category_id,
            exclude_id=product.id,
            limit=limit
        )

    async def create_product(self, product_data: ProductCreate) -> Product:
        await self.get_category(product_data.category_id)

        product = self.repository.create_product(product_data.model_dump())
        logger.info(f"Producto creado: {product.id} - {product.name}")
        return product

    async def update_product(self, product_id: int, product_data: ProductUpdate) -> Product:
        product = await self.get_product(product_id)

        changes = {
            field: value
            for field, value in product_data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_PRODUCT_FIELDS
        }

        if "category_id" in changes:
            await self.get_category(changes["category_id"])

        return self.repository.update_product(product, changes)

    async def delete_product(self, product_id: int) -> None:
        product = await self.get_product(product_id)

        sales_count = self.repository.count_sales_for_product(product_id)
        if sales_count > 0:
            raise ConflictError(
                "El producto tiene ventas registradas; elimine las ventas primero",
                product_id=product_id,
                sales_count=sales_count
            )

        self.repository.delete_product(product)
        logger.info(f"Producto eliminado: {product_id}")
