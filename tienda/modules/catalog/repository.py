# tienda/modules/catalog/repository.py
from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import func, desc

from tienda.shared.database.models import Category, Product, Sale

class CatalogRepository:
    """
    Repositorio para categorías y productos
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== CATEGORÍAS ====================

    def get_categories(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.name.asc()).all()

    def get_category_by_id(self, category_id: int) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()

    def get_category_by_name(self, name: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.name == name).first()

    def create_category(self, name: str) -> Category:
        category = Category(name=name)

        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)

        return category

    def update_category(self, category: Category, name: str) -> Category:
        category.name = name
        self.db.commit()
        self.db.refresh(category)

        return category

    def count_products_in_category(self, category_id: int) -> int:
        """
        Contar productos que referencian una categoría
        """
        return self.db.query(func.count(Product.id)).filter(
            Product.category_id == category_id
        ).scalar() or 0

    def delete_category(self, category: Category):
        self.db.delete(category)
        self.db.commit()

    # ==================== PRODUCTOS ====================

    def get_products(
        self,
        category_id: Optional[int] = None,
        offers_only: bool = False
    ) -> List[Product]:
        """
        Listar productos, más recientes primero
        """
        query = self.db.query(Product).options(joinedload(Product.category))

        if category_id is not None:
            query = query.filter(Product.category_id == category_id)
        if offers_only:
            query = query.filter(Product.is_offer.is_(True))

        return query.order_by(desc(Product.created_at), desc(Product.id)).all()

    def get_product_by_id(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).options(
            joinedload(Product.category)
        ).filter(Product.id == product_id).first()

    def get_related_products(
        self,
        category_id: int,
        exclude_id: int,
        limit: int = 4
    ) -> List[Product]:
        """
        Productos de la misma categoría, excluyendo el actual
        """
        return self.db.query(Product).options(joinedload(Product.category)).filter(
            Product.category_id == category_id,
            Product.id != exclude_id
        ).limit(limit).all()

    def create_product(self, product_data: Dict[str, Any]) -> Product:
        product = Product(**product_data)

        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)

        return product

    def update_product(self, product: Product, changes: Dict[str, Any]) -> Product:
        for field, value in changes.items():
            setattr(product, field, value)

        self.db.commit()
        self.db.refresh(product)

        return product

    def count_sales_for_product(self, product_id: int) -> int:
        return self.db.query(func.count(Sale.id)).filter(
            Sale.product_id == product_id
        ).scalar() or 0

    def delete_product(self, product: Product):
        self.db.delete(product)
        self.db.commit()
