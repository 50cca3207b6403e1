# tienda/modules/sales/repository.py
from datetime import datetime
from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import func, desc

from tienda.shared.database.models import Sale, SaleLog, Product

class SalesRepository:
    """
    Repositorio para todas las operaciones de datos relacionadas con ventas.

    Los métodos de stock y de venta no hacen commit: el servicio agrupa
    ambos cambios en una sola transacción.
    """

    def __init__(self, db: Session):
        self.db = db

    # ==================== PRODUCTOS ====================

    def get_product_by_id(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def decrease_product_stock(self, product_id: int, quantity: int) -> int:
        """
        Descontar stock solo si alcanza; retorna filas afectadas (0 ó 1)
        """
        return self.db.query(Product).filter(
            Product.id == product_id,
            Product.stock >= quantity
        ).update(
            {Product.stock: Product.stock - quantity},
            synchronize_session=False
        )

    def increase_product_stock(self, product_id: int, quantity: int) -> int:
        return self.db.query(Product).filter(
            Product.id == product_id
        ).update(
            {Product.stock: Product.stock + quantity},
            synchronize_session=False
        )

    # ==================== VENTAS ====================

    def add_sale(
        self,
        product_id: int,
        quantity: int,
        price_usd: float,
        total_usd: float,
        exchange_rate: float,
        total_ves: float,
        notes: Optional[str]
    ) -> Sale:
        sale = Sale(
            product_id=product_id,
            quantity=quantity,
            price_usd=price_usd,
            total_usd=total_usd,
            exchange_rate=exchange_rate,
            total_ves=total_ves,
            notes=notes,
            created_at=datetime.now()
        )

        self.db.add(sale)
        self.db.flush()

        return sale

    def get_sale_by_id(self, sale_id: int) -> Optional[Sale]:
        return self.db.query(Sale).options(
            joinedload(Sale.product)
        ).filter(Sale.id == sale_id).first()

    def get_sales(self) -> List[Sale]:
        """
        Todas las ventas con su producto, más recientes primero
        """
        return self.db.query(Sale).options(
            joinedload(Sale.product)
        ).order_by(desc(Sale.created_at), desc(Sale.id)).all()

    def remove_sale(self, sale: Sale):
        self.db.delete(sale)

    def get_sales_totals(self, since: datetime) -> Dict[str, Any]:
        """
        Agregados sobre todas las ventas y conteo desde `since`
        """
        total_sales, total_revenue, total_revenue_ves = self.db.query(
            func.count(Sale.id),
            func.coalesce(func.sum(Sale.total_usd), 0.0),
            func.coalesce(func.sum(Sale.total_ves), 0.0)
        ).one()

        today_sales = self.db.query(func.count(Sale.id)).filter(
            Sale.created_at >= since
        ).scalar()

        return {
            "total_sales": total_sales or 0,
            "total_revenue": float(total_revenue or 0),
            "total_revenue_ves": float(total_revenue_ves or 0),
            "today_sales": today_sales or 0
        }

    # ==================== LOG DE INTENCIONES ====================

    def create_sale_log(
        self,
        product_name: str,
        price_usd: float,
        exchange_rate: float,
        price_ves: float
    ) -> SaleLog:
        sale_log = SaleLog(
            product_name=product_name,
            price_usd_at_moment=price_usd,
            exchange_rate=exchange_rate,
            price_ves_calculated=price_ves,
            created_at=datetime.now()
        )

        self.db.add(sale_log)
        self.db.commit()
        self.db.refresh(sale_log)

        return sale_log

    def get_sale_logs(self, limit: int = 100) -> List[SaleLog]:
        return self.db.query(SaleLog).order_by(
            desc(SaleLog.created_at), desc(SaleLog.id)
        ).limit(limit).all()
