# tienda/modules/sales/service.py
import logging
from datetime import datetime
from typing import List, Optional, Dict, Any
from urllib.parse import quote

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tienda.config.settings import settings
from tienda.core.exceptions import (
    StoreError, ValidationError, ProductNotFound, SaleNotFound, InsufficientStock
)
from tienda.modules.currency.service import convert_usd_to_ves
from tienda.shared.database.models import Sale, SaleLog
from .repository import SalesRepository
from .schemas import SaleCreateRequest, SaleInquiryRequest

logger = logging.getLogger(__name__)

class SalesService:
    """
    Libro de ventas manual: registra ventas descontando stock y las revierte al eliminarlas
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = SalesRepository(db)

    # ==================== REGISTRO DE VENTAS ====================

    async def create_sale(self, sale_data: SaleCreateRequest, exchange_rate: float) -> Sale:
        """
        Registrar venta y descontar stock en una sola transacción.

        El descuento es un UPDATE condicional (stock >= cantidad), de modo que
        dos ventas concurrentes no pueden dejar el stock en negativo.
        """
        if sale_data.quantity < 1:
            raise ValidationError("La cantidad debe ser mayor a 0", quantity=sale_data.quantity)
        if exchange_rate <= 0:
            raise ValidationError("La tasa de cambio debe ser mayor a 0", exchange_rate=exchange_rate)

        product = self.repository.get_product_by_id(sale_data.product_id)
        if not product:
            raise ProductNotFound(sale_data.product_id)

        if product.stock < sale_data.quantity:
            raise InsufficientStock(product.stock)

        price_usd = sale_data.price_usd if sale_data.price_usd is not None else product.price_usd
        total_usd = price_usd * sale_data.quantity
        total_ves = convert_usd_to_ves(total_usd, exchange_rate)

        try:
            updated = self.repository.decrease_product_stock(product.id, sale_data.quantity)
            if updated == 0:
                # El producto cambió entre la lectura y la escritura
                self.db.rollback()
                current = self.repository.get_product_by_id(sale_data.product_id)
                if not current:
                    raise ProductNotFound(sale_data.product_id)
                raise InsufficientStock(current.stock)

            sale = self.repository.add_sale(
                product_id=product.id,
                quantity=sale_data.quantity,
                price_usd=price_usd,
                total_usd=total_usd,
                exchange_rate=exchange_rate,
                total_ves=total_ves,
                notes=sale_data.notes
            )
            self.db.commit()

        except StoreError:
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error registrando venta: {str(e)}")
            raise StoreError("Error al registrar la venta")

        logger.info(
            f"Venta {sale.id} registrada: producto {product.id} x{sale_data.quantity} "
            f"= ${total_usd:.2f} (Bs. {total_ves:.2f})"
        )
        return self.repository.get_sale_by_id(sale.id)

    async def delete_sale(self, sale_id: int) -> Dict[str, Any]:
        """
        Eliminar venta y devolver su cantidad al stock del producto (inverso exacto de create_sale)
        """
        sale = self.repository.get_sale_by_id(sale_id)
        if not sale:
            raise SaleNotFound(sale_id)

        product_id = sale.product_id
        quantity = sale.quantity

        try:
            self.repository.remove_sale(sale)
            self.repository.increase_product_stock(product_id, quantity)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error eliminando venta {sale_id}: {str(e)}")
            raise StoreError("Error al eliminar la venta")

        logger.info(f"Venta {sale_id} eliminada; stock restaurado +{quantity} en producto {product_id}")
        return {
            "success": True,
            "sale_id": sale_id,
            "product_id": product_id,
            "restored_quantity": quantity,
            "message": "Venta eliminada y stock restaurado"
        }

    # ==================== CONSULTAS ====================

    async def get_sales(self) -> List[Sale]:
        return self.repository.get_sales()

    async def get_sales_stats(self) -> Dict[str, Any]:
        """
        Estadísticas globales; "hoy" empieza a la medianoche local
        """
        today_start = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)
        return self.repository.get_sales_totals(since=today_start)

    # ==================== INTENCIÓN DE COMPRA (WHATSAPP) ====================

    async def log_sale_inquiry(self, inquiry: SaleInquiryRequest) -> Dict[str, Any]:
        """
        Registrar la intención de compra de un visitante y construir el enlace de WhatsApp.

        El enlace se devuelve aunque falle el registro.
        """
        price_ves = convert_usd_to_ves(inquiry.price_usd, inquiry.exchange_rate)

        sale_log: Optional[SaleLog] = None
        try:
            sale_log = self.repository.create_sale_log(
                product_name=inquiry.product_name,
                price_usd=inquiry.price_usd,
                exchange_rate=inquiry.exchange_rate,
                price_ves=price_ves
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning(f"No se pudo registrar la intención de compra: {str(e)}")

        return {
            "success": True,
            "whatsapp_url": build_whatsapp_url(inquiry.product_name, inquiry.price_usd, price_ves),
            "sale_log_id": sale_log.id if sale_log else None
        }

    async def get_sale_logs(self, limit: int = 100) -> List[SaleLog]:
        return self.repository.get_sale_logs(limit)


def build_whatsapp_url(product_name: str, price_usd: float, price_ves: float) -> str:
    """
    Enlace wa.me con el resumen del pedido
    """
    message = (
        f"Hola {settings.store_contact_name}, quiero {product_name}. "
        f"Precio: ${price_usd:.2f} (Bs. {price_ves:.2f})."
    )
    return f"https://wa.me/{settings.whatsapp_phone}?text={quote(message, safe='')}"
