# tienda/modules/sales/router.py
from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from tienda.config.database import get_db
from tienda.modules.currency.service import get_current_rate
from .service import SalesService
from .schemas import (
    SaleCreateRequest, SaleResult, SalesListResponse,
    SalesStatsResponse, SaleLogListResponse
)

router = APIRouter(prefix="/sales", tags=["Admin - Ventas"])

# ==================== REGISTRO DE VENTAS ====================

@router.get("", response_model=SalesListResponse)
async def list_sales(db: Session = Depends(get_db)):
    """
    Historial de ventas con su producto, más recientes primero
    """
    service = SalesService(db)
    sales = await service.get_sales()
    return SalesListResponse(sales=sales, total=len(sales))

@router.post("", response_model=SaleResult, status_code=201)
async def create_sale(sale_data: SaleCreateRequest, db: Session = Depends(get_db)):
    """
    Registrar venta manual

    Incluye:
    - Precio y tasa congelados al momento de la venta
    - Descuento automático de stock (409 insufficient_stock si no alcanza)
    - Si no se envía la tasa se usa la tasa BCV vigente
    """
    service = SalesService(db)

    exchange_rate = sale_data.exchange_rate
    if exchange_rate is None:
        exchange_rate = await run_in_threadpool(get_current_rate)

    sale = await service.create_sale(sale_data, exchange_rate=exchange_rate)
    return SaleResult(message="Venta registrada exitosamente", sale=sale)

@router.delete("/{sale_id}")
async def delete_sale(sale_id: int, db: Session = Depends(get_db)):
    """
    Eliminar venta y restaurar el stock del producto
    """
    service = SalesService(db)
    return await service.delete_sale(sale_id)

# ==================== ESTADÍSTICAS ====================

@router.get("/stats", response_model=SalesStatsResponse)
async def get_sales_stats(db: Session = Depends(get_db)):
    service = SalesService(db)
    stats = await service.get_sales_stats()
    return SalesStatsResponse(**stats)

@router.get("/logs", response_model=SaleLogListResponse)
async def get_sale_logs(
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db)
):
    """
    Intenciones de compra registradas desde la tienda (WhatsApp)
    """
    service = SalesService(db)
    logs = await service.get_sale_logs(limit)
    return SaleLogListResponse(logs=logs)
