# tienda/modules/catalog/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from tienda.config.database import get_db
from .service import CatalogService
from .schemas import (
    CategoryCreate, CategoryUpdate, CategoryResult, CategoryListResponse,
    ProductCreate, ProductUpdate, ProductResult, ProductListResponse
)

router = APIRouter(prefix="/catalog", tags=["Admin - Catálogo"])

# ==================== CATEGORÍAS ====================

@router.get("/categories", response_model=CategoryListResponse)
async def list_categories(db: Session = Depends(get_db)):
    """
    Listar categorías ordenadas por nombre
    """
    service = CatalogService(db)
    categories = await service.get_categories()
    return CategoryListResponse(categories=categories)

@router.post("/categories", response_model=CategoryResult, status_code=201)
async def create_category(
    category_data: CategoryCreate,
    db: Session = Depends(get_db)
):
    service = CatalogService(db)
    category = await service.create_category(category_data)
    return CategoryResult(category=category)

@router.put("/categories/{category_id}", response_model=CategoryResult)
async def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    db: Session = Depends(get_db)
):
    service = CatalogService(db)
    category = await service.update_category(category_id, category_data)
    return CategoryResult(category=category)

@router.delete("/categories/{category_id}")
async def delete_category(category_id: int, db: Session = Depends(get_db)):
    """
    Eliminar categoría

    Se rechaza con 409 (category_in_use) mientras algún producto la use.
    """
    service = CatalogService(db)
    await service.delete_category(category_id)
    return {"success": True, "category_id": category_id, "message": "Categoría eliminada"}

# ==================== PRODUCTOS ====================

@router.get("/products", response_model=ProductListResponse)
async def list_products(
    category_id: Optional[int] = Query(None, description="Filtrar por categoría"),
    offers_only: bool = Query(False, description="Solo productos en oferta"),
    db: Session = Depends(get_db)
):
    service = CatalogService(db)
    products = await service.get_products(category_id=category_id, offers_only=offers_only)
    return ProductListResponse(products=products, total=len(products))

@router.get("/products/{product_id}", response_model=ProductResult)
async def get_product(product_id: int, db: Session = Depends(get_db)):
    service = CatalogService(db)
    product = await service.get_product(product_id)
    return ProductResult(product=product)

@router.post("/products", response_model=ProductResult, status_code=201)
async def create_product(product_data: ProductCreate, db: Session = Depends(get_db)):
    service = CatalogService(db)
    product = await service.create_product(product_data)
    return ProductResult(product=product)

@router.put("/products/{product_id}", response_model=ProductResult)
async def update_product(
    product_id: int,
    product_data: ProductUpdate,
    db: Session = Depends(get_db)
):
    """
    Actualización parcial; el stock también puede ajustarse aquí manualmente
    """
    service = CatalogService(db)
    product = await service.update_product(product_id, product_data)
    return ProductResult(product=product)

@router.delete("/products/{product_id}")
async def delete_product(product_id: int, db: Session = Depends(get_db)):
    service = CatalogService(db)
    await service.delete_product(product_id)
    return {"success": True, "product_id": product_id, "message": "Producto eliminado"}
