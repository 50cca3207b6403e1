from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Float, Text, ForeignKey
from sqlalchemy.orm import relationship
from tienda.config.database import Base

class TimestampMixin:
    """Mixin para timestamps automáticos (hora local)"""
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

# ===== CATÁLOGO =====

class Category(Base):
    """Modelo de Categoría"""
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    # Relationships
    products = relationship("Product", back_populates="category")

class Product(Base, TimestampMixin):
    """Modelo de Producto"""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    price_usd = Column(Float, nullable=False)
    old_price_usd = Column(Float)
    is_offer = Column(Boolean, default=False, nullable=False)
    stock = Column(Integer, default=0, nullable=False)
    image = Column(Text, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)

    # Relationships
    category = relationship("Category", back_populates="products")
    sales = relationship("Sale", back_populates="product")

# ===== VENTAS =====

class Sale(Base):
    """Venta confirmada por el administrador; descuenta stock"""
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    price_usd = Column(Float, nullable=False)
    total_usd = Column(Float, nullable=False)
    exchange_rate = Column(Float, nullable=False)
    total_ves = Column(Float, nullable=False)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.now, nullable=False, index=True)

    # Relationships
    product = relationship("Product", back_populates="sales")

class SaleLog(Base):
    """Intención de compra desde la tienda (solo analítica, sin FK)"""
    __tablename__ = "sale_logs"

    id = Column(Integer, primary_key=True, index=True)
    product_name = Column(String(255), nullable=False)
    price_usd_at_moment = Column(Float, nullable=False)
    exchange_rate = Column(Float, nullable=False)
    price_ves_calculated = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

# ===== HERO =====

class HeroSlide(Base):
    """Slide del carrusel principal de la tienda"""
    __tablename__ = "hero_slides"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    subtitle = Column(Text, nullable=False, default="")
    button_text = Column(String(100), nullable=False)
    button_link = Column(String(255), nullable=False)
    image = Column(Text, nullable=False)
    badge = Column(String(100))
    is_active = Column(Boolean, default=True, nullable=False)
    order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
