# tienda/modules/scraper/service.py
import logging
from typing import Optional
from urllib.parse import urlparse

import requests
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from tienda.config.settings import settings
from tienda.core.exceptions import (
    ValidationError, UnsupportedSource, FetchFailed, ExtractionFailed
)
from tienda.modules.catalog.schemas import ProductCreate
from tienda.modules.catalog.service import CatalogService
from tienda.shared.database.models import Product
from . import extractors
from .schemas import (
    MAX_NAME_LENGTH, ProductSource, SOURCE_LABELS, ScrapedProduct, ImportScrapedRequest
)

logger = logging.getLogger(__name__)

KNOWN_SOURCES = {
    "aliexpress.com": ProductSource.aliexpress,
    "alibaba.com": ProductSource.alibaba,
}

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "es-ES,es;q=0.9,en;q=0.8",
    "Cache-Control": "no-cache",
}

MIN_TITLE_LENGTH = 5


def detect_source(url: str) -> Optional[ProductSource]:
    """
    Marketplace según el host de la URL (incluye subdominios)
    """
    host = (urlparse(url).hostname or "").lower()
    for domain, source in KNOWN_SOURCES.items():
        if host == domain or host.endswith("." + domain):
            return source
    return None


def parse_product_page(page: str, source: ProductSource) -> ScrapedProduct:
    """
    Aplicar los extractores sobre el HTML crudo.

    Sin un título de al menos 5 caracteres se asume que la página bloqueó
    la solicitud o cambió de estructura.
    """
    title = extractors.extract_title(page)
    if not title or len(title) < MIN_TITLE_LENGTH:
        raise ExtractionFailed()
    title = title[:MAX_NAME_LENGTH].rstrip()

    description = extractors.extract_description(page)
    if not description:
        description = f"Producto importado desde {SOURCE_LABELS[source]}: {title}"

    return ScrapedProduct(
        title=title,
        description=description,
        price=extractors.extract_price(page),
        images=extractors.extract_images(page),
        attributes={},
        source=source
    )


class ScraperService:
    """
    Importación de productos desde AliExpress/Alibaba (mejor esfuerzo)
    """

    def __init__(self, db: Session):
        self.db = db
        self.catalog = CatalogService(db)

    async def scrape_product(self, url: str) -> ScrapedProduct:
        """
        Descargar la página y extraer título, descripción, precio e imágenes.
        El resultado no se guarda.
        """
        url = (url or "").strip()
        if not url:
            raise ValidationError("Por favor ingresa una URL")

        source = detect_source(url)
        if source is None:
            raise UnsupportedSource(url)

        try:
            response = await run_in_threadpool(
                requests.get,
                url,
                headers=BROWSER_HEADERS,
                timeout=settings.scraper_timeout_seconds
            )
        except requests.RequestException as e:
            logger.warning(f"Scraping fallido ({url}): {str(e)}")
            raise FetchFailed(reason=str(e))

        if not response.ok:
            logger.warning(f"Scraping fallido ({url}): HTTP {response.status_code}")
            raise FetchFailed(status_code=response.status_code)

        scraped = parse_product_page(response.text, source)
        logger.info(
            f"Producto extraído de {source.value}: '{scraped.title}' "
            f"(precio={scraped.price}, imágenes={len(scraped.images)})"
        )
        return scraped

    async def import_scraped_product(self, import_data: ImportScrapedRequest) -> Product:
        """
        Crear el producto en el catálogo a partir del registro revisado por el operador
        """
        scraped = import_data.product

        try:
            product_data = ProductCreate(
                name=import_data.custom_name or scraped.title,
                description=scraped.description,
                price_usd=import_data.custom_price or scraped.price or settings.import_default_price,
                is_offer=False,
                stock=settings.import_default_stock,
                image=scraped.images[0] if scraped.images else settings.placeholder_image_url,
                category_id=import_data.category_id
            )
        except PydanticValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
            logger.warning(f"Producto importado inválido: {str(e)}")
            raise ValidationError(
                "Los datos del producto importado no son válidos",
                fields=fields
            )

        return await self.catalog.create_product(product_data)
