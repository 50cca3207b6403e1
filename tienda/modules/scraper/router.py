# tienda/modules/scraper/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tienda.config.database import get_db
from .service import ScraperService
from .schemas import ScrapeRequest, ScrapeResponse, ImportScrapedRequest, ImportScrapedResponse

router = APIRouter(prefix="/importer", tags=["Admin - Importador"])

@router.post("/scrape", response_model=ScrapeResponse)
async def scrape_product(request: ScrapeRequest, db: Session = Depends(get_db)):
    """
    Extraer datos de un producto de AliExpress/Alibaba

    Los datos son orientativos: el operador los revisa y edita antes de importar.
    """
    service = ScraperService(db)
    scraped = await service.scrape_product(request.url)
    return ScrapeResponse(data=scraped)

@router.post("/import", response_model=ImportScrapedResponse, status_code=201)
async def import_scraped_product(
    import_data: ImportScrapedRequest,
    db: Session = Depends(get_db)
):
    service = ScraperService(db)
    product = await service.import_scraped_product(import_data)
    return ImportScrapedResponse(product_id=product.id, message="Producto importado exitosamente")
