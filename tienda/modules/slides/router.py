# tienda/modules/slides/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tienda.config.database import get_db
from .service import SlidesService
from .schemas import HeroSlideCreate, HeroSlideUpdate, HeroSlideResult, HeroSlideListResponse

router = APIRouter(prefix="/slides", tags=["Admin - Slides"])

@router.get("", response_model=HeroSlideListResponse)
async def list_slides(db: Session = Depends(get_db)):
    """
    Todos los slides (activos e inactivos) en orden de visualización
    """
    service = SlidesService(db)
    return HeroSlideListResponse(slides=await service.get_all_slides())

@router.post("", response_model=HeroSlideResult, status_code=201)
async def create_slide(slide_data: HeroSlideCreate, db: Session = Depends(get_db)):
    service = SlidesService(db)
    return HeroSlideResult(slide=await service.create_slide(slide_data))

@router.put("/{slide_id}", response_model=HeroSlideResult)
async def update_slide(slide_id: int, slide_data: HeroSlideUpdate, db: Session = Depends(get_db)):
    service = SlidesService(db)
    return HeroSlideResult(slide=await service.update_slide(slide_id, slide_data))

@router.post("/{slide_id}/toggle", response_model=HeroSlideResult)
async def toggle_slide(slide_id: int, db: Session = Depends(get_db)):
    service = SlidesService(db)
    return HeroSlideResult(slide=await service.toggle_active(slide_id))

@router.delete("/{slide_id}")
async def delete_slide(slide_id: int, db: Session = Depends(get_db)):
    service = SlidesService(db)
    await service.delete_slide(slide_id)
    return {"success": True, "slide_id": slide_id, "message": "Slide eliminado"}
