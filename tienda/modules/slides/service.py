# tienda/modules/slides/service.py
import logging
from typing import List

from sqlalchemy.orm import Session

from tienda.core.exceptions import SlideNotFound
from tienda.shared.database.models import HeroSlide
from .repository import SlidesRepository
from .schemas import HeroSlideCreate, HeroSlideUpdate

logger = logging.getLogger(__name__)

NULLABLE_SLIDE_FIELDS = {"badge"}

class SlidesService:
    """
    Slides del carrusel principal: ordenables y activables
    """

    def __init__(self, db: Session):
        self.db = db
        self.repository = SlidesRepository(db)

    async def get_all_slides(self) -> List[HeroSlide]:
        return self.repository.get_slides()

    async def get_active_slides(self) -> List[HeroSlide]:
        return self.repository.get_slides(active_only=True)

    async def get_slide(self, slide_id: int) -> HeroSlide:
        slide = self.repository.get_slide_by_id(slide_id)
        if not slide:
            raise SlideNotFound(slide_id)
        return slide

    async def create_slide(self, slide_data: HeroSlideCreate) -> HeroSlide:
        data = slide_data.model_dump()
        if data["order"] is None:
            data["order"] = self.repository.count_slides() + 1

        slide = self.repository.create_slide(data)
        logger.info(f"Slide creado: {slide.id} (orden {slide.order})")
        return slide

    async def update_slide(self, slide_id: int, slide_data: HeroSlideUpdate) -> HeroSlide:
        slide = await self.get_slide(slide_id)
        changes = {
            field: value
            for field, value in slide_data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_SLIDE_FIELDS
        }
        return self.repository.update_slide(slide, changes)

    async def toggle_active(self, slide_id: int) -> HeroSlide:
        slide = await self.get_slide(slide_id)
        return self.repository.update_slide(slide, {"is_active": not slide.is_active})

    async def delete_slide(self, slide_id: int) -> None:
        slide = await self.get_slide(slide_id)
        self.repository.delete_slide(slide)
        logger.info(f"Slide eliminado: {slide_id}")
