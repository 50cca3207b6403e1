# tienda/modules/slides/repository.py
from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy import func

from tienda.shared.database.models import HeroSlide

class SlidesRepository:
    """
    Repositorio de slides del hero
    """

    def __init__(self, db: Session):
        self.db = db

    def get_slides(self, active_only: bool = False) -> List[HeroSlide]:
        query = self.db.query(HeroSlide)
        if active_only:
            query = query.filter(HeroSlide.is_active.is_(True))
        return query.order_by(HeroSlide.order.asc(), HeroSlide.id.asc()).all()

    def get_slide_by_id(self, slide_id: int) -> Optional[HeroSlide]:
        return self.db.query(HeroSlide).filter(HeroSlide.id == slide_id).first()

    def count_slides(self) -> int:
        return self.db.query(func.count(HeroSlide.id)).scalar() or 0

    def create_slide(self, slide_data: Dict[str, Any]) -> HeroSlide:
        slide = HeroSlide(**slide_data)

        self.db.add(slide)
        self.db.commit()
        self.db.refresh(slide)

        return slide

    def update_slide(self, slide: HeroSlide, changes: Dict[str, Any]) -> HeroSlide:
        for field, value in changes.items():
            setattr(slide, field, value)

        self.db.commit()
        self.db.refresh(slide)

        return slide

    def delete_slide(self, slide: HeroSlide):
        self.db.delete(slide)
        self.db.commit()
