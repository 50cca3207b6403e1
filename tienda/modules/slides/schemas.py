from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import datetime

class SlideBaseModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

# ==================== REQUEST SCHEMAS ====================

class HeroSlideCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    subtitle: str = ""
    button_text: str = Field(..., min_length=1, max_length=100)
    button_link: str = Field(..., min_length=1, max_length=255)
    image: str = Field(..., min_length=1)
    badge: Optional[str] = Field(None, max_length=100)
    is_active: bool = True
    order: Optional[int] = Field(None, description="Posición; por defecto al final")

class HeroSlideUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    subtitle: Optional[str] = None
    button_text: Optional[str] = Field(None, min_length=1, max_length=100)
    button_link: Optional[str] = Field(None, min_length=1, max_length=255)
    image: Optional[str] = Field(None, min_length=1)
    badge: Optional[str] = Field(None, max_length=100)
    is_active: Optional[bool] = None
    order: Optional[int] = None

# ==================== RESPONSE SCHEMAS ====================

class HeroSlideResponse(SlideBaseModel):
    id: int
    title: str
    subtitle: str
    button_text: str
    button_link: str
    image: str
    badge: Optional[str]
    is_active: bool
    order: int
    created_at: datetime

class HeroSlideResult(SlideBaseModel):
    success: bool = True
    slide: HeroSlideResponse

class HeroSlideListResponse(SlideBaseModel):
    success: bool = True
    slides: List[HeroSlideResponse]
