"""Menu schemas"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, Field


class MenuImageCreate(BaseModel):
    """Add menu pages by their uploaded URLs"""
    images: List[str] = Field(min_length=1)


class MenuImageUpdate(BaseModel):
    """Replace a single menu page"""
    url: str = Field(min_length=1, max_length=500)
    alt: Optional[str] = Field(None, max_length=200)


class MenuImageResponse(BaseModel):
    """Menu page"""
    id: UUID
    restaurant_id: UUID
    url: str
    alt: Optional[str]
    uploaded_at: datetime

    class Config:
        from_attributes = True


class MenuImagesCreatedResponse(BaseModel):
    message: str
    images: List[MenuImageResponse]


class MenuImageUpdatedResponse(BaseModel):
    message: str
    image: MenuImageResponse
